"""Decode Elite Dangerous Data Network relay messages into typed records."""

from __future__ import annotations

from .compression import decompress
from .config import DecoderConfig
from .decoder import DecodedMessage, MessageDecoder, decode_message
from .envelope import Envelope, Header, parse_envelope
from .errors import (
    DecodeFailureReason,
    DecoderConfigError,
    DecompressionError,
    EDDNDecodeError,
    InvalidJournalPayloadError,
    MalformedEnvelopeError,
    PayloadDecodeError,
    UnrecognizedEventError,
    UnsupportedSchemaError,
    UnsupportedVersionError,
)
from .journal import (
    Docked,
    FSDJump,
    JournalEvent,
    ScanPlanet,
    ScanStar,
    decode_journal_event,
    dispatch_journal_event,
)
from .payloads import Blackmarket, Commodity, CommodityEntry, Outfitting, Shipyard
from .schemas import SchemaFamily, SchemaRoute, lookup_route, route_payload, schema_ref

__all__ = [
    "Blackmarket",
    "Commodity",
    "CommodityEntry",
    "DecodeFailureReason",
    "DecodedMessage",
    "DecoderConfig",
    "DecoderConfigError",
    "DecompressionError",
    "Docked",
    "EDDNDecodeError",
    "Envelope",
    "FSDJump",
    "Header",
    "InvalidJournalPayloadError",
    "JournalEvent",
    "MalformedEnvelopeError",
    "MessageDecoder",
    "Outfitting",
    "PayloadDecodeError",
    "ScanPlanet",
    "ScanStar",
    "SchemaFamily",
    "SchemaRoute",
    "Shipyard",
    "UnrecognizedEventError",
    "UnsupportedSchemaError",
    "UnsupportedVersionError",
    "decode_journal_event",
    "decode_message",
    "decompress",
    "dispatch_journal_event",
    "lookup_route",
    "parse_envelope",
    "route_payload",
    "schema_ref",
]
