"""Decode compressed relay messages into typed records.

Example:
>>> from eddn.decoder import decode_message
>>> record = decode_message(zlib_bytes)  # doctest: +SKIP
>>> record.family, type(record.payload).__name__  # doctest: +SKIP
('journal', 'FSDJump')

"""

from __future__ import annotations

import msgspec

from eddn.compression import MessageBody, decompress
from eddn.config import DecoderConfig
from eddn.envelope import Header, parse_envelope  # noqa: TC001
from eddn.errors import EDDNDecodeError
from eddn.logging import get_logger, log_debug
from eddn.schemas import Payload, SchemaFamily, route_payload  # noqa: TC001

logger = get_logger(__name__)


class DecodedMessage(msgspec.Struct, kw_only=True, frozen=True):
    """A fully resolved relay message.

    Attributes
    ----------
    schema_ref
        Schema identifier the message was published under.
    family
        Schema family selected by the identifier.
    version
        Schema version selected by the identifier.
    header
        Sender metadata, unchanged from the envelope.
    payload
        Market payload variant, or the journal event variant for journal
        messages.

    """

    schema_ref: str
    family: SchemaFamily
    version: int
    header: Header
    payload: Payload


class MessageDecoder:
    """Stateless decoder for relay messages.

    Instances hold only immutable configuration and may be shared across
    threads.
    """

    def __init__(self, config: DecoderConfig | None = None) -> None:
        """Create a decoder using ``config`` or the default configuration."""
        self._config = config or DecoderConfig()

    @property
    def config(self) -> DecoderConfig:
        """Return the decoder configuration."""
        return self._config

    def decode(self, raw: MessageBody) -> DecodedMessage:
        """Decompress and decode one relay message body.

        Raises
        ------
        EDDNDecodeError
            Subclass describing the first failing stage.

        """
        try:
            data = decompress(raw, max_output_bytes=self._config.max_message_bytes)
        except EDDNDecodeError as exc:
            log_debug(logger, "Rejected message: %s (%s)", exc, exc.reason)
            raise
        return self.decode_envelope(data)

    def decode_envelope(self, data: bytes) -> DecodedMessage:
        """Decode an already decompressed message body.

        Raises
        ------
        EDDNDecodeError
            Subclass describing the first failing stage.

        """
        try:
            envelope = parse_envelope(data)
            route, payload = route_payload(envelope.schema_ref, envelope.message)
        except EDDNDecodeError as exc:
            log_debug(logger, "Rejected message: %s (%s)", exc, exc.reason)
            raise

        log_debug(
            logger,
            "Decoded %s/%d message as %s",
            route.family,
            route.version,
            type(payload).__name__,
        )
        return DecodedMessage(
            schema_ref=envelope.schema_ref,
            family=route.family,
            version=route.version,
            header=envelope.header,
            payload=payload,
        )


_default_decoder = MessageDecoder()


def decode_message(raw: MessageBody) -> DecodedMessage:
    """Decode one compressed relay message with the default configuration."""
    return _default_decoder.decode(raw)


__all__ = ["DecodedMessage", "MessageDecoder", "decode_message"]
