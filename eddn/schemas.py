"""Schema identifiers and the routing table that maps them to decoders.

Routing checks the identifier in a fixed order: test traffic is refused
first, then the identifier must be present in the table, then its version
must still be decoded. Only after all three checks is the payload touched.
"""

from __future__ import annotations

import dataclasses
import enum
import types
import typing as typ

import msgspec

from eddn.errors import (
    PayloadDecodeError,
    UnsupportedSchemaError,
    UnsupportedVersionError,
)
from eddn.journal import JournalEvent, decode_journal_event
from eddn.payloads import Blackmarket, Commodity, Outfitting, Shipyard

if typ.TYPE_CHECKING:
    import collections.abc as cabc

SCHEMA_BASE = "http://schemas.elite-markets.net/eddn"
TEST_SUFFIX = "/test"

Payload = Commodity | Outfitting | Blackmarket | Shipyard | JournalEvent
PayloadDecoder = typ.Callable[[str, msgspec.Raw], Payload]


class SchemaFamily(enum.StrEnum):
    """Message families published on the relay."""

    COMMODITY = "commodity"
    JOURNAL = "journal"
    OUTFITTING = "outfitting"
    BLACKMARKET = "blackmarket"
    SHIPYARD = "shipyard"


def schema_ref(family: SchemaFamily | str, version: int) -> str:
    """Return the production identifier for a family and version."""
    return f"{SCHEMA_BASE}/{family}/{version}"


def is_test_traffic(ref: str) -> bool:
    """Return True for identifiers marking non-production messages."""
    return ref.endswith(TEST_SUFFIX)


@dataclasses.dataclass(frozen=True, slots=True)
class SchemaRoute:
    """One routing-table entry.

    Attributes
    ----------
    family
        Schema family the identifier belongs to.
    version
        Schema version number.
    decoder
        Payload decoder, or ``None`` for versions that are deliberately
        not decoded.

    """

    family: SchemaFamily
    version: int
    decoder: PayloadDecoder | None = None

    @property
    def schema_ref(self) -> str:
        """Return the identifier this route is keyed under."""
        return schema_ref(self.family, self.version)

    @property
    def supported(self) -> bool:
        """Return True when messages on this route are decoded."""
        return self.decoder is not None


PayloadT = typ.TypeVar("PayloadT", bound=msgspec.Struct)


def _struct_decoder(
    model: type[PayloadT],
) -> cabc.Callable[[str, msgspec.Raw], PayloadT]:
    """Build a decoder that reads a raw payload into ``model``."""
    decoder = msgspec.json.Decoder(model)

    def _decode(ref: str, message: msgspec.Raw) -> PayloadT:
        try:
            return decoder.decode(message)
        except msgspec.DecodeError as exc:
            raise PayloadDecodeError.for_schema(ref, str(exc)) from exc

    return _decode


def _journal_decoder(ref: str, message: msgspec.Raw) -> JournalEvent:
    """Resolve a journal payload; its errors propagate unchanged."""
    del ref
    return decode_journal_event(message)


def _build_table(routes: cabc.Iterable[SchemaRoute]) -> cabc.Mapping[str, SchemaRoute]:
    return types.MappingProxyType({route.schema_ref: route for route in routes})


ROUTES: cabc.Mapping[str, SchemaRoute] = _build_table([
    SchemaRoute(SchemaFamily.COMMODITY, 1),
    SchemaRoute(SchemaFamily.COMMODITY, 2),
    SchemaRoute(SchemaFamily.COMMODITY, 3, _struct_decoder(Commodity)),
    SchemaRoute(SchemaFamily.JOURNAL, 1, _journal_decoder),
    SchemaRoute(SchemaFamily.OUTFITTING, 1),
    SchemaRoute(SchemaFamily.OUTFITTING, 2, _struct_decoder(Outfitting)),
    SchemaRoute(SchemaFamily.BLACKMARKET, 1, _struct_decoder(Blackmarket)),
    SchemaRoute(SchemaFamily.SHIPYARD, 1),
    SchemaRoute(SchemaFamily.SHIPYARD, 2, _struct_decoder(Shipyard)),
])


def lookup_route(ref: str) -> SchemaRoute:
    """Return the supported route for a schema identifier.

    Raises
    ------
    UnsupportedSchemaError
        If the identifier is test traffic or absent from the table.
    UnsupportedVersionError
        If the identifier names a version that is not decoded.

    """
    if is_test_traffic(ref):
        raise UnsupportedSchemaError.test_traffic(ref)
    route = ROUTES.get(ref)
    if route is None:
        raise UnsupportedSchemaError.unknown(ref)
    if not route.supported:
        raise UnsupportedVersionError(ref, route.family.value, route.version)
    return route


def route_payload(ref: str, message: msgspec.Raw) -> tuple[SchemaRoute, Payload]:
    """Route a raw payload to its decoder and return the typed result."""
    route = lookup_route(ref)
    decoder = typ.cast("PayloadDecoder", route.decoder)
    return route, decoder(ref, message)


__all__ = [
    "ROUTES",
    "SCHEMA_BASE",
    "TEST_SUFFIX",
    "Payload",
    "PayloadDecoder",
    "SchemaFamily",
    "SchemaRoute",
    "is_test_traffic",
    "lookup_route",
    "route_payload",
    "schema_ref",
]
