"""Journal event variants and the event-name dispatcher.

Journal payloads are polymorphic on their ``event`` field. Most events map
to a variant by name alone, but ``Scan`` covers both stars and planets and
is split on the presence of ``StarType``. The payload is sniffed as a plain
mapping only long enough to pick the variant; it is then converted straight
into the variant's fixed field set.
"""

from __future__ import annotations

import types
import typing as typ

import msgspec

from eddn.errors import (
    InvalidJournalPayloadError,
    PayloadDecodeError,
    UnrecognizedEventError,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

SCAN_EVENT = "Scan"
STAR_MARKER_FIELD = "StarType"


class JournalEvent(
    msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True, rename="pascal"
):
    """Fields shared by every journal event.

    Attributes
    ----------
    event
        Journal event name, for example ``"FSDJump"``.
    timestamp
        ISO-8601 time the event was written to the journal.
    star_system
        Name of the system the event happened in.
    star_pos
        Galactic ``(x, y, z)`` coordinates of the system, in light years.
    system_address
        Frontier's numeric system identifier.

    """

    event: str = msgspec.field(name="event")
    timestamp: str | None = msgspec.field(default=None, name="timestamp")
    star_system: str | None = None
    star_pos: tuple[float, float, float] | None = None
    system_address: int | None = None


class Faction(
    msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True, rename="pascal"
):
    """Minor faction present in a system."""

    name: str
    faction_state: str | None = None
    government: str | None = None
    influence: float | None = None
    allegiance: str | None = None


class Ring(
    msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True, rename="pascal"
):
    """Planetary or stellar ring."""

    name: str
    ring_class: str | None = None
    mass_mt: float | None = msgspec.field(default=None, name="MassMT")
    inner_rad: float | None = None
    outer_rad: float | None = None


class Material(msgspec.Struct, kw_only=True, frozen=True, rename="pascal"):
    """Surface material share on a landable body."""

    name: str
    percent: float


class FSDJump(JournalEvent, kw_only=True, frozen=True):
    """Arrival in a new system after a hyperspace jump."""

    system_allegiance: str | None = None
    system_economy: str | None = None
    system_second_economy: str | None = None
    system_government: str | None = None
    system_security: str | None = None
    population: int | None = None
    factions: tuple[Faction, ...] | None = None


class Docked(JournalEvent, kw_only=True, frozen=True):
    """Docking at a station."""

    station_name: str | None = None
    station_type: str | None = None
    market_id: int | None = msgspec.field(default=None, name="MarketID")
    station_government: str | None = None
    station_allegiance: str | None = None
    station_economy: str | None = None
    station_services: tuple[str, ...] | None = None
    dist_from_star_ls: float | None = msgspec.field(
        default=None, name="DistFromStarLS"
    )


class _BodyScan(JournalEvent, kw_only=True, frozen=True):
    """Fields common to star and planet scans."""

    body_name: str | None = None
    body_id: int | None = msgspec.field(default=None, name="BodyID")
    distance_from_arrival_ls: float | None = msgspec.field(
        default=None, name="DistanceFromArrivalLS"
    )
    radius: float | None = None
    surface_temperature: float | None = None
    rotation_period: float | None = None
    axial_tilt: float | None = None
    rings: tuple[Ring, ...] | None = None


class ScanStar(_BodyScan, kw_only=True, frozen=True):
    """Detailed scan of a star; identified by its ``StarType`` field."""

    star_type: str | None
    subclass: int | None = None
    stellar_mass: float | None = None
    absolute_magnitude: float | None = None
    age_my: int | None = msgspec.field(default=None, name="Age_MY")
    luminosity: str | None = None


class ScanPlanet(_BodyScan, kw_only=True, frozen=True):
    """Detailed scan of a planet, moon, or belt cluster."""

    tidal_lock: bool | None = None
    terraform_state: str | None = None
    planet_class: str | None = None
    atmosphere: str | None = None
    atmosphere_type: str | None = None
    volcanism: str | None = None
    mass_em: float | None = msgspec.field(default=None, name="MassEM")
    surface_gravity: float | None = None
    surface_pressure: float | None = None
    landable: bool | None = None
    materials: tuple[Material, ...] | None = None
    semi_major_axis: float | None = None
    eccentricity: float | None = None
    orbital_inclination: float | None = None
    periapsis: float | None = None
    orbital_period: float | None = None


# Events resolved by name alone. ``Scan`` is split by ``is_star_scan``.
_EVENT_TYPES: cabc.Mapping[str, type[JournalEvent]] = types.MappingProxyType({
    "FSDJump": FSDJump,
    "Docked": Docked,
})

KNOWN_EVENTS: frozenset[str] = frozenset({*_EVENT_TYPES, SCAN_EVENT})


def is_star_scan(fields: cabc.Mapping[str, typ.Any]) -> bool:
    """Return True when a ``Scan`` payload describes a star."""
    return STAR_MARKER_FIELD in fields


def resolve_event_type(fields: cabc.Mapping[str, typ.Any]) -> type[JournalEvent]:
    """Select the journal variant for a payload mapping.

    Raises
    ------
    InvalidJournalPayloadError
        If the mapping has no string ``event`` field.
    UnrecognizedEventError
        If the event name has no registered variant.

    """
    event = fields.get("event")
    if not isinstance(event, str):
        raise InvalidJournalPayloadError.missing_event()
    if event == SCAN_EVENT:
        return ScanStar if is_star_scan(fields) else ScanPlanet
    try:
        return _EVENT_TYPES[event]
    except KeyError:
        raise UnrecognizedEventError(event) from None


def dispatch_journal_event(payload: object) -> JournalEvent:
    """Convert a generic journal payload into its event variant.

    Parameters
    ----------
    payload
        The journal ``message`` as plain JSON values.

    Returns
    -------
    JournalEvent
        Exactly one of :class:`FSDJump`, :class:`Docked`,
        :class:`ScanStar`, or :class:`ScanPlanet`.

    Raises
    ------
    InvalidJournalPayloadError
        If the payload is not a mapping or lacks an event name.
    UnrecognizedEventError
        If the event name is not a known journal event.
    PayloadDecodeError
        If the payload does not fit the selected variant.

    """
    if not isinstance(payload, dict):
        raise InvalidJournalPayloadError.not_a_mapping(type(payload).__name__)

    fields = typ.cast("dict[str, typ.Any]", payload)
    model = resolve_event_type(fields)
    try:
        return msgspec.convert(fields, type=model)
    except msgspec.ValidationError as exc:
        raise PayloadDecodeError.for_event(fields["event"], str(exc)) from exc


def decode_journal_event(message: msgspec.Raw | bytes) -> JournalEvent:
    """Decode a raw journal ``message`` and dispatch on its event name."""
    try:
        payload = msgspec.json.decode(message)
    except msgspec.DecodeError as exc:
        raise InvalidJournalPayloadError.not_a_mapping("invalid JSON") from exc
    return dispatch_journal_event(payload)


__all__ = [
    "KNOWN_EVENTS",
    "SCAN_EVENT",
    "STAR_MARKER_FIELD",
    "Docked",
    "FSDJump",
    "Faction",
    "JournalEvent",
    "Material",
    "Ring",
    "ScanPlanet",
    "ScanStar",
    "decode_journal_event",
    "dispatch_journal_event",
    "is_star_scan",
    "resolve_event_type",
]
