"""Typed market payloads for the station-level EDDN schemas."""

from __future__ import annotations

import msgspec


class StationPayload(
    msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True, rename="camel"
):
    """Fields shared by every station market snapshot.

    Attributes
    ----------
    system_name
        Star system containing the station.
    station_name
        Station the snapshot was taken at.
    timestamp
        ISO-8601 time the data was collected in game.
    market_id
        Frontier market identifier, when the uploader supplies one.
    horizons
        Whether the uploader runs the Horizons expansion.
    odyssey
        Whether the uploader runs the Odyssey expansion.

    """

    system_name: str
    station_name: str
    timestamp: str
    market_id: int | None = None
    horizons: bool | None = None
    odyssey: bool | None = None


class CommodityEntry(
    msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True, rename="camel"
):
    """One commodity line of a market snapshot.

    Brackets are integers, or an empty string when the game reports none.
    """

    name: str
    mean_price: int
    buy_price: int
    stock: int
    stock_bracket: int | str
    sell_price: int
    demand: int
    demand_bracket: int | str
    status_flags: tuple[str, ...] | None = None


class Economy(msgspec.Struct, kw_only=True, frozen=True):
    """Station economy and its share."""

    name: str
    proportion: float


class Commodity(StationPayload, kw_only=True, frozen=True):
    """Commodity market snapshot (``commodity/3``)."""

    commodities: tuple[CommodityEntry, ...]
    economies: tuple[Economy, ...] | None = None
    prohibited: tuple[str, ...] | None = None


class Outfitting(StationPayload, kw_only=True, frozen=True):
    """Outfitting module listing (``outfitting/2``)."""

    modules: tuple[str, ...]


class Blackmarket(StationPayload, kw_only=True, frozen=True):
    """Single black market sale (``blackmarket/1``)."""

    name: str
    sell_price: int
    prohibited: bool


class Shipyard(StationPayload, kw_only=True, frozen=True):
    """Shipyard listing (``shipyard/2``)."""

    ships: tuple[str, ...]


__all__ = [
    "Blackmarket",
    "Commodity",
    "CommodityEntry",
    "Economy",
    "Outfitting",
    "Shipyard",
    "StationPayload",
]
