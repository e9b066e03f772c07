"""Unit tests for the schema routing table."""

from __future__ import annotations

import msgspec
import pytest

from eddn.errors import (
    DecodeFailureReason,
    PayloadDecodeError,
    UnsupportedSchemaError,
    UnsupportedVersionError,
)
from eddn.journal import Docked
from eddn.payloads import Blackmarket, Commodity, Outfitting, Shipyard
from eddn.schemas import (
    ROUTES,
    SchemaFamily,
    is_test_traffic,
    lookup_route,
    route_payload,
    schema_ref,
)
from tests.helpers.envelopes import (
    BLACKMARKET_MESSAGE,
    COMMODITY_MESSAGE,
    DOCKED_MESSAGE,
    OUTFITTING_MESSAGE,
    SHIPYARD_MESSAGE,
    ref,
)


def _raw(document: object) -> msgspec.Raw:
    return msgspec.Raw(msgspec.json.encode(document))


def test_schema_ref_builds_production_identifier() -> None:
    assert (
        schema_ref(SchemaFamily.COMMODITY, 3)
        == "http://schemas.elite-markets.net/eddn/commodity/3"
    )


def test_routes_are_keyed_by_their_identifier() -> None:
    assert all(key == route.schema_ref for key, route in ROUTES.items())


def test_routes_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        ROUTES["http://example.com/x/1"] = ROUTES[ref("commodity", 3)]  # type: ignore[index]


@pytest.mark.parametrize(
    ("family", "version", "message", "expected_type"),
    [
        ("commodity", 3, COMMODITY_MESSAGE, Commodity),
        ("outfitting", 2, OUTFITTING_MESSAGE, Outfitting),
        ("blackmarket", 1, BLACKMARKET_MESSAGE, Blackmarket),
        ("shipyard", 2, SHIPYARD_MESSAGE, Shipyard),
        ("journal", 1, DOCKED_MESSAGE, Docked),
    ],
)
def test_route_payload_decodes_supported_schemas(
    family: str, version: int, message: object, expected_type: type
) -> None:
    route, payload = route_payload(ref(family, version), _raw(message))

    assert route.family == family
    assert route.version == version
    assert type(payload) is expected_type


@pytest.mark.parametrize(
    ("family", "version"),
    [("commodity", 1), ("commodity", 2), ("outfitting", 1), ("shipyard", 1)],
)
def test_retired_versions_raise_unsupported_version(family: str, version: int) -> None:
    with pytest.raises(UnsupportedVersionError) as excinfo:
        route_payload(ref(family, version), _raw(COMMODITY_MESSAGE))

    error = excinfo.value
    assert error.family == family
    assert error.version == version
    assert error.schema_ref == ref(family, version)
    assert error.reason is DecodeFailureReason.UNSUPPORTED_VERSION
    assert not isinstance(error, UnsupportedSchemaError)


@pytest.mark.parametrize(
    ("family", "version"),
    [
        ("commodity", 3),
        ("journal", 1),
        ("outfitting", 2),
        ("blackmarket", 1),
        ("shipyard", 2),
        ("commodity", 1),
    ],
)
def test_test_traffic_is_never_decoded(family: str, version: int) -> None:
    test_ref = ref(family, version, test=True)

    with pytest.raises(UnsupportedSchemaError) as excinfo:
        lookup_route(test_ref)

    assert is_test_traffic(test_ref)
    assert excinfo.value.reason is DecodeFailureReason.TEST_TRAFFIC
    assert excinfo.value.schema_ref == test_ref


@pytest.mark.parametrize(
    "schema",
    [
        ref("commodity", 4),
        ref("journal", 2),
        ref("fssdiscoveryscan", 1),
        "https://eddn.edcd.io/schemas/commodity/3",
        "",
    ],
)
def test_unknown_identifiers_raise_unsupported_schema(schema: str) -> None:
    with pytest.raises(UnsupportedSchemaError) as excinfo:
        route_payload(schema, _raw(COMMODITY_MESSAGE))

    assert excinfo.value.reason is DecodeFailureReason.UNKNOWN_SCHEMA


def test_structural_mismatch_raises_payload_decode_error() -> None:
    message = {**COMMODITY_MESSAGE, "commodities": "gold"}

    with pytest.raises(PayloadDecodeError) as excinfo:
        route_payload(ref("commodity", 3), _raw(message))

    assert excinfo.value.schema_ref == ref("commodity", 3)
    assert isinstance(excinfo.value.__cause__, msgspec.ValidationError)


def test_missing_required_field_raises_payload_decode_error() -> None:
    message = {k: v for k, v in SHIPYARD_MESSAGE.items() if k != "ships"}

    with pytest.raises(PayloadDecodeError, match="ships"):
        route_payload(ref("shipyard", 2), _raw(message))


def test_null_payload_raises_payload_decode_error() -> None:
    with pytest.raises(PayloadDecodeError):
        route_payload(ref("outfitting", 2), msgspec.Raw(b"null"))
