"""Unit tests for envelope parsing."""

from __future__ import annotations

import msgspec
import pytest

from eddn.envelope import Envelope, Header, parse_envelope
from eddn.errors import DecodeFailureReason, MalformedEnvelopeError
from tests.helpers.envelopes import HEADER, build_message, ref


def test_parse_envelope_reads_schema_and_header() -> None:
    document = build_message("journal", 1, {"event": "Docked"})

    envelope = parse_envelope(msgspec.json.encode(document))

    assert envelope.schema_ref == ref("journal", 1)
    assert envelope.header == Header(
        uploader_id=HEADER["uploaderID"],
        software_name=HEADER["softwareName"],
        software_version=HEADER["softwareVersion"],
        gateway_timestamp=HEADER["gatewayTimestamp"],
    )


def test_parse_envelope_leaves_message_unresolved() -> None:
    """The payload stays raw JSON until a decoder is chosen."""
    document = build_message("commodity", 3, {"anything": [1, 2, 3]})

    envelope = parse_envelope(msgspec.json.encode(document))

    assert isinstance(envelope.message, msgspec.Raw)
    assert msgspec.json.decode(envelope.message) == {"anything": [1, 2, 3]}


def test_parse_envelope_defaults_header_and_message() -> None:
    envelope = parse_envelope(b'{"$schemaRef": "x"}')

    assert envelope == Envelope(schema_ref="x")
    assert envelope.header.uploader_id is None
    assert msgspec.json.decode(envelope.message) is None


@pytest.mark.parametrize(
    "data",
    [b"", b"{not json", b"[1, 2]", b'"text"', b'{"$schemaRef": 3}'],
    ids=["empty", "invalid-json", "array", "string", "numeric-schema-ref"],
)
def test_parse_envelope_rejects_malformed_documents(data: bytes) -> None:
    with pytest.raises(MalformedEnvelopeError) as excinfo:
        parse_envelope(data)

    assert excinfo.value.reason is DecodeFailureReason.MALFORMED_ENVELOPE


def test_parse_envelope_rejects_wrongly_shaped_header() -> None:
    data = b'{"$schemaRef": "x", "header": {"softwareName": 5}}'

    with pytest.raises(MalformedEnvelopeError) as excinfo:
        parse_envelope(data)

    assert excinfo.value.reason is DecodeFailureReason.MALFORMED_ENVELOPE


def test_parse_envelope_requires_schema_ref() -> None:
    data = msgspec.json.encode({"header": HEADER, "message": {}})

    with pytest.raises(MalformedEnvelopeError) as excinfo:
        parse_envelope(data)

    assert excinfo.value.reason is DecodeFailureReason.MISSING_SCHEMA_REF
