"""Outer message envelope and its lazy parser.

Every relay message is a JSON object carrying ``$schemaRef``, a sender
``header``, and the ``message`` payload. The payload is kept as raw JSON
until the schema identifier has picked a decoder.
"""

from __future__ import annotations

import msgspec

from eddn.errors import MalformedEnvelopeError

_NULL_MESSAGE = msgspec.Raw(b"null")


class Header(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Sender metadata common to all messages.

    Attributes
    ----------
    uploader_id
        Identity of the uploading commander (``uploaderID`` on the wire).
    software_name
        Software that sent the data.
    software_version
        Version of the sending software.
    gateway_timestamp
        Timestamp added by the relay gateway.

    """

    uploader_id: str | None = msgspec.field(default=None, name="uploaderID")
    software_name: str | None = None
    software_version: str | None = None
    gateway_timestamp: str | None = None


class Envelope(msgspec.Struct, kw_only=True, frozen=True):
    """Message wrapper with an unresolved payload."""

    schema_ref: str = msgspec.field(name="$schemaRef")
    header: Header = msgspec.field(default_factory=Header)
    message: msgspec.Raw = _NULL_MESSAGE


_envelope_decoder = msgspec.json.Decoder(Envelope)


def _lacks_schema_ref(data: bytes) -> bool:
    """Return True when the document is an object without ``$schemaRef``."""
    try:
        document = msgspec.json.decode(data, type=dict[str, msgspec.Raw])
    except msgspec.DecodeError:
        return False
    return "$schemaRef" not in document


def parse_envelope(data: bytes) -> Envelope:
    """Parse decompressed bytes into an :class:`Envelope`.

    Raises
    ------
    MalformedEnvelopeError
        If the bytes are not a JSON object, ``$schemaRef`` is absent, or a
        known envelope field has the wrong shape.

    """
    try:
        return _envelope_decoder.decode(data)
    except msgspec.ValidationError as exc:
        if _lacks_schema_ref(data):
            raise MalformedEnvelopeError.missing_schema_ref() from exc
        raise MalformedEnvelopeError.invalid(str(exc)) from exc
    except msgspec.DecodeError as exc:
        raise MalformedEnvelopeError.invalid(str(exc)) from exc


__all__ = ["Envelope", "Header", "parse_envelope"]
