"""Error taxonomy for EDDN message decoding.

Every failure raised while decoding a relay message derives from
:class:`EDDNDecodeError` and carries a machine-readable
:class:`DecodeFailureReason`, so listeners can drop, count, or re-queue
messages without matching on message text.
"""

from __future__ import annotations

import enum

# Event names longer than this are truncated in error messages
_EVENT_PREVIEW_LIMIT = 64


class DecodeFailureReason(enum.StrEnum):
    """Machine-readable reasons for decode failures."""

    INVALID_STREAM = "invalid_stream"
    TRUNCATED_STREAM = "truncated_stream"
    OUTPUT_TOO_LARGE = "output_too_large"
    MALFORMED_ENVELOPE = "malformed_envelope"
    MISSING_SCHEMA_REF = "missing_schema_ref"
    UNKNOWN_SCHEMA = "unknown_schema"
    TEST_TRAFFIC = "test_traffic"
    UNSUPPORTED_VERSION = "unsupported_version"
    INVALID_PAYLOAD = "invalid_payload"
    NOT_A_MAPPING = "not_a_mapping"
    MISSING_EVENT = "missing_event"
    UNRECOGNIZED_EVENT = "unrecognized_event"


class EDDNDecodeError(Exception):
    """Base exception for all EDDN decode failures.

    Attributes
    ----------
    reason
        Machine-readable failure reason.

    """

    def __init__(self, message: str, reason: DecodeFailureReason) -> None:
        """Store a machine-readable reason for programmatic handling."""
        super().__init__(message)
        self.reason = reason


class DecompressionError(EDDNDecodeError):
    """Raised when the message body is not a complete zlib stream."""

    @classmethod
    def invalid_stream(cls, detail: str) -> DecompressionError:
        """Create an error for data that zlib rejects outright."""
        return cls(
            f"message is not a valid zlib stream: {detail}",
            DecodeFailureReason.INVALID_STREAM,
        )

    @classmethod
    def truncated_stream(cls) -> DecompressionError:
        """Create an error for a stream that ends before its final block."""
        return cls(
            "zlib stream ended before completion",
            DecodeFailureReason.TRUNCATED_STREAM,
        )

    @classmethod
    def output_too_large(cls, limit: int) -> DecompressionError:
        """Create an error for output exceeding the configured limit."""
        return cls(
            f"decompressed message exceeds {limit} bytes",
            DecodeFailureReason.OUTPUT_TOO_LARGE,
        )


class MalformedEnvelopeError(EDDNDecodeError):
    """Raised when decompressed bytes do not form a message envelope."""

    @classmethod
    def invalid(cls, detail: str) -> MalformedEnvelopeError:
        """Create an error for unparseable or mis-shaped envelopes."""
        return cls(
            f"malformed envelope: {detail}",
            DecodeFailureReason.MALFORMED_ENVELOPE,
        )

    @classmethod
    def missing_schema_ref(cls) -> MalformedEnvelopeError:
        """Create an error for envelopes without a ``$schemaRef``."""
        return cls(
            "envelope has no $schemaRef",
            DecodeFailureReason.MISSING_SCHEMA_REF,
        )


class UnsupportedSchemaError(EDDNDecodeError):
    """Raised when no decoder handles the schema identifier.

    Attributes
    ----------
    schema_ref
        The rejected schema identifier.

    """

    def __init__(
        self, message: str, reason: DecodeFailureReason, *, schema_ref: str
    ) -> None:
        """Initialise the error with the rejected schema identifier."""
        super().__init__(message, reason)
        self.schema_ref = schema_ref

    @classmethod
    def unknown(cls, schema_ref: str) -> UnsupportedSchemaError:
        """Create an error for identifiers absent from the routing table."""
        return cls(
            f"schema not supported: {schema_ref}",
            DecodeFailureReason.UNKNOWN_SCHEMA,
            schema_ref=schema_ref,
        )

    @classmethod
    def test_traffic(cls, schema_ref: str) -> UnsupportedSchemaError:
        """Create an error for identifiers marked as test traffic."""
        return cls(
            f"test traffic is not decoded: {schema_ref}",
            DecodeFailureReason.TEST_TRAFFIC,
            schema_ref=schema_ref,
        )


class UnsupportedVersionError(EDDNDecodeError):
    """Raised for a known schema family whose version is retired.

    Attributes
    ----------
    schema_ref
        The rejected schema identifier.
    family
        Schema family name, for example ``"commodity"``.
    version
        The rejected version number.

    """

    def __init__(self, schema_ref: str, family: str, version: int) -> None:
        """Initialise the error with the rejected family and version."""
        super().__init__(
            f"{family} version {version} is not supported",
            DecodeFailureReason.UNSUPPORTED_VERSION,
        )
        self.schema_ref = schema_ref
        self.family = family
        self.version = version


class PayloadDecodeError(EDDNDecodeError):
    """Raised when a payload does not match its variant's field structure.

    The underlying ``msgspec`` error is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, schema_ref: str | None = None) -> None:
        """Initialise the error with the schema being decoded, if known."""
        super().__init__(message, DecodeFailureReason.INVALID_PAYLOAD)
        self.schema_ref = schema_ref

    @classmethod
    def for_schema(cls, schema_ref: str, detail: str) -> PayloadDecodeError:
        """Create an error for a payload failing its schema's structure."""
        return cls(f"invalid {schema_ref} payload: {detail}", schema_ref=schema_ref)

    @classmethod
    def for_event(cls, event: str, detail: str) -> PayloadDecodeError:
        """Create an error for a journal event failing its structure."""
        return cls(f"invalid {event} journal event: {detail}")


class InvalidJournalPayloadError(EDDNDecodeError):
    """Raised when a journal payload is not an event mapping."""

    @classmethod
    def not_a_mapping(cls, type_name: str) -> InvalidJournalPayloadError:
        """Create an error for list, scalar, or unparseable payloads."""
        return cls(
            f"msg is not a Journal type: expected object, got {type_name}",
            DecodeFailureReason.NOT_A_MAPPING,
        )

    @classmethod
    def missing_event(cls) -> InvalidJournalPayloadError:
        """Create an error for payloads without a string ``event`` field."""
        return cls(
            "msg is not a Journal type: no event name",
            DecodeFailureReason.MISSING_EVENT,
        )


class UnrecognizedEventError(EDDNDecodeError):
    """Raised for journal events with no registered variant.

    Attributes
    ----------
    event
        The unrecognized event name, verbatim.

    """

    def __init__(self, event: str) -> None:
        """Initialise the error with the unrecognized event name."""
        preview = event[:_EVENT_PREVIEW_LIMIT]
        super().__init__(
            f"unrecognized journal event: {preview!r}",
            DecodeFailureReason.UNRECOGNIZED_EVENT,
        )
        self.event = event


class DecoderConfigError(Exception):
    """Raised when decoder configuration values are invalid."""

    @classmethod
    def invalid_max_message_bytes(cls, value: str) -> DecoderConfigError:
        """Create error for a non-positive or non-integer size limit."""
        return cls(
            f"Invalid EDDN_MAX_MESSAGE_BYTES (max_message_bytes) value: {value!r}. "
            "Must be a positive integer."
        )


__all__ = [
    "DecodeFailureReason",
    "DecoderConfigError",
    "DecompressionError",
    "EDDNDecodeError",
    "InvalidJournalPayloadError",
    "MalformedEnvelopeError",
    "PayloadDecodeError",
    "UnrecognizedEventError",
    "UnsupportedSchemaError",
    "UnsupportedVersionError",
]
