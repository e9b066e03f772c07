"""Environment-driven configuration for the message decoder."""

from __future__ import annotations

import dataclasses
import os

from eddn.errors import DecoderConfigError
from eddn.logging import configure_logging, get_logger, log_warning

# Relay messages are a few kilobytes; large commodity markets stay well
# under a megabyte once inflated.
_DEFAULT_MAX_MESSAGE_BYTES = 4 * 1024 * 1024
_DEFAULT_LOG_LEVEL = "INFO"

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class DecoderConfig:
    """Configuration for :class:`eddn.decoder.MessageDecoder`.

    Attributes
    ----------
    max_message_bytes
        Largest decompressed message accepted before decoding is refused.
    log_level
        Log level applied by :meth:`apply_logging`.

    """

    max_message_bytes: int = _DEFAULT_MAX_MESSAGE_BYTES
    log_level: str = _DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """Reject size limits that would disable or break decompression."""
        if (
            isinstance(self.max_message_bytes, bool)
            or not isinstance(self.max_message_bytes, int)
            or self.max_message_bytes <= 0
        ):
            raise DecoderConfigError.invalid_max_message_bytes(
                str(self.max_message_bytes)
            )

    @staticmethod
    def _parse_max_message_bytes_from_env() -> int:
        """Parse and validate the size limit from the environment.

        Raises
        ------
        DecoderConfigError
            If the value is not a positive integer.

        """
        raw_limit = os.environ.get("EDDN_MAX_MESSAGE_BYTES")
        if raw_limit is None:
            return _DEFAULT_MAX_MESSAGE_BYTES

        try:
            limit = int(raw_limit)
        except ValueError as exc:
            raise DecoderConfigError.invalid_max_message_bytes(raw_limit) from exc

        if limit <= 0:
            raise DecoderConfigError.invalid_max_message_bytes(raw_limit)

        return limit

    @classmethod
    def from_env(cls) -> DecoderConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``EDDN_MAX_MESSAGE_BYTES``: Optional positive size limit
        - ``EDDN_LOG_LEVEL``: Optional log level name

        Raises
        ------
        DecoderConfigError
            If ``EDDN_MAX_MESSAGE_BYTES`` is invalid.

        """
        return cls(
            max_message_bytes=cls._parse_max_message_bytes_from_env(),
            log_level=os.environ.get("EDDN_LOG_LEVEL", _DEFAULT_LOG_LEVEL),
        )

    def apply_logging(self, *, force: bool = False) -> str:
        """Configure femtologging at ``log_level`` and return the level used."""
        normalized, invalid = configure_logging(self.log_level, force=force)
        if invalid:
            log_warning(
                logger,
                "Invalid EDDN_LOG_LEVEL %r, falling back to %s",
                self.log_level,
                normalized,
            )
        return normalized


__all__ = ["DecoderConfig"]
