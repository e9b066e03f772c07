"""zlib decompression for relay message bodies."""

from __future__ import annotations

import zlib

from eddn.errors import DecompressionError

BytesLike = bytes | bytearray | memoryview
MessageBody = BytesLike | str


def _as_bytes(data: MessageBody) -> BytesLike:
    """Return ``data`` as bytes; text is read one byte per code point."""
    if not isinstance(data, str):
        return data
    try:
        return data.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise DecompressionError.invalid_stream(
            "text body holds code points above U+00FF"
        ) from exc


def decompress(data: MessageBody, *, max_output_bytes: int | None = None) -> bytes:
    """Inflate a complete zlib stream.

    Parameters
    ----------
    data
        Compressed message body as received from the relay. Text is accepted
        when each character carries one byte of the stream.
    max_output_bytes
        Upper bound on the inflated size. ``None`` disables the limit.

    Returns
    -------
    bytes
        The whole decompressed buffer.

    Raises
    ------
    DecompressionError
        If the data is not zlib, the stream is truncated, or the output
        exceeds ``max_output_bytes``.

    """
    buffer = _as_bytes(data)
    inflater = zlib.decompressobj()
    # One extra byte distinguishes "exactly at the limit" from "over it".
    max_length = 0 if max_output_bytes is None else max_output_bytes + 1
    try:
        output = inflater.decompress(buffer, max_length)
    except zlib.error as exc:
        raise DecompressionError.invalid_stream(str(exc)) from exc

    if max_output_bytes is not None and len(output) > max_output_bytes:
        raise DecompressionError.output_too_large(max_output_bytes)
    if not inflater.eof:
        raise DecompressionError.truncated_stream()
    return output


__all__ = ["BytesLike", "MessageBody", "decompress"]
