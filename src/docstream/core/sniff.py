"""Non-destructive JSON/YAML detection."""

from __future__ import annotations

import io
from typing import BinaryIO, Tuple


def has_json_prefix(data: bytes) -> bool:
    """Return True if the first non-whitespace byte of ``data`` is ``{``."""
    return data.lstrip()[:1] == b"{"


class ReplayReader(io.RawIOBase):
    """Reader that yields ``prefix`` and then the rest of ``source``."""

    def __init__(self, prefix: bytes, source: BinaryIO):
        super().__init__()
        self._prefix = bytes(prefix)
        self._offset = 0
        self._source = source

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        view = memoryview(buffer).cast("B")
        if not len(view):
            return 0

        remaining = len(self._prefix) - self._offset
        if remaining > 0:
            n = min(len(view), remaining)
            view[:n] = self._prefix[self._offset:self._offset + n]
            self._offset += n
            return n

        data = self._source.read(len(view))
        if data is None:
            return None
        n = len(data)
        view[:n] = data
        return n


def peek(source: BinaryIO, limit: int) -> bytes:
    """Read up to ``limit`` bytes, stopping early only at end of stream."""
    chunks = []
    size = 0
    while size < limit:
        chunk = source.read(limit - size)
        if not chunk:
            break
        chunks.append(chunk)
        size += len(chunk)
    return b"".join(chunks)


def guess_json_stream(source: BinaryIO, limit: int) -> Tuple[ReplayReader, bool]:
    """Classify a stream as JSON or YAML without losing any of its bytes.

    Args:
        source: Binary stream to inspect
        limit: Maximum number of bytes to peek

    Returns:
        Tuple of (reader, is_json). The reader replays the peeked bytes
        followed by the remainder of ``source``.

    A stream whose leading whitespace fills the whole peek window is
    classified as YAML.
    """
    if limit < 1:
        raise ValueError("limit must be positive")
    prefix = peek(source, limit)
    return ReplayReader(prefix, source), has_json_prefix(prefix)
