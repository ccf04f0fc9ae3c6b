"""YAML document splitting.

A stream of YAML documents is cut on separator lines: a newline followed
by ``---`` and anything else up to the next newline. The split function
only locates boundaries; parsing is left to the YAML layer.
"""

from __future__ import annotations

import re
from typing import BinaryIO, Callable, Iterator, Optional, Tuple

from ..config import DEFAULT_MAX_DOCUMENT_SIZE, DEFAULT_READ_SIZE
from ..errors import DocumentTooLargeError

SEPARATOR = b"\n---"

_SEPARATOR = re.compile(rb"\n---")
_NEWLINE = re.compile(rb"\n")

SplitFunc = Callable[[memoryview, bool], Tuple[int, Optional[bytes]]]


def split_yaml_document(data, at_eof: bool) -> Tuple[int, Optional[bytes]]:
    """Find the next YAML document in ``data``.

    Args:
        data: Unconsumed bytes read so far; any bytes-like object, so a
            memoryview over the scan buffer is searched without copying
        at_eof: True when no more bytes will follow ``data``

    Returns:
        ``(advance, token)``. ``advance`` is the number of bytes consumed and
        ``token`` the document without its separator. ``(0, None)`` asks the
        caller for more input. An empty ``data`` at end of stream yields
        ``(0, b"")``, which signals exhaustion.

    A ``---`` at offset 0 has no preceding newline, so it is kept as part
    of the document rather than treated as a boundary.
    """
    if at_eof and not len(data):
        return 0, b""

    match = _SEPARATOR.search(data)
    if match is None:
        if at_eof:
            return len(data), bytes(data)
        return 0, None

    sep = match.start()
    after = match.end()
    if after >= len(data):
        # Separator ends the buffer; a trailing \r or more text may follow.
        if at_eof:
            return len(data), bytes(data[:sep])
        return 0, None

    newline = _NEWLINE.search(data, after)
    if newline is not None:
        return newline.end(), bytes(data[:sep])
    if at_eof:
        return len(data), bytes(data[:sep])
    return 0, None


class Scanner:
    """Drive a split function over a binary source.

    Reads are appended to an internal buffer and the split function is
    re-invoked until it yields a token or the source is exhausted. While
    the split function keeps asking for more input, each read requests as
    many bytes as are already pending, so a large document costs a
    logarithmic number of reads and splits.

    Args:
        source: Object with a binary ``read(n)`` method
        split: Split function, ``split_yaml_document`` by default. It is
            handed a read-only memoryview of the pending bytes and must not
            keep references to it past the call.
        read_size: Smallest number of bytes requested per read
        max_token_size: Largest pending buffer allowed while the split
            function still asks for more input; None disables the check
    """

    def __init__(
        self,
        source: BinaryIO,
        split: SplitFunc = split_yaml_document,
        read_size: int = DEFAULT_READ_SIZE,
        max_token_size: Optional[int] = DEFAULT_MAX_DOCUMENT_SIZE,
    ):
        if read_size < 1:
            raise ValueError("read_size must be positive")
        self._source = source
        self._split = split
        self._read_size = read_size
        self._max_token_size = max_token_size
        self._buffer = bytearray()
        self._start = 0
        self._eof = False
        self._done = False

    @property
    def pending(self) -> int:
        """Bytes read from the source but not yet consumed."""
        return len(self._buffer) - self._start

    def _fill(self) -> None:
        # Drop consumed bytes only when the buffer is about to grow.
        if self._start:
            del self._buffer[:self._start]
            self._start = 0
        chunk = self._source.read(max(self._read_size, len(self._buffer)))
        if not chunk:
            self._eof = True
            return
        self._buffer += chunk

    def _call_split(self) -> Tuple[int, Optional[bytes]]:
        with memoryview(self._buffer) as whole:
            with whole[self._start:].toreadonly() as pending:
                advance, token = self._split(pending, self._eof)
                if token is not None:
                    token = bytes(token)
        return advance, token

    def scan(self) -> Optional[bytes]:
        """Return the next token, or None once the source is exhausted."""
        if self._done:
            return None

        while True:
            if not self.pending and not self._eof:
                self._fill()
                continue

            advance, token = self._call_split()
            if advance < 0 or advance > self.pending:
                raise ValueError(
                    f"split function returned invalid advance {advance}"
                )
            self._start += advance

            if token is not None and (advance > 0 or token):
                return token

            if self._eof:
                if advance == 0:
                    self._done = True
                    return None
                continue

            if advance == 0:
                if (
                    self._max_token_size is not None
                    and self.pending > self._max_token_size
                ):
                    raise DocumentTooLargeError(self._max_token_size)
                self._fill()

    def __iter__(self) -> Iterator[bytes]:
        while True:
            token = self.scan()
            if token is None:
                return
            yield token
