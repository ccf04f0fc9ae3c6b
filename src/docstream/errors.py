"""Exceptions raised while decoding a stream."""

from __future__ import annotations


class DocstreamError(Exception):
    """Base class for all docstream errors."""


class EndOfStream(DocstreamError):
    """No more documents or values remain in the stream.

    This is a sentinel rather than a failure. Once raised, every further
    ``decode()`` call on the same decoder raises it again.
    """

    def __init__(self, message: str = "end of stream"):
        super().__init__(message)


class MalformedInputError(DocstreamError, ValueError):
    """A single unit of the stream could not be parsed.

    The underlying parser error is chained as ``__cause__``. The stream is
    already positioned past the offending unit, so decoding may continue.
    """

    def __init__(self, format: str, index: int, detail: str):
        self.format = format
        self.index = index
        self.detail = detail
        super().__init__(f"malformed {format} input in unit {index}: {detail}")


class DocumentTooLargeError(DocstreamError):
    """A pending document grew past the configured scan limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"document exceeds maximum size of {limit} bytes")


__all__ = [
    "DocstreamError",
    "DocumentTooLargeError",
    "EndOfStream",
    "MalformedInputError",
]
