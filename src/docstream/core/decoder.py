"""Decoders for YAML document streams and concatenated JSON streams.

``YAMLOrJSONDecoder`` sniffs the start of its source on the first
``decode()`` call and then sticks with one strategy:

- JSON: the stream is a sequence of JSON values with no separators
- YAML: the stream is a sequence of ``---`` separated YAML documents,
  each converted to JSON before decoding
"""

from __future__ import annotations

import codecs
import io
import json
import re
from enum import Enum
from typing import Any, BinaryIO, Iterator, Optional, Union

from pydantic import BaseModel
from ruamel.yaml.error import YAMLError

from ..config import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_DOCUMENT_SIZE,
    DEFAULT_READ_SIZE,
    DecoderConfig,
)
from ..convert import yaml_to_json
from ..errors import DocumentTooLargeError, EndOfStream, MalformedInputError
from .sniff import guess_json_stream
from .split import Scanner, split_yaml_document

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_NUMBER_CHARS = frozenset("0123456789.eE+-")
# Longest tail a truncated token leaves after the error position, e.g. "\u12".
_PARTIAL_TOKEN = 6

Source = Union[BinaryIO, bytes, bytearray, str]


def as_binary_source(source: Source) -> BinaryIO:
    """Wrap in-memory input in a BytesIO; pass streams through."""
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return source


def zero_value(into: Any) -> Any:
    """Value returned for an empty document.

    Types are called with no arguments (``dict()`` gives ``{}``); ``None``
    and plain callables give ``None``.
    """
    if isinstance(into, type):
        return into()
    return None


def populate(value: Any, into: Any) -> Any:
    """Shape a decoded JSON value into the requested target type.

    ``dict`` and ``None`` return the plain JSON value. A pydantic model is
    validated with ``model_validate``; any other callable is applied to
    the value.
    """
    if into is None or into is dict:
        return value
    if isinstance(into, type) and issubclass(into, BaseModel):
        return into.model_validate(value)
    return into(value)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _truncated(err: json.JSONDecodeError) -> bool:
    """True if ``err`` may only mean the value continues past the buffer."""
    if err.msg.startswith("Unterminated string"):
        return True
    return len(err.doc) - err.pos <= _PARTIAL_TOKEN


class JSONStreamDecoder:
    """Decode concatenated JSON values one at a time.

    Values need no separator between them; whitespace around them is
    ignored. While a value is incomplete, each read requests as many bytes
    as are already pending, so a large value costs a logarithmic number of
    reads and parse attempts. ``NaN`` and ``Infinity`` are rejected.
    """

    def __init__(
        self,
        source: BinaryIO,
        read_size: int = DEFAULT_READ_SIZE,
        max_document_size: Optional[int] = DEFAULT_MAX_DOCUMENT_SIZE,
    ):
        if read_size < 1:
            raise ValueError("read_size must be positive")
        self._source = source
        self._read_size = read_size
        self._max_document_size = max_document_size
        self._decoder = json.JSONDecoder(parse_constant=_reject_constant)
        self._text = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""
        self._pos = 0
        self._eof = False
        self._index = 0

    @property
    def pending(self) -> int:
        """Characters decoded from the source but not yet consumed."""
        return len(self._buffer) - self._pos

    def _fail(self, detail: str) -> MalformedInputError:
        # Nothing after a malformed value can be resynchronised; drop it.
        self._buffer = ""
        self._pos = 0
        self._eof = True
        index = self._index
        self._index += 1
        return MalformedInputError("json", index, detail)

    def _fill(self) -> None:
        if self._pos:
            self._buffer = self._buffer[self._pos:]
            self._pos = 0
        chunk = self._source.read(max(self._read_size, len(self._buffer)))
        try:
            if not chunk:
                self._eof = True
                self._buffer += self._text.decode(b"", final=True)
            else:
                self._buffer += self._text.decode(chunk)
        except UnicodeDecodeError as err:
            raise self._fail(str(err)) from err

    def _need_more(self) -> None:
        if (
            self._max_document_size is not None
            and self.pending > self._max_document_size
        ):
            raise DocumentTooLargeError(self._max_document_size)
        self._fill()

    def decode(self, into: Any = dict) -> Any:
        """Return the next JSON value.

        Raises:
            EndOfStream: When no values remain
            MalformedInputError: When the next value is not valid JSON
            DocumentTooLargeError: When an incomplete value outgrows
                ``max_document_size``
        """
        while True:
            start = _WHITESPACE.match(self._buffer, self._pos).end()
            if start == len(self._buffer):
                self._buffer = ""
                self._pos = 0
                if self._eof:
                    raise EndOfStream()
                self._fill()
                continue
            self._pos = start

            try:
                value, end = self._decoder.raw_decode(self._buffer, start)
            except json.JSONDecodeError as err:
                if not self._eof and _truncated(err):
                    self._need_more()
                    continue
                raise self._fail(str(err)) from err
            except ValueError as err:
                raise self._fail(str(err)) from err

            # A number at the buffer edge may continue in the next chunk.
            if not self._eof and not isinstance(value, (dict, list, str)) and (
                end == len(self._buffer) or self._buffer[end] in _NUMBER_CHARS
            ):
                self._need_more()
                continue

            self._pos = end
            self._index += 1
            return populate(value, into)


class YAMLToJSONDecoder:
    """Decode ``---`` separated YAML documents, one per call.

    Each document is converted to JSON before it is decoded, so values
    come back with the same shapes a JSON stream would produce.
    """

    def __init__(
        self,
        source: BinaryIO,
        read_size: int = DEFAULT_READ_SIZE,
        max_document_size: Optional[int] = DEFAULT_MAX_DOCUMENT_SIZE,
    ):
        self._scanner = Scanner(
            source,
            split=split_yaml_document,
            read_size=read_size,
            max_token_size=max_document_size,
        )
        self._index = 0

    def decode(self, into: Any = dict) -> Any:
        """Return the next document's value.

        An empty document, or one that holds only whitespace or comments,
        returns the zero value for ``into`` (``{}`` by default).

        Raises:
            EndOfStream: When no documents remain
            MalformedInputError: When a document is not valid YAML, or holds
                a value JSON cannot represent such as ``.nan``
        """
        document = self._scanner.scan()
        if document is None:
            raise EndOfStream()

        index = self._index
        self._index += 1
        if not document:
            return zero_value(into)

        try:
            converted = yaml_to_json(document)
        except (YAMLError, ValueError) as err:
            raise MalformedInputError("yaml", index, str(err)) from err

        value = json.loads(converted)
        if value is None:
            return zero_value(into)
        return populate(value, into)


class Strategy(Enum):
    UNSELECTED = "unselected"
    JSON = "json"
    YAML = "yaml"


class YAMLOrJSONDecoder:
    """Decode a stream that is either concatenated JSON or multi-document YAML.

    The format is decided once, on the first ``decode()`` call, by peeking
    at up to ``buffer_size`` bytes: a stream whose first non-whitespace
    byte is ``{`` is JSON, anything else is YAML. The choice never changes
    afterwards. Not safe for concurrent use.

    Args:
        source: Binary stream, or in-memory ``bytes``/``str``
        buffer_size: Peek window used to classify the stream
        read_size: Chunk size for reads from the source
        max_document_size: Largest YAML document or pending JSON value
            accepted, None for no limit

    Example:
        >>> decoder = YAMLOrJSONDecoder(b"foo: bar\\n---\\nbaz: biz")
        >>> list(decoder)
        [{'foo': 'bar'}, {'baz': 'biz'}]
    """

    def __init__(
        self,
        source: Source,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        read_size: int = DEFAULT_READ_SIZE,
        max_document_size: Optional[int] = DEFAULT_MAX_DOCUMENT_SIZE,
    ):
        if buffer_size < 1:
            raise ValueError("buffer_size must be positive")
        self._source = as_binary_source(source)
        self._buffer_size = buffer_size
        self._read_size = read_size
        self._max_document_size = max_document_size
        self._strategy = Strategy.UNSELECTED
        self._decoder: Union[JSONStreamDecoder, YAMLToJSONDecoder, None] = None

    @classmethod
    def from_config(cls, source: Source, config: DecoderConfig) -> "YAMLOrJSONDecoder":
        return cls(
            source,
            buffer_size=config.buffer_size,
            read_size=config.read_size,
            max_document_size=config.max_document_size,
        )

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    def _select(self) -> None:
        reader, is_json = guess_json_stream(self._source, self._buffer_size)
        if is_json:
            self._decoder = JSONStreamDecoder(
                reader,
                read_size=self._read_size,
                max_document_size=self._max_document_size,
            )
            self._strategy = Strategy.JSON
        else:
            self._decoder = YAMLToJSONDecoder(
                reader,
                read_size=self._read_size,
                max_document_size=self._max_document_size,
            )
            self._strategy = Strategy.YAML

    def decode(self, into: Any = dict) -> Any:
        """Decode the next unit from the stream.

        Args:
            into: Target type; ``dict`` returns plain JSON values, a pydantic
                model class returns validated instances

        Returns:
            The decoded value

        Raises:
            EndOfStream: When the stream is exhausted (on every later call too)
            MalformedInputError: When the next unit cannot be parsed
        """
        if self._strategy is Strategy.UNSELECTED:
            self._select()
        return self._decoder.decode(into)

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.decode()
            except EndOfStream:
                return
