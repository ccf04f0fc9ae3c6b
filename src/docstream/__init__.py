"""docstream: decode streams of YAML documents or concatenated JSON values."""

from .core.decoder import (
    JSONStreamDecoder,
    Strategy,
    YAMLOrJSONDecoder,
    YAMLToJSONDecoder,
)
from .core.sniff import ReplayReader, guess_json_stream
from .core.split import Scanner, split_yaml_document
from .errors import (
    DocstreamError,
    DocumentTooLargeError,
    EndOfStream,
    MalformedInputError,
)

__all__ = [
    "__version__",
    "DocstreamError",
    "DocumentTooLargeError",
    "EndOfStream",
    "JSONStreamDecoder",
    "MalformedInputError",
    "ReplayReader",
    "Scanner",
    "Strategy",
    "YAMLOrJSONDecoder",
    "YAMLToJSONDecoder",
    "guess_json_stream",
    "split_yaml_document",
]

__version__ = "0.1.0"
