"""Record stream utilities.

Utilities for turning a decoder into an NDJSON stream:
- iter_records: Decoded units, optionally skipping malformed ones
- head: First N records
- write_ndjson: One JSON record per line
"""

import json
from itertools import islice
from typing import Any, Callable, Iterable, Iterator, Optional, TextIO

from ..errors import EndOfStream, MalformedInputError


def iter_records(
    decoder,
    on_error: Optional[Callable[[MalformedInputError], None]] = None,
) -> Iterator[Any]:
    """Yield decoded units until the stream is exhausted.

    Args:
        decoder: Object with a ``decode()`` method raising EndOfStream
        on_error: Called with each MalformedInputError; the unit is skipped
            and decoding continues. Without it the error propagates.
    """
    while True:
        try:
            yield decoder.decode()
        except EndOfStream:
            return
        except MalformedInputError as e:
            if on_error is None:
                raise
            on_error(e)


def head(records: Iterable[Any], n: int) -> Iterator[Any]:
    """Yield the first N records.

    Stops pulling from ``records`` as soon as N have been yielded, so the
    rest of the stream is never decoded.
    """
    return islice(records, n)


def write_ndjson(records: Iterable[Any], output_stream: TextIO) -> int:
    """Write records to output stream as NDJSON.

    Returns:
        Number of records written
    """
    count = 0
    for record in records:
        output_stream.write(json.dumps(record, ensure_ascii=False))
        output_stream.write("\n")
        count += 1
    return count
