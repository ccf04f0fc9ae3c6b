"""Tests for YAML document splitting."""

import io

import pytest

from docstream.core.split import Scanner, split_yaml_document
from docstream.errors import DocumentTooLargeError


@pytest.mark.parametrize(
    "data,at_eof,advance,token",
    [
        (b"foo", True, 3, b"foo"),
        (b"fo", False, 0, None),
        (b"---", True, 3, b"---"),
        (b"---\n", True, 4, b"---\n"),
        (b"---\n", False, 0, None),
        (b"\n---\n", False, 5, b""),
        (b"\n---\n", True, 5, b""),
        (b"abc\n---\ndef", True, 8, b"abc"),
        (b"def", True, 3, b"def"),
        (b"", True, 0, b""),
    ],
)
def test_split_yaml_document(data, at_eof, advance, token):
    assert split_yaml_document(data, at_eof) == (advance, token)


def test_split_allows_trailing_text_on_separator_line():
    data = b"a: 1\n---   \nb: 2"
    advance, token = split_yaml_document(data, False)
    assert token == b"a: 1"
    assert data[advance:] == b"b: 2"


def test_split_waits_for_end_of_separator_line():
    """Without a newline after the marker, more input may still arrive."""
    assert split_yaml_document(b"a: 1\n---", False) == (0, None)
    assert split_yaml_document(b"a: 1\n---  ", False) == (0, None)


def test_split_separator_at_end_of_stream_is_discarded():
    assert split_yaml_document(b"a: 1\n---", True) == (8, b"a: 1")
    assert split_yaml_document(b"a: 1\n--- x", True) == (10, b"a: 1")


def test_split_partial_separator_is_literal_content():
    assert split_yaml_document(b"a: 1\n--", True) == (7, b"a: 1\n--")
    assert split_yaml_document(b"a: 1\n-", True) == (6, b"a: 1\n-")


def test_split_leading_marker_is_not_a_boundary():
    data = b"---\nstuff: 1\n---\nmore: 2"
    advance, token = split_yaml_document(data, False)
    assert token == b"---\nstuff: 1"
    assert data[advance:] == b"more: 2"


def test_split_carriage_return_after_marker():
    data = b"a: 1\r\n---\r\nb: 2"
    advance, token = split_yaml_document(data, True)
    assert token == b"a: 1\r"
    assert data[advance:] == b"b: 2"


def test_split_no_separator_returns_whole_input_once():
    data = b"a: 1\nb: [1, 2]\n-- not a marker"
    assert split_yaml_document(data, True) == (len(data), data)
    assert split_yaml_document(b"", True) == (0, b"")


def test_scanner_yields_each_document():
    source = io.BytesIO(b"---\nstuff: 1\n\n---       \n  ")
    scanner = Scanner(source)

    assert scanner.scan() == b"---\nstuff: 1\n"
    assert scanner.scan() == b"  "
    assert scanner.scan() is None
    assert scanner.scan() is None


def test_scanner_reassembles_documents_across_reads(trickle):
    source = trickle(b"a: 1\n---\nb: 2\n--- \nc: 3\n", step=1)
    assert list(Scanner(source, read_size=1)) == [b"a: 1", b"b: 2", b"c: 3\n"]


def test_scanner_empty_source():
    scanner = Scanner(io.BytesIO(b""))
    assert scanner.scan() is None
    assert list(scanner) == []


def test_scanner_emits_empty_documents():
    scanner = Scanner(io.BytesIO(b"\n---\na: 1"))
    assert list(scanner) == [b"", b"a: 1"]


def test_scanner_trailing_separator_produces_no_extra_document(trickle):
    scanner = Scanner(trickle(b"foo: bar\n---", step=3), read_size=3)
    assert list(scanner) == [b"foo: bar"]


def test_scanner_rejects_oversized_document():
    source = io.BytesIO(b"x" * 64 + b"\n---\ny: 1")
    scanner = Scanner(source, read_size=16, max_token_size=32)
    with pytest.raises(DocumentTooLargeError) as exc_info:
        scanner.scan()
    assert exc_info.value.limit == 32


def test_scanner_unbounded_document():
    data = b"k: " + b"v" * 10000
    scanner = Scanner(io.BytesIO(data), read_size=100, max_token_size=None)
    assert scanner.scan() == data


def test_scanner_custom_split_function():
    def split_lines(data, at_eof):
        data = bytes(data)
        idx = data.find(b"\n")
        if idx >= 0:
            return idx + 1, data[:idx]
        if at_eof:
            return len(data), data
        return 0, None

    scanner = Scanner(io.BytesIO(b"one\ntwo\nthree"), split=split_lines)
    assert list(scanner) == [b"one", b"two", b"three"]


def test_scanner_rejects_invalid_advance():
    scanner = Scanner(io.BytesIO(b"abc"), split=lambda data, at_eof: (99, b""))
    with pytest.raises(ValueError):
        scanner.scan()


def test_scanner_large_document_needs_few_reads(counting):
    data = b"k: " + b"v" * 8_000_000
    source = counting(data)
    scanner = Scanner(source, max_token_size=None)

    assert scanner.scan() == data
    assert source.reads < 20
    assert scanner.scan() is None


def test_scanner_many_documents_after_large_one(counting):
    data = b"big: " + b"x" * 100_000 + b"".join(
        b"\n---\nn: %d" % i for i in range(2000)
    )
    scanner = Scanner(counting(data), read_size=64)
    documents = list(scanner)
    assert len(documents) == 2001
    assert documents[-1] == b"n: 1999"
