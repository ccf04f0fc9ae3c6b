"""Pytest configuration and shared fixtures."""

import io
import json

import pytest
from click.testing import CliRunner

from docstream.cli import cli
from docstream.config import ENV_BUFFER_SIZE, ENV_MAX_DOCUMENT_SIZE, ENV_READ_SIZE


class TrickleReader(io.RawIOBase):
    """Binary reader that returns at most ``step`` bytes per read.

    Exercises the code paths where a document or value straddles reads.
    """

    def __init__(self, data: bytes, step: int = 1):
        super().__init__()
        self._data = data
        self._pos = 0
        self._step = step
        self.reads = 0

    def readable(self):
        return True

    def readinto(self, buffer):
        self.reads += 1
        n = min(len(buffer), self._step, len(self._data) - self._pos)
        buffer[:n] = self._data[self._pos:self._pos + n]
        self._pos += n
        return n


class CountingReader(io.BytesIO):
    """In-memory reader that records how often and how much was read."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self.reads = 0
        self.bytes_read = 0

    def read(self, size=-1):
        chunk = super().read(size)
        self.reads += 1
        self.bytes_read += len(chunk)
        return chunk


@pytest.fixture
def trickle():
    """Factory for TrickleReader instances."""
    return TrickleReader


@pytest.fixture
def counting():
    """Factory for CountingReader instances."""
    return CountingReader


@pytest.fixture(autouse=True)
def clear_docstream_env(monkeypatch):
    """Keep DOCSTREAM_* settings from the outer shell out of the tests."""
    for name in (ENV_BUFFER_SIZE, ENV_READ_SIZE, ENV_MAX_DOCUMENT_SIZE):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["cat", "file.yaml"])
        result = invoke(["cat"], input_data=b"foo: bar")
    """

    def _invoke(args, input_data=None, env=None):
        return cli_runner.invoke(cli, args, input=input_data, env=env)

    return _invoke


def ndjson_records(output: str) -> list:
    """Parse NDJSON lines out of CLI output, ignoring stderr text."""
    return [
        json.loads(line)
        for line in output.splitlines()
        if line.startswith("{") or line.startswith("[")
    ]


@pytest.fixture
def records():
    return ndjson_records


@pytest.fixture
def multi_doc_yaml(tmp_path):
    """A three document YAML file with a comment-only document in the middle."""
    path = tmp_path / "manifests.yaml"
    path.write_text(
        "kind: Service\nname: web\n"
        "---\n"
        "# nothing here\n"
        "--- \n"
        "kind: Deployment\nname: web\nreplicas: 3\n"
    )
    return path


@pytest.fixture
def json_stream(tmp_path):
    """Concatenated JSON objects with mixed whitespace between them."""
    path = tmp_path / "values.json"
    path.write_text('{"id": 1}{"id": 2}\n\n  {"id": 3, "tags": ["a", "b"]}\n')
    return path
