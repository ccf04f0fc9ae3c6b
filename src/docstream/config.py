"""Decoder configuration and CLI context."""

from __future__ import annotations

import os
from typing import Mapping, Optional

import click
from pydantic import BaseModel, Field

DEFAULT_BUFFER_SIZE = 1024
DEFAULT_READ_SIZE = 4096
DEFAULT_MAX_DOCUMENT_SIZE = 16 * 1024 * 1024

ENV_BUFFER_SIZE = "DOCSTREAM_BUFFER_SIZE"
ENV_READ_SIZE = "DOCSTREAM_READ_SIZE"
ENV_MAX_DOCUMENT_SIZE = "DOCSTREAM_MAX_DOCUMENT_SIZE"

_UNBOUNDED = ("none", "unbounded")


class DecoderConfig(BaseModel):
    """Tunables for a YAMLOrJSONDecoder."""

    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, ge=1)
    """Bytes peeked from the start of the stream to tell JSON from YAML.

    Small values are cheap but may misclassify a JSON stream that starts
    with a long run of whitespace.
    """

    read_size: int = Field(default=DEFAULT_READ_SIZE, ge=1)
    """Chunk size used for reads from the underlying source."""

    max_document_size: Optional[int] = Field(
        default=DEFAULT_MAX_DOCUMENT_SIZE, ge=1
    )
    """Largest pending YAML document, in bytes. None disables the limit."""


def _from_env(environ: Mapping[str, str], name: str):
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def resolve_config(
    buffer_size: Optional[int] = None,
    read_size: Optional[int] = None,
    max_document_size: Optional[int] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> DecoderConfig:
    """Build a DecoderConfig from explicit values, the environment and defaults.

    Resolution order for each field:
    1. Explicit argument (e.g. a CLI option)
    2. $DOCSTREAM_BUFFER_SIZE / $DOCSTREAM_READ_SIZE / $DOCSTREAM_MAX_DOCUMENT_SIZE
    3. Built-in default

    ``$DOCSTREAM_MAX_DOCUMENT_SIZE`` accepts ``none`` or ``unbounded`` to
    disable the document size limit.

    Raises:
        pydantic.ValidationError: If a resolved value is not a positive integer
    """
    environ = os.environ if environ is None else environ
    values = {}

    if buffer_size is None:
        buffer_size = _from_env(environ, ENV_BUFFER_SIZE)
    if buffer_size is not None:
        values["buffer_size"] = buffer_size

    if read_size is None:
        read_size = _from_env(environ, ENV_READ_SIZE)
    if read_size is not None:
        values["read_size"] = read_size

    if max_document_size is None:
        env_max = _from_env(environ, ENV_MAX_DOCUMENT_SIZE)
        if env_max is not None and env_max.lower() in _UNBOUNDED:
            values["max_document_size"] = None
        elif env_max is not None:
            values["max_document_size"] = env_max
    else:
        values["max_document_size"] = max_document_size

    return DecoderConfig(**values)


class DocstreamContext:
    def __init__(self):
        self.config = DecoderConfig()
        self.verbose = False


pass_context = click.make_pass_decorator(DocstreamContext, ensure=True)
