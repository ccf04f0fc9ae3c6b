"""Split command - emit raw YAML documents without parsing them."""

import json
import sys

import click

from ...config import pass_context
from ...core.split import Scanner
from ...errors import DocstreamError
from ..helpers import open_source


@click.command()
@click.argument("source", required=False)
@pass_context
def split(ctx, source):
    """Cut SOURCE on '---' separator lines and output each document.

    Each document is written as an NDJSON record with its position and
    raw text: {"index": 0, "document": "foo: bar"}
    """
    config = ctx.config
    with open_source(source) as stream:
        scanner = Scanner(
            stream,
            read_size=config.read_size,
            max_token_size=config.max_document_size,
        )
        try:
            for index, document in enumerate(scanner):
                record = {
                    "index": index,
                    "document": document.decode("utf-8", errors="replace"),
                }
                sys.stdout.write(json.dumps(record, ensure_ascii=False) + "\n")
        except DocstreamError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
