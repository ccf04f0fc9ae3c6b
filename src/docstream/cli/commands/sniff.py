"""Sniff command - report whether a stream is JSON or YAML."""

import click

from ...config import pass_context
from ...core.sniff import guess_json_stream
from ..helpers import open_source


@click.command()
@click.argument("source", required=False)
@pass_context
def sniff(ctx, source):
    """Print 'json' or 'yaml' for SOURCE.

    Only the first --buffer-size bytes are inspected.
    """
    with open_source(source) as stream:
        _, is_json = guess_json_stream(stream, ctx.config.buffer_size)
    click.echo("json" if is_json else "yaml")
