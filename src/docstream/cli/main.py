"""docstream CLI main entry point with global options."""

import sys

import click
from pydantic import ValidationError

from ..config import DocstreamContext, resolve_config
from .helpers import configure_logging


@click.group()
@click.option(
    "--buffer-size",
    type=int,
    default=None,
    help="Bytes peeked to detect JSON vs YAML (overrides $DOCSTREAM_BUFFER_SIZE)",
)
@click.option(
    "--read-size",
    type=int,
    default=None,
    help="Chunk size for reads (overrides $DOCSTREAM_READ_SIZE)",
)
@click.option(
    "--max-document-size",
    type=int,
    default=None,
    help="Largest YAML document in bytes (overrides $DOCSTREAM_MAX_DOCUMENT_SIZE)",
)
@click.option("-v", "--verbose", count=True, help="Log to stderr (-vv for debug)")
@click.version_option(package_name="docstream")
@click.pass_context
def cli(ctx, buffer_size, read_size, max_document_size, verbose):
    """docstream - decode YAML document streams or concatenated JSON."""
    ctx.ensure_object(DocstreamContext)
    configure_logging(verbose)

    try:
        ctx.obj.config = resolve_config(
            buffer_size=buffer_size,
            read_size=read_size,
            max_document_size=max_document_size,
        )
    except ValidationError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(1)
    ctx.obj.verbose = verbose > 0


# Register commands at module level so tests can import cli with commands attached
from .commands.cat import cat
from .commands.head import head
from .commands.sniff import sniff
from .commands.split import split

cli.add_command(cat)
cli.add_command(head)
cli.add_command(sniff)
cli.add_command(split)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
