"""Head command - output the first N decoded records."""

import logging
import sys

import click

from ...config import pass_context
from ...core.decoder import YAMLOrJSONDecoder
from ...core.streaming import head as stream_head
from ...core.streaming import iter_records, write_ndjson
from ...errors import DocstreamError
from ..helpers import open_source, report_skipped

logger = logging.getLogger(__name__)


@click.command()
@click.argument("source", required=False)
@click.option(
    "-n",
    "--lines",
    "n",
    type=int,
    default=10,
    help="Number of records to output",
)
@click.option(
    "--skip-invalid",
    is_flag=True,
    help="Report malformed documents on stderr and keep going",
)
@pass_context
def head(ctx, source, n, skip_invalid):
    """Output the first N records from SOURCE as NDJSON.

    Decoding stops once N records have been written, so the rest of
    the stream is never parsed.

    Examples:
        docstream head manifests.yaml -n 1
        docstream head 3 < values.json
    """
    # Support "docstream head N" by treating a numeric first arg as the count
    if source and source.isdigit():
        n = int(source)
        source = None

    if n < 0:
        click.echo("Error: --lines must be >= 0", err=True)
        sys.exit(1)

    on_error = report_skipped if skip_invalid else None

    with open_source(source) as stream:
        decoder = YAMLOrJSONDecoder.from_config(stream, ctx.config)
        try:
            count = write_ndjson(
                stream_head(iter_records(decoder, on_error), n), sys.stdout
            )
        except DocstreamError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    logger.info("wrote %d of at most %d record(s)", count, n)
