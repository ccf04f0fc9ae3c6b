"""Cat command - decode a YAML or JSON stream and output NDJSON."""

import logging
import sys

import click

from ...config import pass_context
from ...core.decoder import YAMLOrJSONDecoder
from ...core.streaming import iter_records, write_ndjson
from ...errors import DocstreamError
from ..helpers import open_source, report_skipped

logger = logging.getLogger(__name__)


@click.command()
@click.argument("source", required=False)
@click.option(
    "--skip-invalid",
    is_flag=True,
    help="Report malformed documents on stderr and keep going",
)
@pass_context
def cat(ctx, source, skip_invalid):
    """Decode every document or value in SOURCE and output NDJSON.

    SOURCE may hold concatenated JSON values or YAML documents separated
    by '---' lines; the format is detected automatically. Reads stdin
    when SOURCE is omitted or '-'.

    Examples:
        docstream cat manifests.yaml
        kubectl get pods -o json | docstream cat
        docstream --buffer-size 4096 cat - < mixed.txt
    """
    on_error = report_skipped if skip_invalid else None

    with open_source(source) as stream:
        decoder = YAMLOrJSONDecoder.from_config(stream, ctx.config)
        try:
            count = write_ndjson(iter_records(decoder, on_error), sys.stdout)
        except DocstreamError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    logger.info("decoded %d record(s) as %s", count, decoder.strategy.value)
