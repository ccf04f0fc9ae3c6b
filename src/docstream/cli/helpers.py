"""CLI helper utilities shared across commands."""

import logging
import sys
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

import click

logger = logging.getLogger(__name__)


def configure_logging(verbose: int) -> None:
    """Send log records to stderr; -v enables INFO, -vv enables DEBUG."""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


@contextmanager
def open_source(source: Optional[str]) -> Iterator[BinaryIO]:
    """Open SOURCE for binary reading; None or '-' means stdin."""
    if source is None or source == "-":
        logger.debug("reading from stdin")
        yield click.get_binary_stream("stdin")
        return

    try:
        stream = open(source, "rb")
    except OSError as e:
        click.echo(f"Error: cannot open {source}: {e.strerror}", err=True)
        sys.exit(1)

    logger.debug("reading from %s", source)
    with stream:
        yield stream


def report_skipped(error) -> None:
    """Report a malformed unit that --skip-invalid passed over."""
    click.echo(f"Warning: skipped {error}", err=True)
