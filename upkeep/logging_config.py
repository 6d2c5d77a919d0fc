"""Logging configuration for upkeep."""

import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> Console:
    """Configure logging based on CLI options.

    Args:
        verbosity: Number of -v flags (0=warnings only, 1=info, 2+=debug)
        quiet: Only errors are logged (takes precedence over verbosity)
        stream: Output stream for logs, stderr by default. Never the
            reporter's stdout, or log records would break its current-line
            bookkeeping.

    Returns:
        The rich console log records are rendered on
    """
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    console = Console(file=stream if stream is not None else sys.stderr)

    handler = RichHandler(
        console=console,
        show_time=verbosity >= 2,
        show_path=verbosity >= 2,
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

    return console
