"""Logging configuration for nmsweep.

Diagnostics go to stderr through Rich so they do not interleave with
the live status lines on stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    console: Console | None = None,
) -> None:
    """Configure application-wide logging.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
        quiet: Only log errors. Ignored when verbose is set.
        console: Console to log to. Defaults to a stderr console.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    app_logger = logging.getLogger("nmsweep")
    app_logger.setLevel(level)
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
