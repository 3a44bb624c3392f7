"""Logging setup for the command line."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level(verbose: bool = False) -> int:
    """Get logging level from --verbose or MEETBRIEF_LOG_LEVEL (default WARNING)."""
    if verbose:
        return logging.INFO
    level_str = os.environ.get("MEETBRIEF_LOG_LEVEL", "WARNING").upper()
    return LEVELS.get(level_str, logging.WARNING)


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route meetbrief log records through a rich handler on stderr."""
    level = get_log_level(verbose)
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("meetbrief")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
