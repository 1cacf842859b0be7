"""
log.py — Logging setup for the command line.

Library modules only create loggers with logging.getLogger(__name__); they
never configure handlers.  The CLI calls setup_logging() once at startup to
route everything through rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE_LOGGER = "yt_caption_extractor"


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Send package log records to stderr through a RichHandler.

    Calling it again replaces the handler instead of stacking a second one.
    """
    if isinstance(level, str):
        level = level.upper()

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger(_PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
