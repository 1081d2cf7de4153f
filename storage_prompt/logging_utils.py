"""Logging setup for the storage-prompt CLI."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = {
    "OFF": logging.CRITICAL + 10,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_LOGGER_NAME = "storage_prompt"


def parse_level(level: str) -> int:
    """Map a level name to a logging constant. Raises ValueError if unknown."""
    try:
        return LOG_LEVELS[level.strip().upper()]
    except KeyError:
        raise ValueError(
            f"Unknown log level: {level!r}. "
            f"Valid levels: {', '.join(LOG_LEVELS)}"
        )


def setup_logging(
    level: str = "WARNING", console: Optional[Console] = None
) -> logging.Logger:
    """Attach a single RichHandler to the package logger."""
    numeric_level = parse_level(level)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(numeric_level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
