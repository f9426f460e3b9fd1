"""Core logging implementation for stylekit."""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "setup_logging", "resolve_level"]

DEFAULT_LOGGER_NAME = "stylekit"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: int | str) -> int:
    """Convert a level name (e.g. "debug") or number to a logging level.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level, as a number or a level name.
        stream: Output stream.
    """
    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or DEFAULT_LOGGER_NAME)
