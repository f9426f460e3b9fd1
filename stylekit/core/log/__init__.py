"""Logging micro API for stylekit."""

from .lib import get_logger, resolve_level, setup_logging

__all__ = ["get_logger", "resolve_level", "setup_logging"]
