"""Utility modules for DocStats."""

from .formatting import format_count, format_file_size
from .logging import get_console, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "get_console",
    "format_file_size",
    "format_count",
]
