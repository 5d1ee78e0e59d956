"""Command-line interface for DocStats."""

from .main import cli

__all__ = ["cli"]
