"""Shared helpers that sit outside the conversion pipeline."""

from .logging_utils import configure_cli_logging

__all__ = [
    "configure_cli_logging",
]
