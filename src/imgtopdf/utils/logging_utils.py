"""
Logging setup for the command line.
"""
from __future__ import annotations

import logging

CLI_FORMAT = "%(levelname)s: %(message)s"
CLI_VERBOSE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Third-party loggers that are noisy at DEBUG
QUIET_LOGGERS = ("PIL",)


def configure_cli_logging(verbose: bool = False) -> None:
    """Configure root logging for the command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=CLI_VERBOSE_FORMAT if verbose else CLI_FORMAT,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)
