"""
Tests for utils.logging_utils
"""

import logging

import pytest

from imgtopdf.utils.logging_utils import (
    CLI_FORMAT,
    CLI_VERBOSE_FORMAT,
    configure_cli_logging,
)


@pytest.fixture
def restore_root_logging():
    """Put the root logger and PIL back the way the test found them."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    pil_level = logging.getLogger("PIL").level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("PIL").setLevel(pil_level)


class TestConfigureCliLogging:
    """Root logger setup for the command line."""

    def test_configure_when_default_then_info_and_short_format(self, restore_root_logging):
        # Act
        configure_cli_logging()

        # Assert
        root = restore_root_logging
        assert root.level == logging.INFO
        assert root.handlers[-1].formatter._fmt == CLI_FORMAT

    def test_configure_when_verbose_then_debug_and_detailed_format(self, restore_root_logging):
        configure_cli_logging(verbose=True)

        root = restore_root_logging
        assert root.level == logging.DEBUG
        assert root.handlers[-1].formatter._fmt == CLI_VERBOSE_FORMAT

    def test_configure_when_verbose_then_pil_kept_at_info(self, restore_root_logging):
        configure_cli_logging(verbose=True)

        assert logging.getLogger("PIL").level == logging.INFO
        assert not logging.getLogger("PIL").isEnabledFor(logging.DEBUG)

    def test_configure_when_called_twice_then_single_handler(self, restore_root_logging):
        configure_cli_logging()
        configure_cli_logging(verbose=True)

        root = restore_root_logging
        assert len(root.handlers) == 1
