"""Tests for the logging utilities."""

import logging

from slsgen.logging_utils import TUILogHandler, get_logger, log_file_path, setup_logging, tui_log_handler


class TestTUILogHandler:
    """Test the TUILogHandler class."""

    def test_keeps_recent_messages(self) -> None:
        """Test that only the newest messages are kept."""
        handler = TUILogHandler(max_messages=2)
        logger = logging.getLogger("slsgen.test.handler")
        logger.propagate = False
        logger.addHandler(handler)
        try:
            for number in range(3):
                logger.warning("message %d", number)
        finally:
            logger.removeHandler(handler)

        assert handler.get_messages() == ["message 1", "message 2"]


class TestSetupLogging:
    """Test logging setup."""

    def test_handler_levels(self) -> None:
        """Test the handler levels for normal and debug mode."""
        try:
            setup_logging(False)
            root = logging.getLogger()
            assert tui_log_handler in root.handlers
            assert tui_log_handler.level == logging.INFO
            file_handler = next(h for h in root.handlers if isinstance(h, logging.FileHandler))
            assert file_handler.level == logging.WARNING
            assert file_handler.baseFilename == str(log_file_path())

            setup_logging(True)
            assert tui_log_handler.level == logging.DEBUG
            assert len(logging.getLogger().handlers) == 2
        finally:
            setup_logging(False)

    def test_get_logger(self) -> None:
        """Test that get_logger returns the named logger."""
        assert get_logger("slsgen.main") is logging.getLogger("slsgen.main")
