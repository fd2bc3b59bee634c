"""Logging utilities for the Serverless Python Generator.

This module provides TUI-aware logging capabilities including a custom handler
that keeps recent log messages for display in the plugin menu's debug panel.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from slsgen.constants import DEBUG_MODE

LOG_FILE_NAME = "slsgen_debug.log"


class TUILogHandler(logging.Handler):
    """Custom logging handler that captures messages for TUI display."""

    def __init__(self, max_messages: int = 100) -> None:
        """Initialize the TUI log handler.

        Parameters
        ----------
        max_messages : int, optional
            Number of most recent messages to keep, by default 100

        """
        super().__init__()
        self.messages: list[str] = []
        self.max_messages = max_messages

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record by storing it for TUI display.

        Parameters
        ----------
        record : logging.LogRecord
            The log record to emit

        """
        try:
            msg = self.format(record)
            self.messages.append(msg)
            if len(self.messages) > self.max_messages:
                self.messages.pop(0)
        except Exception:
            self.handleError(record)

    def get_messages(self) -> list[str]:
        """Get all captured log messages.

        Returns
        -------
        list[str]
            A copy of all captured log messages

        """
        return self.messages.copy()


# Global TUI log handler for the debug panel
tui_log_handler = TUILogHandler()


def log_file_path() -> Path:
    """Return the path of the debug log file."""
    return Path(tempfile.gettempdir()) / LOG_FILE_NAME


def setup_logging(debug_mode: bool = False) -> None:
    """Set up logging configuration based on debug mode.

    Parameters
    ----------
    debug_mode : bool, optional
        Whether to log everything to the debug file, by default False

    """
    # Clear any existing handlers to prevent duplicates
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG)

    # The debug panel captures everything in debug mode, INFO and up otherwise
    tui_log_handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)
    root_logger.addHandler(tui_log_handler)

    file_handler = logging.FileHandler(log_file_path())
    file_handler.setLevel(logging.DEBUG if debug_mode else logging.WARNING)
    root_logger.addHandler(file_handler)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    Parameters
    ----------
    name : str
        The name for the logger

    Returns
    -------
    logging.Logger
        Configured logger instance

    """
    return logging.getLogger(name)


# Initialize logging based on debug mode
setup_logging(DEBUG_MODE)
