"""Exception types raised by the Serverless Python Generator."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for generator errors."""


class ValidationError(GeneratorError):
    """User input failed validation; recovered by re-prompting."""


class ConfigParseError(GeneratorError):
    """The persisted configuration file could not be parsed.

    Parameters
    ----------
    path : str
        Path of the offending file
    reason : str
        Short description of what is wrong with it

    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not parse saved configuration '{path}': {reason}")
        self.path = path
        self.reason = reason


class NoInteractiveTerminalError(GeneratorError):
    """The interactive plugin menu needs a TTY on both stdin and stdout."""
