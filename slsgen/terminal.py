"""Console helpers shared by the prompts and the plugin menu fallback."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from typing import TextIO


def is_interactive() -> bool:
    """Return whether both stdin and stdout are attached to a terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def read_line(console: Console, prompt: str, stream: TextIO | None = None) -> str:
    """Read one line of input after printing ``prompt``.

    Parameters
    ----------
    console : Console
        Console used to print the prompt
    prompt : str
        Prompt text, may contain rich markup
    stream : TextIO, optional
        Stream to read from instead of stdin

    Returns
    -------
    str
        The line without its trailing newline

    Raises
    ------
    EOFError
        If the input is exhausted

    """
    value = console.input(prompt, stream=stream)
    # Console.input returns "" at end of a stream, a bare newline for a blank line
    if stream is not None and value == "":
        msg = "No more input available"
        raise EOFError(msg)
    return value.rstrip("\r\n")
