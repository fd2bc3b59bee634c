"""Mixins for screen functionality.

This module contains the debug panel mixin used by the plugin menu screen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

try:
    import pyperclip
    from textual.containers import Container
    from textual.css.query import NoMatches
    from textual.widgets import Label, RichLog
except ImportError as e:
    print(f"Error importing required packages: {e}")
    print("Please ensure all dependencies are installed correctly.")
    import sys

    sys.exit(1)

from slsgen.constants import MAX_DEBUG_MESSAGES
from slsgen.logging_utils import get_logger, tui_log_handler

if TYPE_CHECKING:
    from textual.screen import Screen

logger = get_logger(__name__)


class DebugMixin:
    """Mixin class to add a toggleable debug panel to screens.

    This mixin should be used with classes that inherit from Screen and
    define ``DEBUG_CONTAINER_ID``, the container the panel is mounted in.
    """

    DEBUG_CONTAINER_ID = "#main-container"

    def _populate_debug_log(self, debug_log: RichLog) -> None:
        """Populate debug log with current messages.

        Parameters
        ----------
        debug_log : RichLog
            The RichLog widget to populate with debug messages

        """
        messages = tui_log_handler.get_messages()

        if not messages:
            debug_log.write("No debug messages available yet.")
            return
        for msg in messages[-MAX_DEBUG_MESSAGES:]:
            debug_log.write(msg)

    def update_debug_output(self) -> None:
        """Refresh the debug panel with the latest captured log messages."""
        screen = cast("Screen[object]", self)
        try:
            debug_log = screen.query_one("#debug_log", RichLog)
        except NoMatches:
            # Panel not shown
            return
        debug_log.clear()
        self._populate_debug_log(debug_log)

    def action_toggle_debug(self) -> None:
        """Show the debug panel, or remove it if it is already shown."""
        screen = cast("Screen[object]", self)
        try:
            screen.query_one("#debug_container").remove()
            return
        except NoMatches:
            pass

        debug_log = RichLog(max_lines=MAX_DEBUG_MESSAGES, wrap=True, markup=False, id="debug_log")
        # Keep navigation keys for the menu
        debug_log.can_focus = False
        self._populate_debug_log(debug_log)

        screen.query_one(self.DEBUG_CONTAINER_ID).mount(
            Container(
                Label("Debug Output (Ctrl+D to toggle, Ctrl+Y to copy):", classes="debug-title"),
                debug_log,
                id="debug_container",
                classes="debug-panel",
            ),
        )
        logger.debug("DebugMixin: debug panel shown")

    def action_copy_debug(self) -> None:
        """Copy the captured debug messages to the clipboard."""
        screen = cast("Screen[object]", self)
        try:
            pyperclip.copy("\n".join(tui_log_handler.get_messages()))
        except pyperclip.PyperclipException as e:
            screen.notify(f"Failed to copy debug output: {e}", timeout=3, severity="error")
            return
        screen.notify("Debug output copied to clipboard!", timeout=2, severity="information")
