"""Plugin selection menu state machine.

This module holds the terminal-independent part of the plugin menu: the
decoding of raw key sequences into logical key events, the selection state
with its cursor, the state transitions, and the rendering of the menu into
``rich`` text. The Textual frontend in :mod:`slsgen.menu_app` drives it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import Enum

from rich.text import Text

from slsgen.logging_utils import get_logger

logger = get_logger(__name__)


class MenuKey(Enum):
    """Logical key events understood by the menu."""

    UP = "up"
    DOWN = "down"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    OTHER = "other"


class MenuState(Enum):
    """Lifecycle of a menu session."""

    IDLE = "idle"
    ACTIVE = "active"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# Raw terminal sequences and Textual key names for each logical key
DEFAULT_KEY_BINDINGS: dict[MenuKey, tuple[str, ...]] = {
    MenuKey.UP: ("k", "up", "\x1b[A", "\x1bOA"),
    MenuKey.DOWN: ("j", "down", "\x1b[B", "\x1bOB"),
    MenuKey.TOGGLE: (" ", "space"),
    MenuKey.CONFIRM: ("\r", "\n", "enter"),
    MenuKey.CANCEL: ("q",),
}

# Display labels for key sequences shown in the footer
KEY_LABELS: dict[str, str] = {
    "up": "↑",
    "\x1b[A": "↑",
    "\x1bOA": "↑",
    "down": "↓",
    "\x1b[B": "↓",
    "\x1bOB": "↓",
    " ": "space",
    "\r": "enter",
    "\n": "enter",
}

EMPTY_SELECTION_WARNING = "Select at least one plugin before confirming (or press q to skip)."


def decode_key(key: str, bindings: Mapping[MenuKey, Iterable[str]] = DEFAULT_KEY_BINDINGS) -> MenuKey:
    """Map a raw key sequence or Textual key name to a logical key.

    Parameters
    ----------
    key : str
        The key as read from the terminal, e.g. ``"\\x1b[A"`` or ``"up"``
    bindings : Mapping[MenuKey, Iterable[str]], optional
        Key-binding table, by default :data:`DEFAULT_KEY_BINDINGS`

    Returns
    -------
    MenuKey
        The matching logical key, ``MenuKey.OTHER`` when nothing matches

    """
    for menu_key, sequences in bindings.items():
        if key in sequences:
            return menu_key
    return MenuKey.OTHER


class SelectionState:
    """Per-entry toggles over a catalog plus a wrapping cursor."""

    def __init__(self, size: int) -> None:
        if size < 1:
            msg = "The plugin catalog must contain at least one entry"
            raise ValueError(msg)
        self.checked: list[bool] = [False] * size
        self.cursor = 0

    def move(self, step: int) -> None:
        """Move the cursor by ``step`` entries, wrapping at both ends."""
        self.cursor = (self.cursor + step) % len(self.checked)

    def toggle(self) -> None:
        """Flip the entry under the cursor."""
        self.checked[self.cursor] = not self.checked[self.cursor]

    @property
    def count(self) -> int:
        """Number of checked entries."""
        return sum(self.checked)


class PluginMenu:
    """Keyboard-driven multi-select over a fixed plugin catalog.

    The menu starts ``IDLE``; :meth:`open` activates it and :meth:`handle`
    feeds it logical key events until it reaches ``CONFIRMED`` or
    ``CANCELLED``. Confirming requires at least one checked entry.

    Parameters
    ----------
    catalog : Sequence[str]
        Plugin names, in display order
    bindings : Mapping[MenuKey, Iterable[str]], optional
        Key-binding table used by :meth:`press`
    title : str, optional
        Header line of the rendered menu

    """

    def __init__(
        self,
        catalog: Sequence[str],
        bindings: Mapping[MenuKey, Iterable[str]] = DEFAULT_KEY_BINDINGS,
        title: str = "Select Serverless plugins",
    ) -> None:
        self.catalog: tuple[str, ...] = tuple(catalog)
        self.bindings = bindings
        self.title = title
        self.selection = SelectionState(len(self.catalog))
        self.state = MenuState.IDLE
        self.warning = ""

    @property
    def cursor(self) -> int:
        """Index of the highlighted entry."""
        return self.selection.cursor

    @property
    def is_active(self) -> bool:
        """Whether the menu still accepts key events."""
        return self.state is MenuState.ACTIVE

    def open(self) -> None:
        """Enter the ``ACTIVE`` state with a fresh selection."""
        if self.state is not MenuState.IDLE:
            msg = f"Menu cannot be opened from state {self.state.name}"
            raise RuntimeError(msg)
        self.selection = SelectionState(len(self.catalog))
        self.state = MenuState.ACTIVE
        logger.debug("Plugin menu opened with %d entries", len(self.catalog))

    def press(self, key: str) -> bool:
        """Decode a raw key and handle it; see :meth:`handle`."""
        return self.handle(decode_key(key, self.bindings))

    def handle(self, event: MenuKey) -> bool:
        """Apply a logical key event to the menu.

        Parameters
        ----------
        event : MenuKey
            The decoded key event

        Returns
        -------
        bool
            True if the event changed something that needs a re-render

        """
        if not self.is_active:
            msg = f"Menu is not active (state {self.state.name})"
            raise RuntimeError(msg)

        if event is MenuKey.OTHER:
            return False

        self.warning = ""
        if event is MenuKey.UP:
            self.selection.move(-1)
        elif event is MenuKey.DOWN:
            self.selection.move(1)
        elif event is MenuKey.TOGGLE:
            self.selection.toggle()
        elif event is MenuKey.CONFIRM:
            if self.selection.count == 0:
                self.warning = EMPTY_SELECTION_WARNING
                logger.debug("Confirm ignored: nothing selected")
            else:
                self.state = MenuState.CONFIRMED
                logger.debug("Plugin menu confirmed: %s", self.selected_plugins())
        elif event is MenuKey.CANCEL:
            self.state = MenuState.CANCELLED
            logger.debug("Plugin menu cancelled")
        return True

    def selected_plugins(self) -> list[str]:
        """Checked entries in catalog order; empty once cancelled."""
        if self.state is MenuState.CANCELLED:
            return []
        return [name for name, checked in zip(self.catalog, self.selection.checked) if checked]

    def counter_text(self) -> str:
        """The running ``K/N selected`` counter."""
        return f"{self.selection.count}/{len(self.catalog)} selected"

    def footer_text(self) -> str:
        """Footer line listing the key bindings."""
        parts = []
        for menu_key, sequences in self.bindings.items():
            labels: list[str] = []
            for sequence in sequences:
                label = KEY_LABELS.get(sequence, sequence)
                if label not in labels:
                    labels.append(label)
            parts.append(f"{'/'.join(labels)} {menu_key.value}")
        return "  ".join(parts)

    def render_entries(self) -> Text:
        """Render one line per catalog entry, highlighting the cursor entry."""
        text = Text()
        for index, (name, checked) in enumerate(zip(self.catalog, self.selection.checked)):
            pointer = "›" if index == self.cursor else " "
            marker = "[x]" if checked else "[ ]"
            style = "reverse bold" if index == self.cursor else ("green" if checked else "")
            if index:
                text.append("\n")
            text.append(f"{pointer} {marker} {name}", style=style)
        return text

    def render(self) -> Text:
        """Render the whole menu: header, counter, entries and footer."""
        text = Text()
        text.append(self.title, style="bold")
        text.append("\n")
        text.append(self.counter_text(), style="dim")
        text.append("\n\n")
        text.append_text(self.render_entries())
        text.append("\n\n")
        text.append(self.footer_text(), style="dim")
        if self.warning:
            text.append("\n")
            text.append(self.warning, style="yellow")
        return text
