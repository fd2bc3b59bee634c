"""Interactive plugin selection for the Serverless Python Generator.

This module contains the Textual frontend of the plugin menu and the
numbered-list fallback used when no interactive terminal is available.
Textual switches the terminal to raw mode when the application starts and
restores it when the application exits, whichever way it exits.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

try:
    from rich.markup import escape
    from textual.app import App
    from textual.binding import Binding
    from textual.containers import Container
    from textual.screen import Screen
    from textual.widget import Widget
    from textual.widgets import Footer, Header
except ImportError as e:
    print(f"Error importing required packages: {e}")
    print("Please ensure all dependencies are installed correctly.")
    import sys

    sys.exit(1)

from slsgen.constants import EXIT_INTERRUPTED, EXIT_OK
from slsgen.errors import GeneratorError, NoInteractiveTerminalError
from slsgen.logging_utils import get_logger
from slsgen.menu import DEFAULT_KEY_BINDINGS, MenuKey, MenuState, PluginMenu, decode_key
from slsgen.mixins import DebugMixin
from slsgen.terminal import is_interactive, read_line

if TYPE_CHECKING:
    from typing import TextIO

    from rich.console import Console
    from rich.text import Text
    from textual.app import ComposeResult
    from textual.events import Key

logger = get_logger(__name__)


class PluginMenuView(Widget):
    """Widget drawing the rendered plugin menu."""

    DEFAULT_CSS = """
    PluginMenuView {
        height: auto;
    }
    """

    def __init__(self, menu: PluginMenu, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.menu = menu

    def render(self) -> Text:
        """Render the menu through :meth:`PluginMenu.render`."""
        return self.menu.render()


class PluginMenuScreen(Screen[None], DebugMixin):
    """Screen rendering a :class:`PluginMenu` and feeding it key presses."""

    DEBUG_CONTAINER_ID = "#menu-container"

    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Abort", show=False, priority=True),
        Binding("ctrl+d", "toggle_debug", "Debug"),
        Binding("ctrl+y", "copy_debug", "Copy debug", show=False),
    ]

    def __init__(self, menu: PluginMenu) -> None:
        """Initialize the plugin menu screen.

        Parameters
        ----------
        menu : PluginMenu
            Menu state machine to drive

        """
        super().__init__()
        self.menu = menu

    def compose(self) -> ComposeResult:
        """Create the layout for this screen."""
        yield Header()
        yield Container(PluginMenuView(self.menu, id="menu_view"), id="menu-container")
        yield Footer()

    def on_mount(self) -> None:
        """Activate the menu and draw it."""
        if self.menu.state is MenuState.IDLE:
            self.menu.open()
        self.refresh_menu()
        self.set_interval(1.0, self.update_debug_output)

    def refresh_menu(self) -> None:
        """Redraw the menu; its height changes with the warning line."""
        self.query_one(PluginMenuView).refresh(layout=True)

    def on_key(self, event: Key) -> None:
        """Translate a key press into a menu event."""
        if not self.menu.is_active:
            return
        menu_key = decode_key(event.key, self.menu.bindings)
        if menu_key is MenuKey.OTHER:
            return
        event.stop()
        event.prevent_default()

        self.menu.handle(menu_key)
        if self.menu.state is MenuState.CONFIRMED:
            self.app.exit(self.menu.selected_plugins())
        elif self.menu.state is MenuState.CANCELLED:
            self.app.exit([])
        else:
            self.refresh_menu()

    def action_interrupt(self) -> None:
        """Leave the menu as if interrupted; the caller re-raises."""
        logger.debug("Plugin menu interrupted")
        self.app.exit(None, return_code=EXIT_INTERRUPTED)


class PluginMenuApp(App[list[str]]):
    """Textual application hosting the plugin menu screen."""

    TITLE = "Serverless Python Generator"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #menu-container {
        padding: 1 2;
    }
    .debug-panel {
        height: 12;
        border: solid $warning;
    }
    """

    def __init__(self, menu: PluginMenu) -> None:
        """Initialize the plugin menu application.

        Parameters
        ----------
        menu : PluginMenu
            Menu state machine to drive

        """
        super().__init__()
        self.menu = menu

    def on_mount(self) -> None:
        """Show the menu screen."""
        self.push_screen(PluginMenuScreen(self.menu))


def run_plugin_menu(
    catalog: Sequence[str],
    bindings: Mapping[MenuKey, Iterable[str]] = DEFAULT_KEY_BINDINGS,
) -> list[str]:
    """Let the user pick plugins with the interactive menu.

    Parameters
    ----------
    catalog : Sequence[str]
        Plugin names to offer
    bindings : Mapping[MenuKey, Iterable[str]], optional
        Key-binding table for the menu

    Returns
    -------
    list[str]
        Confirmed plugins in catalog order, empty if the user cancelled

    Raises
    ------
    NoInteractiveTerminalError
        If stdin or stdout is not a terminal
    KeyboardInterrupt
        If the user pressed Ctrl+C, raised after the terminal was restored
    GeneratorError
        If the menu application failed

    """
    if not is_interactive():
        msg = "The plugin menu needs an interactive terminal"
        raise NoInteractiveTerminalError(msg)

    app = PluginMenuApp(PluginMenu(catalog, bindings))
    result = app.run()

    if app.return_code == EXIT_INTERRUPTED:
        raise KeyboardInterrupt
    if app.return_code not in (None, EXIT_OK):
        msg = f"Plugin menu exited with code {app.return_code}"
        raise GeneratorError(msg)
    return result or []


def select_plugins_numbered(
    catalog: Sequence[str],
    console: Console,
    stream: TextIO | None = None,
) -> list[str]:
    """Pick plugins from a numbered list with one line of input.

    Parameters
    ----------
    catalog : Sequence[str]
        Plugin names to offer
    console : Console
        Console for output and input
    stream : TextIO, optional
        Stream to read the answer from instead of stdin

    Returns
    -------
    list[str]
        Selected plugins in catalog order, possibly empty

    """
    console.print("\n📌 [bold]Available plugins:[/bold]")
    for number, name in enumerate(catalog, start=1):
        console.print(f"  [green]{number}.[/green] {name}")

    answer = read_line(console, "Select plugins (space-separated numbers): ", stream)

    chosen: set[int] = set()
    for token in answer.split():
        if token.isdigit() and 1 <= int(token) <= len(catalog):
            chosen.add(int(token) - 1)
        else:
            console.print(f"[yellow]⚠️  Ignoring invalid number: {escape(token)}[/yellow]")

    selected = [catalog[index] for index in sorted(chosen)]
    if selected:
        console.print("🔌 Selected plugins:")
        for name in selected:
            console.print(f"  [green]✅ {name}[/green]")
    else:
        console.print("[yellow]⚠️  No plugins selected[/yellow]")
    return selected
