"""Tests for the Textual plugin menu and the numbered-list fallback."""

import asyncio
import io
from unittest.mock import PropertyMock, patch

import pytest

from slsgen.constants import EXIT_INTERRUPTED
from slsgen.errors import GeneratorError, NoInteractiveTerminalError
from slsgen.menu import EMPTY_SELECTION_WARNING, MenuState, PluginMenu
from slsgen.menu_app import PluginMenuApp, PluginMenuView, run_plugin_menu, select_plugins_numbered


def drive(app: PluginMenuApp, *keys: str) -> PluginMenuApp:
    """Run ``app`` headless and press ``keys``."""

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press(*keys)

    asyncio.run(scenario())
    return app


class TestPluginMenuApp:
    """Test the Textual frontend with a headless pilot."""

    def test_confirm_returns_selection(self, catalog: list[str]) -> None:
        """Test that Down, Space, Down, Space, Enter returns B and C."""
        app = drive(PluginMenuApp(PluginMenu(catalog)), "down", "space", "j", "space", "enter")
        assert app.return_value == ["B", "C"]
        assert app.menu.cursor == 2
        assert app.menu.state is MenuState.CONFIRMED

    def test_cancel_returns_empty(self, catalog: list[str]) -> None:
        """Test that q returns an empty selection after toggling."""
        app = drive(PluginMenuApp(PluginMenu(catalog)), "space", "down", "space", "q")
        assert app.return_value == []
        assert app.menu.state is MenuState.CANCELLED

    def test_enter_without_selection_stays_open(self, catalog: list[str]) -> None:
        """Test that Enter with nothing selected keeps the menu on screen."""
        app = PluginMenuApp(PluginMenu(catalog))

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.press("enter")
                await pilot.pause()
                assert app.menu.state is MenuState.ACTIVE
                assert app.is_running
                await pilot.press("space", "enter")

        asyncio.run(scenario())
        assert app.return_value == ["A"]

    def test_screen_draws_menu(self, catalog: list[str]) -> None:
        """Test that the screen shows the counter, the cursor line and the key help."""
        app = PluginMenuApp(PluginMenu(catalog))

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.press("space", "down")
                await pilot.pause()
                view = app.screen.query_one("#menu_view", PluginMenuView)
                lines = view.render().plain.splitlines()
                assert lines[1] == "1/3 selected"
                assert "  [x] A" in lines
                assert "› [ ] B" in lines
                assert lines[-1] == "k/↑ up  j/↓ down  space toggle  enter confirm  q cancel"
                assert view.size.height == len(lines)
                await pilot.press("q")

        asyncio.run(scenario())

    def test_screen_shows_warning(self, catalog: list[str]) -> None:
        """Test that confirming nothing adds the warning line below the menu."""
        app = PluginMenuApp(PluginMenu(catalog))

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                view = app.screen.query_one("#menu_view", PluginMenuView)
                height = view.size.height
                await pilot.press("enter")
                await pilot.pause()
                assert view.render().plain.splitlines()[-1] == EMPTY_SELECTION_WARNING
                assert view.size.height == height + 1
                await pilot.press("q")

        asyncio.run(scenario())

    def test_ctrl_c_sets_interrupt_code(self, catalog: list[str]) -> None:
        """Test that Ctrl+C exits with the interrupt return code."""
        app = drive(PluginMenuApp(PluginMenu(catalog)), "space", "ctrl+c")
        assert app.return_code == EXIT_INTERRUPTED
        assert app.return_value is None

    def test_unbound_keys_ignored(self, catalog: list[str]) -> None:
        """Test that unbound keys do not change the selection."""
        app = drive(PluginMenuApp(PluginMenu(catalog)), "x", "l", "space", "enter")
        assert app.return_value == ["A"]


class TestRunPluginMenu:
    """Test the run_plugin_menu wrapper."""

    def test_requires_terminal(self, catalog: list[str]) -> None:
        """Test that a missing TTY raises NoInteractiveTerminalError."""
        with patch("slsgen.menu_app.is_interactive", return_value=False), patch.object(PluginMenuApp, "run") as run:
            with pytest.raises(NoInteractiveTerminalError):
                run_plugin_menu(catalog)
            run.assert_not_called()

    def test_returns_app_result(self, catalog: list[str]) -> None:
        """Test that the confirmed selection is returned."""
        with (
            patch("slsgen.menu_app.is_interactive", return_value=True),
            patch.object(PluginMenuApp, "run", return_value=["B"]),
            patch.object(PluginMenuApp, "return_code", new_callable=PropertyMock, return_value=0),
        ):
            assert run_plugin_menu(catalog) == ["B"]

    def test_interrupt_reraised(self, catalog: list[str]) -> None:
        """Test that an interrupted menu raises KeyboardInterrupt."""
        with (
            patch("slsgen.menu_app.is_interactive", return_value=True),
            patch.object(PluginMenuApp, "run", return_value=None),
            patch.object(PluginMenuApp, "return_code", new_callable=PropertyMock, return_value=EXIT_INTERRUPTED),
        ):
            with pytest.raises(KeyboardInterrupt):
                run_plugin_menu(catalog)

    def test_app_failure_raises(self, catalog: list[str]) -> None:
        """Test that a crashed menu application is reported."""
        with (
            patch("slsgen.menu_app.is_interactive", return_value=True),
            patch.object(PluginMenuApp, "run", return_value=None),
            patch.object(PluginMenuApp, "return_code", new_callable=PropertyMock, return_value=1),
        ):
            with pytest.raises(GeneratorError):
                run_plugin_menu(catalog)


class TestSelectPluginsNumbered:
    """Test the numbered-list fallback."""

    def test_selects_by_number(self, catalog: list[str], console, output) -> None:
        """Test that numbers map to catalog entries in catalog order."""
        result = select_plugins_numbered(catalog, console, io.StringIO("3 1\n"))
        assert result == ["A", "C"]
        assert "1. A" in output()
        assert "✅ C" in output()

    def test_invalid_numbers_ignored(self, catalog: list[str], console, output) -> None:
        """Test that invalid tokens are reported and skipped."""
        result = select_plugins_numbered(catalog, console, io.StringIO("2 0 4 x 2\n"))
        assert result == ["B"]
        text = output()
        assert "Ignoring invalid number: 0" in text
        assert "Ignoring invalid number: 4" in text
        assert "Ignoring invalid number: x" in text

    def test_blank_answer_selects_nothing(self, catalog: list[str], console, output) -> None:
        """Test that a blank line yields an empty selection."""
        assert select_plugins_numbered(catalog, console, io.StringIO("\n")) == []
        assert "No plugins selected" in output()

    def test_end_of_input(self, catalog: list[str], console) -> None:
        """Test that exhausted input raises EOFError."""
        with pytest.raises(EOFError):
            select_plugins_numbered(catalog, console, io.StringIO(""))


class TestDebugPanel:
    """Test the debug panel of the menu screen."""

    def test_toggle_debug_panel(self, catalog: list[str]) -> None:
        """Test that Ctrl+D shows and hides the panel without touching the menu."""
        app = PluginMenuApp(PluginMenu(catalog))

        async def scenario() -> None:
            async with app.run_test() as pilot:
                await pilot.press("ctrl+d")
                await pilot.pause()
                assert len(app.screen.query("#debug_container")) == 1
                await pilot.press("ctrl+d")
                await pilot.pause()
                assert len(app.screen.query("#debug_container")) == 0
                assert app.menu.state is MenuState.ACTIVE
                assert app.menu.cursor == 0
                await pilot.press("q")

        asyncio.run(scenario())
        assert app.return_value == []

    def test_copy_debug_output(self, catalog: list[str]) -> None:
        """Test that Ctrl+Y copies the captured log to the clipboard."""
        app = PluginMenuApp(PluginMenu(catalog))
        with patch("slsgen.mixins.pyperclip.copy") as copy:
            drive(app, "ctrl+y", "q")
        copy.assert_called_once()
        assert isinstance(copy.call_args.args[0], str)
