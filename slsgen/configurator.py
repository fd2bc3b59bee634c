"""Interactive project configuration for the Serverless Python Generator.

This module contains the ProjectConfigurator class, which interviews the user
for a project name and feature toggles, hands plugin selection to the plugin
menu, and loads and saves the answers between runs.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import toml
from rich.console import Console
from rich.markup import escape

from slsgen import __version__
from slsgen.config import ADVANCED_OPTIONS, BASELINE_OPTIONS, ProjectConfig, validate_project_name
from slsgen.constants import PLUGIN_CATALOG
from slsgen.errors import ConfigParseError, NoInteractiveTerminalError, ValidationError
from slsgen.logging_utils import get_logger
from slsgen.menu_app import run_plugin_menu, select_plugins_numbered
from slsgen.terminal import read_line

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TextIO

logger = get_logger(__name__)

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")

# Prompt text for every toggle
OPTION_PROMPTS: dict[str, str] = {
    "use_virtualenv": "Use a virtual environment?",
    "use_docker": "Use Docker?",
    "init_git": "Initialize a Git repository?",
    "use_precommit": "Use pre-commit hooks?",
    "use_typescript": "Use TypeScript for Node tooling?",
    "use_terraform": "Add Terraform infrastructure?",
    "use_cicd": "Add a CI/CD workflow?",
}


class ProjectConfigurator:
    """Collect a validated :class:`ProjectConfig` from the user.

    Parameters
    ----------
    console : Console, optional
        Console used for prompts and messages
    stream : TextIO, optional
        Stream to read answers from instead of stdin
    base_dir : Path, optional
        Directory the project will be created in, by default the working directory
    defaults : ProjectConfig, optional
        Previously saved answers used as prompt defaults

    """

    def __init__(
        self,
        console: Console | None = None,
        stream: TextIO | None = None,
        base_dir: Path | None = None,
        defaults: ProjectConfig | None = None,
    ) -> None:
        self.console = console or Console()
        self.stream = stream
        self.base_dir = base_dir or Path.cwd()
        self.defaults = defaults

    def _error(self, message: str) -> None:
        self.console.print(f"[red]❌ {escape(message)}[/red]")

    def _default_for(self, key: str) -> bool:
        if self.defaults is not None and self.defaults.options.get(key) is not None:
            return bool(self.defaults.options[key])
        return {**BASELINE_OPTIONS, **ADVANCED_OPTIONS}[key]

    def read_project_name(self) -> str:
        """Prompt until a valid, unused project name is entered.

        Returns
        -------
        str
            The validated project name

        Raises
        ------
        EOFError
            If the input ends before a valid name was entered

        """
        while True:
            name = read_line(self.console, "📝 Project name: ", self.stream).strip()
            try:
                return validate_project_name(name, self.base_dir)
            except ValidationError as e:
                logger.info("Rejected project name %r: %s", name, e)
                self._error(str(e))

    def ask_yes_no(self, prompt: str, default: bool) -> bool:
        """Ask a yes/no question.

        A blank answer returns ``default``; ``y``/``yes`` and ``n``/``no`` are
        accepted in any case; anything else is rejected and asked again.

        Parameters
        ----------
        prompt : str
            Question to show
        default : bool
            Answer used for blank input

        Returns
        -------
        bool
            The user's answer

        """
        hint = "[Y/n]" if default else "[y/N]"
        while True:
            answer = read_line(self.console, f"{prompt} {escape(hint)}: ", self.stream).strip().lower()
            if not answer:
                return default
            if answer in YES_ANSWERS:
                return True
            if answer in NO_ANSWERS:
                return False
            self._error(f"Please answer 'y' or 'n' (got '{answer}').")

    def configure_options(self, config: ProjectConfig | None = None) -> ProjectConfig:
        """Ask the feature toggles.

        Parameters
        ----------
        config : ProjectConfig, optional
            Record to fill in, by default a new one

        Returns
        -------
        ProjectConfig
            The record with baseline toggles set, and advanced toggles set only
            if the user chose to configure them

        """
        config = config or ProjectConfig()
        self.console.print("\n📦 [bold]Optional features:[/bold]")
        for key in BASELINE_OPTIONS:
            config[key] = self.ask_yes_no(OPTION_PROMPTS[key], self._default_for(key))

        advanced_default = self.defaults is not None and self.defaults.advanced_configured
        if self.ask_yes_no("Configure advanced options?", advanced_default):
            for key in ADVANCED_OPTIONS:
                config[key] = self.ask_yes_no(OPTION_PROMPTS[key], self._default_for(key))

        logger.debug("Configured options: %s", config.to_dict())
        return config

    def configure(self) -> ProjectConfig:
        """Ask the project name and then the feature toggles."""
        config = ProjectConfig(self.read_project_name())
        return self.configure_options(config)

    def select_plugins(self, catalog: Sequence[str] = PLUGIN_CATALOG, interactive: bool = True) -> list[str]:
        """Let the user choose plugins.

        Uses the interactive menu when possible and the numbered list otherwise.

        Parameters
        ----------
        catalog : Sequence[str], optional
            Plugin names to offer
        interactive : bool, optional
            Whether to try the interactive menu first, by default True

        Returns
        -------
        list[str]
            Selected plugins in catalog order, possibly empty

        """
        if interactive:
            try:
                selected = run_plugin_menu(catalog)
            except NoInteractiveTerminalError as e:
                logger.info("Falling back to numbered plugin selection: %s", e)
                self.console.print("[yellow]⚠️  No interactive terminal, using the numbered list.[/yellow]")
            else:
                if not selected:
                    self.console.print("[yellow]⚠️  Plugin selection cancelled, no plugins selected[/yellow]")
                return selected
        return select_plugins_numbered(catalog, self.console, self.stream)

    @staticmethod
    def load_saved_config(path: Path) -> ProjectConfig | None:
        """Load previously saved answers.

        Parameters
        ----------
        path : Path
            Location of the saved configuration

        Returns
        -------
        ProjectConfig | None
            The saved configuration, or None if the file does not exist

        Raises
        ------
        ConfigParseError
            If the file is not valid TOML or holds unexpected keys or values

        """
        if not path.is_file():
            return None
        try:
            data = toml.loads(path.read_text(encoding="utf-8"))
        except toml.TomlDecodeError as e:
            raise ConfigParseError(str(path), str(e)) from e
        try:
            config = ProjectConfig.from_dict(data)
        except (KeyError, TypeError, ValidationError) as e:
            raise ConfigParseError(str(path), str(e)) from e
        logger.debug("Loaded saved configuration from %s: %s", path, config.to_dict())
        return config

    @staticmethod
    def save_config(config: ProjectConfig, path: Path) -> None:
        """Write the configuration, replacing any existing file.

        Parameters
        ----------
        config : ProjectConfig
            Configuration to save
        path : Path
            Destination file

        Raises
        ------
        OSError
            If the file cannot be written

        """
        timestamp = datetime.now().isoformat(timespec="seconds")
        header = f"# Generated by serverless-python-generator {__version__} on {timestamp}\n"
        path.write_text(header + toml.dumps(config.to_dict()), encoding="utf-8")
        logger.info("Saved configuration to %s", path)
