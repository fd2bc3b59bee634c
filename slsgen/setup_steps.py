"""External setup steps run after the project files are generated.

These steps shell out to ``python -m venv``, ``pip``, ``npm``, ``git`` and
``pre-commit``, and download DynamoDB Local. A failing step is reported and
skipped; the generated files stay in place.
"""

from __future__ import annotations

import os
import re
import shutil
import subprocess
import sys
import zipfile
from typing import TYPE_CHECKING

import httpx
from rich.console import Console
from rich.markup import escape

from slsgen.constants import DYNAMODB_LOCAL_DIR, DYNAMODB_LOCAL_URL, MIN_VERSIONS, REQUIRED_COMMANDS
from slsgen.logging_utils import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from slsgen.config import ProjectConfig

logger = get_logger(__name__)


def find_missing_commands(commands: Sequence[str] = REQUIRED_COMMANDS) -> list[str]:
    """Return the commands that are not available on ``PATH``."""
    return [command for command in commands if shutil.which(command) is None]


def parse_version(output: str) -> tuple[int, ...] | None:
    """Extract the first dotted version number from ``--version`` output.

    Parameters
    ----------
    output : str
        Text printed by the tool, e.g. ``Python 3.11.4`` or ``v18.19.0``

    Returns
    -------
    tuple[int, ...] | None
        Version components, or None if the text holds no version

    """
    match = re.search(r"\d+(?:\.\d+)*", output)
    if match is None:
        return None
    return tuple(int(part) for part in match.group().split("."))


def command_version(command: str) -> tuple[int, ...] | None:
    """Return the version ``command --version`` reports, or None if unknown."""
    try:
        result = subprocess.run([command, "--version"], check=True, capture_output=True, text=True)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        logger.debug("Could not determine the version of %s: %s", command, e)
        return None
    return parse_version(result.stdout or result.stderr or "")


def find_outdated_commands(
    minimums: Mapping[str, tuple[int, ...]] = MIN_VERSIONS,
) -> list[tuple[str, tuple[int, ...], tuple[int, ...]]]:
    """Return ``(command, found, required)`` for every tool older than required.

    Tools whose version cannot be determined are not reported; a missing
    tool is already reported by :func:`find_missing_commands`.
    """
    outdated = []
    for command, required in minimums.items():
        found = command_version(command)
        if found is not None and found[: len(required)] < required:
            outdated.append((command, found, required))
    return outdated


def format_version(version: tuple[int, ...]) -> str:
    return ".".join(str(part) for part in version)


class SetupRunner:
    """Runs the optional environment setup for a generated project.

    Parameters
    ----------
    config : ProjectConfig
        Configuration the project was generated from
    plugins : Sequence[str]
        Serverless plugins to install with npm
    project_dir : Path
        Directory of the generated project
    console : Console, optional
        Console for progress messages
    install_dynamodb : bool, optional
        Whether to download DynamoDB Local into the project, by default True
    http_client : httpx.Client, optional
        Client used for the download, by default a new one per download

    """

    def __init__(
        self,
        config: ProjectConfig,
        plugins: Sequence[str],
        project_dir: Path,
        console: Console | None = None,
        install_dynamodb: bool = True,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self.plugins = list(plugins)
        self.project_dir = project_dir
        self.console = console or Console()
        self.install_dynamodb = install_dynamodb
        self.http_client = http_client
        self.failed_steps: list[str] = []

    @property
    def venv_bin(self) -> Path:
        """Scripts directory of the project's virtualenv."""
        return self.project_dir / ".venv" / ("Scripts" if os.name == "nt" else "bin")

    def _run(self, step: str, cmd: list[str]) -> bool:
        """Run one command in the project directory.

        Parameters
        ----------
        step : str
            Human readable step name
        cmd : list[str]
            Command and arguments

        Returns
        -------
        bool
            True if the command succeeded

        """
        logger.debug("Running %s: %s", step, " ".join(cmd))
        try:
            subprocess.run(cmd, cwd=self.project_dir, check=True, capture_output=True, text=True)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            detail = e.stderr.strip() if isinstance(e, subprocess.CalledProcessError) and e.stderr else str(e)
            self._fail(step, detail)
            return False
        return True

    def _fail(self, step: str, detail: str) -> None:
        logger.warning("Setup step '%s' failed: %s", step, detail)
        self.console.print(f"[yellow]⚠️  {step} failed: {escape(detail)}[/yellow]")
        self.failed_steps.append(step)

    def check_environment(self) -> list[str]:
        """Warn about required commands that are missing or too old.

        Returns
        -------
        list[str]
            Commands that are missing, followed by commands that are outdated

        """
        missing = find_missing_commands()
        for command in missing:
            logger.warning("Required command not found: %s", command)
            self.console.print(f"[yellow]⚠️  {command} is not installed[/yellow]")

        outdated = [entry for entry in find_outdated_commands() if entry[0] not in missing]
        for command, found, required in outdated:
            logger.warning("%s %s is older than %s", command, format_version(found), format_version(required))
            self.console.print(
                f"[yellow]⚠️  {command} {format_version(found)} is too old, "
                f"version {format_version(required)} or newer is required[/yellow]",
            )
        return missing + [command for command, _, _ in outdated]

    def create_virtualenv(self) -> bool:
        """Create ``.venv`` and upgrade its pip."""
        self.console.print("🔧 Creating virtual environment...")
        if not self._run("Create virtualenv", [sys.executable, "-m", "venv", ".venv"]):
            return False
        return self._run("Upgrade pip", [str(self.venv_bin / "python"), "-m", "pip", "install", "--upgrade", "pip"])

    def install_plugins(self) -> None:
        """Install each selected plugin as an npm dev dependency."""
        for plugin in self.plugins:
            self.console.print(f"📦 Installing {plugin}...")
            self._run(f"Install {plugin}", ["npm", "install", "--save-dev", plugin])

    def setup_precommit(self) -> bool:
        """Install pre-commit and its git hooks."""
        self.console.print("🔧 Setting up pre-commit...")
        if self.config.is_enabled("use_virtualenv") and self.venv_bin.is_dir():
            if not self._run(
                "Install pre-commit",
                [str(self.venv_bin / "python"), "-m", "pip", "install", "pre-commit"],
            ):
                return False
            precommit = str(self.venv_bin / "pre-commit")
        else:
            precommit = "pre-commit"
        return self._run("Install pre-commit hooks", [precommit, "install"])

    def init_git(self) -> bool:
        """Initialize the repository and create the first commit."""
        self.console.print("🔧 Initializing Git repository...")
        if not self._run("git init", ["git", "init"]):
            return False
        if self.config.is_enabled("use_precommit"):
            self.setup_precommit()
        return self._run("git add", ["git", "add", "."]) and self._run(
            "Initial commit",
            ["git", "commit", "-m", "Initial commit"],
        )

    def download_dynamodb_local(self, url: str = DYNAMODB_LOCAL_URL) -> bool:
        """Download DynamoDB Local and unpack it into ``.dynamodb``.

        The downloaded archive is removed afterwards, also when unpacking fails.
        """
        step = "Install DynamoDB Local"
        self.console.print("📦 Installing DynamoDB Local...")
        target = self.project_dir / DYNAMODB_LOCAL_DIR
        archive = target / url.rsplit("/", 1)[-1]
        client = self.http_client or httpx.Client()
        try:
            target.mkdir(parents=True, exist_ok=True)
            with client.stream("GET", url, timeout=60, follow_redirects=True) as response:
                response.raise_for_status()
                with open(archive, "wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
            with zipfile.ZipFile(archive) as zip_ref:
                zip_ref.extractall(target)
        except (httpx.HTTPError, zipfile.BadZipFile, OSError) as e:
            self._fail(step, str(e))
            return False
        finally:
            archive.unlink(missing_ok=True)
            if self.http_client is None:
                client.close()
        logger.info("DynamoDB Local unpacked into %s", target)
        return True

    def run(self) -> list[str]:
        """Run every step the configuration enables.

        Returns
        -------
        list[str]
            Names of the steps that failed

        """
        self.check_environment()
        if self.config.is_enabled("use_virtualenv"):
            self.create_virtualenv()
        if self.plugins:
            self.install_plugins()
        if self.install_dynamodb:
            self.download_dynamodb_local()
        if self.config.is_enabled("init_git"):
            self.init_git()
        return self.failed_steps
