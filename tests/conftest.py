"""Test configuration and fixtures for the generator tests."""

import io
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from rich.console import Console

from slsgen.config import ProjectConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def console() -> Console:
    """Console writing to an in-memory buffer instead of the terminal."""
    return Console(file=io.StringIO(), force_terminal=False, width=120, color_system=None)


@pytest.fixture
def catalog() -> list[str]:
    """Small three-entry plugin catalog."""
    return ["A", "B", "C"]


@pytest.fixture
def full_config() -> ProjectConfig:
    """Configuration with every baseline and advanced toggle set."""
    return ProjectConfig(
        "my-api",
        use_virtualenv=True,
        use_docker=True,
        init_git=True,
        use_precommit=True,
        use_typescript=True,
        use_terraform=True,
        use_cicd=True,
    )


@pytest.fixture
def sample_saved_config() -> str:
    """Saved configuration file content as written by a previous run."""
    return """# Generated by serverless-python-generator 1.0.0 on 2026-01-01T12:00:00
project_name = "saved-api"
use_virtualenv = false
use_docker = true
init_git = true
use_precommit = false
"""


@pytest.fixture
def output(console: Console):
    """Return a callable giving everything printed to the test console."""

    def _read() -> str:
        return console.file.getvalue()

    return _read
