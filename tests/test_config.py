"""Tests for the ProjectConfig container and project name validation."""

from pathlib import Path

import pytest

from slsgen.config import ADVANCED_OPTIONS, BASELINE_OPTIONS, ProjectConfig, validate_project_name
from slsgen.errors import ValidationError


class TestValidateProjectName:
    """Test the project name rules."""

    @pytest.mark.parametrize("name", ["ok-Project2", "ab", "a1", "My-Serverless-Api", "a" * 40])
    def test_valid_names(self, name: str, temp_dir: Path) -> None:
        """Test that names matching the pattern are accepted."""
        assert validate_project_name(name, temp_dir) == name

    @pytest.mark.parametrize(
        "name",
        ["9bad", "a", "", "-abc", "abc-", "my_api", "my api", "a" * 41, "ñandu"],
    )
    def test_invalid_names(self, name: str) -> None:
        """Test that names violating the pattern are rejected."""
        with pytest.raises(ValidationError, match="Invalid project name"):
            validate_project_name(name)

    def test_existing_directory_rejected(self, temp_dir: Path) -> None:
        """Test that a name colliding with a directory is rejected."""
        (temp_dir / "taken").mkdir()
        with pytest.raises(ValidationError, match="already exists"):
            validate_project_name("taken", temp_dir)

    def test_existing_file_allowed(self, temp_dir: Path) -> None:
        """Test that only directories count as collisions."""
        (temp_dir / "notes").write_text("x")
        assert validate_project_name("notes", temp_dir) == "notes"


class TestProjectConfig:
    """Test the ProjectConfig class."""

    def test_defaults(self) -> None:
        """Test baseline defaults and unset advanced options."""
        config = ProjectConfig()
        assert config.project_name == ""
        for key, default in BASELINE_OPTIONS.items():
            assert config[key] is default
        for key in ADVANCED_OPTIONS:
            assert config[key] is None
            assert config.is_enabled(key) is False
        assert config.advanced_configured is False

    def test_project_name_set_once(self) -> None:
        """Test that the project name cannot be changed once set."""
        config = ProjectConfig("first-api")
        with pytest.raises(ValueError, match="already set"):
            config.project_name = "second-api"
        assert config.project_name == "first-api"

    def test_project_name_validated(self) -> None:
        """Test that an invalid project name is refused."""
        config = ProjectConfig()
        with pytest.raises(ValidationError):
            config.project_name = "9bad"
        assert config.project_name == ""

    def test_unknown_option(self) -> None:
        """Test that unknown keys are refused."""
        config = ProjectConfig()
        with pytest.raises(KeyError):
            config["use_kubernetes"] = True

    def test_non_boolean_option(self) -> None:
        """Test that toggles must be booleans."""
        config = ProjectConfig()
        with pytest.raises(TypeError):
            config["use_docker"] = "yes"

    def test_baseline_cannot_be_unset(self) -> None:
        """Test that baseline toggles always hold a boolean."""
        config = ProjectConfig()
        with pytest.raises(TypeError):
            config["init_git"] = None

    def test_to_dict_omits_unset(self) -> None:
        """Test that unset advanced options are left out."""
        config = ProjectConfig("my-api", use_docker=True)
        assert config.to_dict() == {
            "project_name": "my-api",
            "use_virtualenv": True,
            "use_docker": True,
            "init_git": True,
            "use_precommit": True,
        }

    def test_from_dict_round_trip(self, full_config: ProjectConfig) -> None:
        """Test that from_dict rebuilds an equal configuration."""
        rebuilt = ProjectConfig.from_dict(full_config.to_dict())
        assert rebuilt == full_config
        assert rebuilt.advanced_configured is True

    def test_from_dict_rejects_bad_name_type(self) -> None:
        """Test that a non-string project name is refused."""
        with pytest.raises(TypeError):
            ProjectConfig.from_dict({"project_name": 42})

    def test_equality(self) -> None:
        """Test that configs compare by content."""
        assert ProjectConfig("my-api") == ProjectConfig("my-api")
        assert ProjectConfig("my-api") != ProjectConfig("my-api", use_docker=True)
        assert ProjectConfig("my-api") != ProjectConfig("other-api")
