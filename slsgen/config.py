"""Project configuration data container for the Serverless Python Generator."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from slsgen.constants import PROJECT_NAME_PATTERN
from slsgen.errors import ValidationError

# Baseline toggles, in the order they are asked, with their defaults
BASELINE_OPTIONS: dict[str, bool] = {
    "use_virtualenv": True,
    "use_docker": False,
    "init_git": True,
    "use_precommit": True,
}

# Toggles that are only asked when the user opts into advanced options
ADVANCED_OPTIONS: dict[str, bool] = {
    "use_typescript": False,
    "use_terraform": False,
    "use_cicd": False,
}

OPTION_KEYS = (*BASELINE_OPTIONS, *ADVANCED_OPTIONS)

_NAME_RE = re.compile(PROJECT_NAME_PATTERN)


def validate_project_name(name: str, base_dir: Path | None = None) -> str:
    """Validate a project name.

    Parameters
    ----------
    name : str
        Candidate project name
    base_dir : Path, optional
        Directory the project would be created in; when given, a name that
        already exists there is rejected

    Returns
    -------
    str
        The validated name

    Raises
    ------
    ValidationError
        If the name does not match the pattern or the directory exists

    """
    if not _NAME_RE.fullmatch(name):
        msg = (
            f"Invalid project name '{name}'. It must start with a letter, contain only "
            "letters, digits or hyphens, end with a letter or digit and be 2-40 characters long."
        )
        raise ValidationError(msg)
    if base_dir is not None and (base_dir / name).is_dir():
        msg = f"Directory '{name}' already exists."
        raise ValidationError(msg)
    return name


class ProjectConfig:
    """Container for the user's project choices.

    The project name can be assigned only once. Option toggles are booleans;
    advanced toggles stay ``None`` (unset) unless advanced options were
    configured, and unset toggles read as disabled through :meth:`is_enabled`.
    """

    def __init__(self, project_name: str = "", **options: bool | None) -> None:
        """Initialize the ProjectConfig with baseline defaults.

        Parameters
        ----------
        project_name : str, optional
            Validated project name, by default unset
        **options : bool | None
            Initial values for option toggles

        """
        self._project_name = ""
        self.options: dict[str, bool | None] = dict(BASELINE_OPTIONS)
        self.options.update(dict.fromkeys(ADVANCED_OPTIONS))

        for key, value in options.items():
            self[key] = value
        if project_name:
            self.project_name = project_name

    @property
    def project_name(self) -> str:
        """The project name, empty until set."""
        return self._project_name

    @project_name.setter
    def project_name(self, value: str) -> None:
        if self._project_name:
            msg = f"Project name is already set to '{self._project_name}'"
            raise ValueError(msg)
        self._project_name = validate_project_name(value)

    def __getitem__(self, key: str) -> Any:
        if key == "project_name":
            return self.project_name
        return self.options[key]

    def __setitem__(self, key: str, value: bool | None) -> None:
        if key not in self.options:
            msg = f"Unknown option '{key}'"
            raise KeyError(msg)
        if value is not None and not isinstance(value, bool):
            msg = f"Option '{key}' must be a boolean, got {value!r}"
            raise TypeError(msg)
        if value is None and key in BASELINE_OPTIONS:
            msg = f"Baseline option '{key}' cannot be unset"
            raise TypeError(msg)
        self.options[key] = value

    def is_enabled(self, key: str) -> bool:
        """Return whether a toggle is on, treating unset toggles as off."""
        return bool(self.options.get(key))

    @property
    def advanced_configured(self) -> bool:
        """Whether any advanced toggle has been set."""
        return any(self.options[key] is not None for key in ADVANCED_OPTIONS)

    def to_dict(self) -> dict[str, Any]:
        """Return every set key, leaving out unset toggles and an unset name."""
        data: dict[str, Any] = {}
        if self.project_name:
            data["project_name"] = self.project_name
        data.update({key: value for key, value in self.options.items() if value is not None})
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectConfig:
        """Build a config from a mapping such as a parsed saved file.

        Parameters
        ----------
        data : dict[str, Any]
            Keys and values as produced by :meth:`to_dict`

        Returns
        -------
        ProjectConfig
            The rebuilt configuration

        Raises
        ------
        ValidationError
            If the project name is invalid
        KeyError
            If an unknown key is present
        TypeError
            If a toggle is not a boolean

        """
        values = dict(data)
        name = values.pop("project_name", "")
        if not isinstance(name, str):
            msg = f"project_name must be a string, got {name!r}"
            raise TypeError(msg)
        return cls(name, **values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ProjectConfig({self.to_dict()!r})"
