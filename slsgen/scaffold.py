"""Project skeleton generation for the Serverless Python Generator."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from slsgen import templates
from slsgen.logging_utils import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from slsgen.config import ProjectConfig

logger = get_logger(__name__)


class ProjectGenerator:
    """Writes the project tree for a configuration and plugin selection.

    Parameters
    ----------
    config : ProjectConfig
        Resolved configuration with a project name
    plugins : Sequence[str]
        Selected Serverless plugins, in catalog order
    base_dir : Path
        Directory the project directory is created in

    """

    def __init__(self, config: ProjectConfig, plugins: Sequence[str], base_dir: Path) -> None:
        if not config.project_name:
            msg = "Cannot generate a project without a project name"
            raise ValueError(msg)
        self.config = config
        self.plugins = list(plugins)
        self.base_dir = base_dir
        self.written: list[Path] = []

    @property
    def project_dir(self) -> Path:
        """Directory the project is generated in."""
        return self.base_dir / self.config.project_name

    def generate(self) -> list[Path]:
        """Create the project directory and every file the configuration asks for.

        Returns
        -------
        list[Path]
            Paths of the written files, relative to the project directory

        Raises
        ------
        FileExistsError
            If the project directory already exists

        """
        self.project_dir.mkdir(parents=True, exist_ok=False)
        logger.info("Generating project in %s", self.project_dir)

        self.create_structure()
        self.create_core_files()

        name = self.config.project_name
        if self.config.is_enabled("use_docker"):
            self._write("Dockerfile", templates.dockerfile())
            self._write("docker-compose.yml", templates.docker_compose())
        if self.config.is_enabled("use_precommit"):
            self._write(".pre-commit-config.yaml", templates.precommit_config())
        if self.config.is_enabled("init_git"):
            self._write(".gitignore", templates.gitignore())
        if self.config.is_enabled("use_typescript"):
            self._write("tsconfig.json", templates.tsconfig_json())
        if self.config.is_enabled("use_terraform"):
            self._write("terraform/main.tf", templates.terraform_main(name))
            self._write("terraform/variables.tf", templates.terraform_variables())
        if self.config.is_enabled("use_cicd"):
            self._write(".github/workflows/ci.yml", templates.ci_workflow(self.config.is_enabled("use_precommit")))

        logger.info("Wrote %d files", len(self.written))
        return self.written

    def create_structure(self) -> None:
        """Create the package directories with their ``__init__.py`` files."""
        name = self.config.project_name
        self._write("__init__.py", templates.init_module(name, name))
        for directory in templates.PROJECT_DIRECTORIES:
            module_name = directory.replace("/", ".")
            self._write(f"{directory}/__init__.py", templates.init_module(module_name, name))

    def create_core_files(self) -> None:
        """Write the files every project gets."""
        name = self.config.project_name
        self._write("README.md", templates.readme(name, self.plugins))
        self._write(".env.example", templates.env_example())
        self._write("serverless.yml", templates.serverless_yml(name, self.plugins))
        self._write("config/dynamodb/orders.json", templates.dynamodb_seed())
        self._write("src/functions/hello.py", templates.hello_handler())
        self._write("requirements.txt", templates.requirements_txt())
        self._write(
            "package.json",
            templates.package_json(name, self.plugins, self.config.is_enabled("use_typescript")),
        )
        self._write(".flake8", templates.flake8_config())
        script = self._write("scripts/start-local.sh", templates.start_local_script(name))
        (self.project_dir / script).chmod(0o755)

    def _write(self, relative_path: str, content: str) -> Path:
        target = self.project_dir / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", target)
        path = Path(relative_path)
        self.written.append(path)
        return path
