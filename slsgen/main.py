"""Entry point for the Serverless Python Generator.

This module provides the main() function and command-line interface that
runs the configuration interview, the plugin selection and the generation of
the serverless project.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from slsgen.configurator import ProjectConfigurator
from slsgen.constants import CONFIG_FILE, EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_OK
from slsgen.errors import ConfigParseError, GeneratorError
from slsgen.logging_utils import get_logger, setup_logging
from slsgen.scaffold import ProjectGenerator
from slsgen.setup_steps import SetupRunner

if TYPE_CHECKING:
    from typing import TextIO

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        description="Serverless Python Generator - scaffold a Serverless Framework API project",
        epilog="Answers are saved to .generator-config and offered as defaults on the next run.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with verbose logging and the debug panel",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(CONFIG_FILE),
        help=f"Saved answers file (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not save the answers for the next run",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Select plugins from a numbered list instead of the interactive menu",
    )
    parser.add_argument(
        "--skip-setup",
        action="store_true",
        help="Only write files; skip virtualenv, npm, git and pre-commit setup",
    )
    parser.add_argument(
        "--skip-dynamodb",
        action="store_true",
        help="Do not download DynamoDB Local into the project",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory to create the project in (default: current directory)",
    )
    return parser


def print_next_steps(console: Console, project_name: str, use_virtualenv: bool) -> None:
    """Print what to do after generation."""
    console.print(f"\n[green]🎉 Project '{project_name}' created successfully![/green]\n")
    console.print("📋 Next steps:")
    steps = [f"cd {project_name}"]
    if use_virtualenv:
        steps.append("source .venv/bin/activate")
    steps += ["pip install -r requirements.txt", "npm install", "serverless offline start"]
    for number, step in enumerate(steps, start=1):
        console.print(f"  {number}. {step}")


def run(args: argparse.Namespace, console: Console, stream: TextIO | None = None) -> int:
    """Run the generator with parsed arguments.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    console : Console
        Console for prompts and messages
    stream : TextIO, optional
        Stream to read answers from instead of stdin

    Returns
    -------
    int
        Process exit code

    """
    base_dir = args.output_dir or Path.cwd()

    try:
        saved = ProjectConfigurator.load_saved_config(args.config)
    except ConfigParseError as e:
        logger.warning("%s", e)
        console.print(f"[yellow]⚠️  {escape(str(e))}. Starting with fresh answers.[/yellow]")
        saved = None

    configurator = ProjectConfigurator(console=console, stream=stream, base_dir=base_dir, defaults=saved)

    console.print("\n[bold yellow]Step 1: Project configuration[/bold yellow]\n")
    config = configurator.configure()

    console.print("\n[bold yellow]Step 2: Plugin selection[/bold yellow]\n")
    plugins = configurator.select_plugins(interactive=not args.plain)

    if not args.no_save:
        ProjectConfigurator.save_config(config, args.config)

    console.print("\n[bold yellow]Step 3: Creating project[/bold yellow]\n")
    generator = ProjectGenerator(config, plugins, base_dir)
    generator.generate()

    if not args.skip_setup:
        failed = SetupRunner(
            config,
            plugins,
            generator.project_dir,
            console,
            install_dynamodb=not args.skip_dynamodb,
        ).run()
        if failed:
            console.print(f"[yellow]⚠️  Some setup steps failed: {', '.join(failed)}[/yellow]")

    print_next_steps(console, config.project_name, config.is_enabled("use_virtualenv"))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the Serverless Python Generator.

    Parameters
    ----------
    argv : list[str], optional
        Command line arguments, by default ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code: 0 on success, 1 on a fatal error, 130 on interrupt

    """
    args = build_parser().parse_args(argv)

    if args.debug:
        setup_logging(True)

    console = Console()
    try:
        return run(args, console)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except EOFError:
        print("Error: input ended before the configuration was complete.", file=sys.stderr)
        return EXIT_FAILURE
    except (GeneratorError, OSError) as e:
        logger.exception("Fatal error")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
