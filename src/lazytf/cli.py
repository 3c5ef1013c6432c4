"""Command-line entry point: load config, find projects, run the TUI."""

import logging
import os
import sys

import typer

from lazytf.app import LazyTfApp
from lazytf.config import ConfigError, load_config, load_theme
from lazytf.constants import DEFAULT_THEME
from lazytf.domain.paths import HomeDirectoryError
from lazytf.domain.projects import determine_mode, discover_projects
from lazytf.log import setup_logging
from lazytf.models import Mode

logger = logging.getLogger("lazytf.cli")

app = typer.Typer(help="Interactive terminal front-end for local Terraform projects")

# Module-level defaults for Typer options
_SEARCH_PATH_HELP = "Directory to scan for Terraform projects (repeatable, overrides config)"
_LOG_LEVEL_HELP = "Log level for the log file (DEBUG, INFO, WARNING, ERROR)"


@app.command()
def main(
    search_path: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--search-path",
        "-s",
        help=_SEARCH_PATH_HELP,
    ),
    log_level: str = typer.Option(  # noqa: B008
        "INFO",
        "--log-level",
        help=_LOG_LEVEL_HELP,
    ),
) -> None:
    """Browse Terraform projects and initialize their environments."""
    try:
        config = load_config()
    except ConfigError as e:
        typer.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    log_path = setup_logging(log_level)
    logger.info("lazytf starting, logging to %s", log_path)

    mode, project = determine_mode(os.getcwd())
    if mode is Mode.SINGLE_PROJECT and project is not None:
        logger.info("Single-project mode: %s", project.path)
        projects = [project]
    else:
        roots = search_path or config.search_paths
        try:
            projects = discover_projects(roots, config.ignore_patterns)
        except HomeDirectoryError as e:
            typer.echo(f"Error: {e}", err=True)
            sys.exit(1)
        logger.info("Multi-project mode: %d project(s) found", len(projects))

    theme = load_theme() or DEFAULT_THEME
    LazyTfApp(projects=projects, mode=mode, theme=theme, persist_theme=True).run()


if __name__ == "__main__":
    app()
