"""Main CLI application entry point.

Defines the Typer application: discover projects below the current
directory, optionally let the user pick some, then remove their cache
directories while showing live status.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from nmsweep import __version__
from nmsweep.cli.reporter import StatusReporter
from nmsweep.cli.selection import SelectionAborted, select_projects
from nmsweep.core.config import ConfigError, SweepConfig, load_config
from nmsweep.core.log import setup_logging
from nmsweep.core.runner import run
from nmsweep.core.theme import get_rich_theme
from nmsweep.discovery.scanner import ProjectScanner
from nmsweep.models.project import CleanupResult
from nmsweep.utils.formatting import (
    apply_theme,
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    name="nmsweep",
    help="Clean up node_modules folders in your projects.",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nmsweep version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    depth: Annotated[
        int | None,
        typer.Option(
            "--depth",
            "-d",
            min=0,
            help="How deep to search for projects (default 2, or from config).",
            show_default=False,
        ),
    ] = None,
    silent: Annotated[
        bool,
        typer.Option("--silent", "-s", help="Silent mode: no output at all."),
    ] = False,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Pick projects before cleaning."),
    ] = False,
    concurrency: Annotated[
        int | None,
        typer.Option(
            "--concurrency",
            "-j",
            min=1,
            help="Maximum number of folders deleted at once (default 8, or from config).",
            show_default=False,
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to an alternative config file.",
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Remove node_modules folders from every project below the current directory."""
    setup_logging(verbose=verbose, quiet=silent, console=err_console)

    config = _load_config(config_path)
    apply_theme(get_rich_theme(config.colors))

    if depth is None:
        depth = config.depth
    if concurrency is None:
        concurrency = config.concurrency

    scanner = ProjectScanner(
        depth=depth,
        manifest_name=config.manifest_name,
        cache_dir_name=config.cache_dir_name,
    )
    projects = scanner.scan()

    if not projects:
        if not silent:
            print_info(f"No {escape(config.cache_dir_name)} folders found.")
        return

    if interactive:
        try:
            projects = select_projects(projects)
        except SelectionAborted:
            if not silent:
                print_info("Aborted.")
            raise typer.Exit(code=0) from None

        if not projects:
            if not silent:
                print_info("Nothing selected.")
            return

    reporter = None if silent else StatusReporter(projects, console=console)
    results = run(
        projects,
        concurrency=concurrency,
        cache_dir_name=config.cache_dir_name,
        reporter=reporter,
    )

    if not silent:
        _print_summary(results, config.cache_dir_name)


# === Private helper functions ===


def _load_config(path: Path | None) -> SweepConfig:
    """Load configuration, exiting with an error message on failure."""
    try:
        return load_config(path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def _print_summary(results: list[CleanupResult], cache_dir_name: str) -> None:
    """Print removed/failed counts after a live run."""
    success_count = sum(1 for r in results if r.success)
    fail_count = len(results) - success_count

    if fail_count == 0:
        print_success(f"All {success_count} {escape(cache_dir_name)} folder(s) removed.")
    else:
        print_warning(f"{success_count} removed, {fail_count} failed")


if __name__ == "__main__":
    app()
