"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.theme import Theme

from nmsweep.core.theme import get_rich_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances, re-themed by apply_theme() once config is loaded
console = Console(theme=get_rich_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_rich_theme(), stderr=True, color_system=_detect_color_system())


def apply_theme(theme: Theme) -> None:
    """Push a theme onto the shared consoles.

    Args:
        theme: Rich Theme to use for subsequent output.
    """
    console.push_theme(theme)
    err_console.push_theme(theme)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
