"""Interactive project selection.

Shows the discovered projects as a numbered table and lets the user
pick which ones to clean before any deletion starts.
"""

from collections.abc import Sequence

import typer
from rich.markup import escape
from rich.table import Table

from nmsweep.models.project import Project
from nmsweep.utils.formatting import console, print_error


class SelectionAborted(Exception):
    """Raised when the user cancels the selection prompt."""


def parse_selection(text: str, count: int) -> list[int]:
    """Parse a selection answer into zero-based indices.

    Accepts ``all``, ``none``, and comma separated 1-based numbers or
    inclusive ranges, e.g. ``1,3-5``.

    Args:
        text: Raw answer typed by the user.
        count: Number of selectable items.

    Returns:
        Sorted, de-duplicated zero-based indices.

    Raises:
        ValueError: If the answer is malformed or out of range.
    """
    answer = text.strip().lower()
    if answer == "all":
        return list(range(count))
    if answer == "none":
        return []
    if not answer:
        msg = "Empty selection"
        raise ValueError(msg)

    chosen: set[int] = set()
    for part in answer.split(","):
        part = part.strip()
        if not part:
            continue
        start_str, sep, end_str = part.partition("-")
        try:
            start = int(start_str)
            end = int(end_str) if sep else start
        except ValueError:
            msg = f"Not a number or range: '{part}'"
            raise ValueError(msg) from None
        if start > end:
            msg = f"Range is reversed: '{part}'"
            raise ValueError(msg)
        if start < 1 or end > count:
            msg = f"Out of range (1-{count}): '{part}'"
            raise ValueError(msg)
        chosen.update(range(start - 1, end))

    return sorted(chosen)


def select_projects(projects: Sequence[Project]) -> list[Project]:
    """Ask the user which projects to clean.

    Re-prompts until the answer parses.

    Args:
        projects: Candidate projects.

    Returns:
        The chosen projects, in candidate order.

    Raises:
        SelectionAborted: If the user cancels the prompt (Ctrl-C / EOF).
    """
    table = Table(title="Projects", show_lines=False)
    table.add_column("#", justify="right", width=4)
    table.add_column("Project", style="project.path")

    for number, project in enumerate(projects, start=1):
        table.add_row(str(number), escape(str(project)))

    console.print(table)

    while True:
        try:
            answer = typer.prompt(
                "Select projects to clean (e.g. 1,3-5, all, none)",
                default="all",
            )
        except typer.Abort as e:
            raise SelectionAborted from e

        try:
            indices = parse_selection(answer, len(projects))
        except ValueError as e:
            print_error(str(e))
            continue

        return [projects[i] for i in indices]
