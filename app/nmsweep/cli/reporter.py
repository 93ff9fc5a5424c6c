"""Live status display for running cleanups.

The reporter is the single owner of the progress display. It renders
one line per project and updates it from status events read off the
queue; deletion workers never touch display state directly.
"""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn

from nmsweep.models.project import Project, Status, StatusEvent
from nmsweep.utils.formatting import console as default_console

logger = logging.getLogger(__name__)

SUCCESS_MARKER = "✓"  # Check mark
FAILURE_MARKER = "✗"  # Ballot X


class StatusReporter:
    """Renders live per-project cleanup status.

    Args:
        projects: Projects to display, all in WAITING status.
        console: Console to render to. Defaults to the shared console.
    """

    def __init__(self, projects: Sequence[Project], *, console: Console | None = None) -> None:
        self._projects: dict[Path, Project] = {p.path: p for p in projects}
        self._progress = Progress(
            SpinnerColumn(spinner_name="dots", finished_text=""),
            TextColumn("{task.description}"),
            console=console or default_console,
        )
        self._tasks: dict[Path, TaskID] = {}

    @property
    def projects(self) -> dict[Path, Project]:
        """Projects keyed by path, with their latest status."""
        return self._projects

    async def run(self, events: asyncio.Queue[StatusEvent | None]) -> None:
        """Consume status events until the end-of-stream sentinel.

        Args:
            events: Queue of status events, terminated by None.
        """
        with self._progress:
            for project in self._projects.values():
                self._tasks[project.path] = self._progress.add_task(
                    _describe(project), total=1
                )

            while True:
                event = await events.get()
                if event is None:
                    break
                self._handle(event)

    def _handle(self, event: StatusEvent) -> None:
        """Apply one event to the project and its display line."""
        project = self._projects.get(event.path)
        if project is None:
            logger.debug("Ignoring event for unknown project: %s", event.path)
            return

        try:
            project.update_status(event.status)
        except ValueError as e:
            logger.debug("Ignoring event: %s", e)
            return

        task_id = self._tasks[project.path]
        if project.status.is_terminal:
            self._progress.update(task_id, description=_describe(project), completed=1)
        else:
            self._progress.update(task_id, description=_describe(project))


def _describe(project: Project) -> str:
    """Build the display line for a project in its current status."""
    path = escape(str(project))
    if project.status == Status.DONE:
        return f"[success]{SUCCESS_MARKER}[/] {path}"
    if project.status == Status.FAILED:
        return f"[error]{FAILURE_MARKER}[/] {path}"
    if project.status == Status.DELETING:
        return path
    return f"[muted]Waiting:[/] {path}"
