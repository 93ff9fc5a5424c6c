"""Project domain models for discovery and cleanup.

This module defines the data structures passed between discovery, the
deletion pool and the status reporter: the per-project status, the
mutable project record owned by the reporter, and the immutable events
and results produced by the pool.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Status(str, Enum):
    """Cleanup status of a discovered project.

    Attributes:
        WAITING: Discovered, deletion not started yet.
        DELETING: Cache directory removal is in progress.
        FAILED: Removal failed; terminal.
        DONE: Cache directory removed; terminal.
    """

    WAITING = "waiting"
    DELETING = "deleting"
    FAILED = "failed"
    DONE = "done"

    @property
    def is_terminal(self) -> bool:
        """Check if no further transition is allowed from this status."""
        return self in (Status.FAILED, Status.DONE)


# Allowed forward transitions
_TRANSITIONS: dict[Status, frozenset[Status]] = {
    Status.WAITING: frozenset({Status.DELETING}),
    Status.DELETING: frozenset({Status.DONE, Status.FAILED}),
    Status.FAILED: frozenset(),
    Status.DONE: frozenset(),
}


@dataclass(slots=True)
class Project:
    """A discovered project directory holding a dependency cache.

    The path is the identity of the project and is used as a map key
    by the status reporter. Status only moves forward.

    Attributes:
        path: Project directory, relative to the scan root or absolute.
        status: Current cleanup status.
    """

    path: Path
    status: Status = field(default=Status.WAITING)

    def update_status(self, status: Status) -> None:
        """Move the project to a new status.

        Args:
            status: The status to transition to.

        Raises:
            ValueError: If the transition would move backwards or skip
                the deleting state.
        """
        if status not in _TRANSITIONS[self.status]:
            msg = f"Invalid status transition for {self}: {self.status.value} -> {status.value}"
            raise ValueError(msg)
        self.status = status

    def __str__(self) -> str:
        text = str(self.path)
        return text[2:] if text.startswith("./") else text


@dataclass(frozen=True, slots=True)
class StatusEvent:
    """A single status transition emitted by the deletion pool.

    Attributes:
        path: Identity of the project the event belongs to.
        status: The status the project moved to.
    """

    path: Path
    status: Status


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Outcome of removing one project's cache directory.

    Attributes:
        path: Project directory that was processed.
        status: Terminal status (DONE or FAILED).
        error: Error message if the removal failed, None otherwise.
    """

    path: Path
    status: Status
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate that the result carries a terminal status."""
        if not self.status.is_terminal:
            msg = f"Cleanup result must be terminal, got {self.status.value}"
            raise ValueError(msg)

    @property
    def success(self) -> bool:
        """Check if the cache directory was removed."""
        return self.status == Status.DONE
