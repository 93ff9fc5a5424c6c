"""Data models for nmsweep.

This module exports the project, status and event models shared by
discovery, the deletion pool and the status reporter.
"""

from nmsweep.models.project import CleanupResult, Project, Status, StatusEvent

__all__ = [
    "CleanupResult",
    "Project",
    "Status",
    "StatusEvent",
]
