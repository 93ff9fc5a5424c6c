"""Cleanup orchestration.

Wires the deletion pool to the status reporter through a single event
queue and runs both until every project reached a terminal status.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from nmsweep.cleaner.pool import DEFAULT_CONCURRENCY, delete_projects
from nmsweep.discovery.scanner import DEFAULT_CACHE_DIR_NAME

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nmsweep.cli.reporter import StatusReporter
    from nmsweep.models.project import CleanupResult, Project, StatusEvent

logger = logging.getLogger(__name__)


async def run_cleanup(
    projects: Sequence[Project],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
    cache_dir_name: str = DEFAULT_CACHE_DIR_NAME,
    reporter: StatusReporter | None = None,
) -> list[CleanupResult]:
    """Delete all cache directories, optionally rendering live status.

    Without a reporter no events are produced at all. With one, the pool
    and the reporter run concurrently; the queue is closed with a None
    sentinel once the pool is finished so the reporter can drain it.

    Args:
        projects: Projects to clean.
        concurrency: Maximum number of deletions in flight.
        cache_dir_name: Name of the cache directory inside each project.
        reporter: Live status display, or None for silent runs.

    Returns:
        One CleanupResult per project.
    """
    if reporter is None:
        return await delete_projects(
            projects, concurrency=concurrency, cache_dir_name=cache_dir_name
        )

    events: asyncio.Queue[StatusEvent | None] = asyncio.Queue()

    async def _produce() -> list[CleanupResult]:
        try:
            return await delete_projects(
                projects,
                events,
                concurrency=concurrency,
                cache_dir_name=cache_dir_name,
            )
        finally:
            await events.put(None)

    results, _ = await asyncio.gather(_produce(), reporter.run(events))
    return results


def run(
    projects: Sequence[Project],
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
    cache_dir_name: str = DEFAULT_CACHE_DIR_NAME,
    reporter: StatusReporter | None = None,
) -> list[CleanupResult]:
    """Synchronous entry point for :func:`run_cleanup`."""
    logger.debug("Cleaning %d project(s) with concurrency %d", len(projects), concurrency)
    return asyncio.run(
        run_cleanup(
            projects,
            concurrency=concurrency,
            cache_dir_name=cache_dir_name,
            reporter=reporter,
        )
    )
