"""Concurrent deletion of project cache directories.

Removes the cache directory of every project with a bounded number of
removals in flight. Each project emits a DELETING event when its slot
opens and exactly one terminal event (DONE or FAILED) afterwards.
Failures are isolated per project and never abort sibling deletions.
"""

import asyncio
import logging
import shutil
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from nmsweep.discovery.scanner import DEFAULT_CACHE_DIR_NAME
from nmsweep.models.project import CleanupResult, Project, Status, StatusEvent

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8

Remover = Callable[[Path], object]


async def delete_projects(
    projects: Sequence[Project],
    events: asyncio.Queue[StatusEvent | None] | None = None,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
    cache_dir_name: str = DEFAULT_CACHE_DIR_NAME,
    remover: Remover | None = None,
) -> list[CleanupResult]:
    """Delete the cache directory of every project.

    Removal runs on a thread pool sized to the concurrency limit so the
    event loop stays free for the status reporter.

    Args:
        projects: Projects whose cache directory should be removed.
        events: Queue receiving status events. None disables events.
        concurrency: Maximum number of removals in flight.
        cache_dir_name: Name of the cache directory inside each project.
        remover: Callable removing a directory tree. Defaults to shutil.rmtree.

    Returns:
        One CleanupResult per project, in input order.

    Raises:
        ValueError: If concurrency is lower than 1.
    """
    if concurrency < 1:
        msg = f"Concurrency must be >= 1, got {concurrency}"
        raise ValueError(msg)

    remove = remover or shutil.rmtree
    semaphore = asyncio.Semaphore(concurrency)

    with ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="nmsweep") as executor:

        async def _limited(project: Project) -> CleanupResult:
            async with semaphore:
                return await _delete_project(
                    project.path, events, executor, cache_dir_name, remove
                )

        results = await asyncio.gather(*[_limited(p) for p in projects])

    failed = sum(1 for r in results if not r.success)
    logger.info("Cleanup finished: %d removed, %d failed", len(results) - failed, failed)
    return list(results)


async def _delete_project(
    path: Path,
    events: asyncio.Queue[StatusEvent | None] | None,
    executor: ThreadPoolExecutor,
    cache_dir_name: str,
    remover: Remover,
) -> CleanupResult:
    """Remove one project's cache directory and report its transitions."""
    await _emit(events, path, Status.DELETING)

    loop = asyncio.get_running_loop()
    try:
        target = await loop.run_in_executor(executor, _resolve_target, path, cache_dir_name)
        await loop.run_in_executor(executor, remover, target)
    except (OSError, RuntimeError) as e:
        # RuntimeError: symlink loops on Python < 3.13
        logger.warning("Failed to remove %s in %s: %s", cache_dir_name, path, e)
        await _emit(events, path, Status.FAILED)
        return CleanupResult(path=path, status=Status.FAILED, error=str(e))

    logger.debug("Removed %s", target)
    await _emit(events, path, Status.DONE)
    return CleanupResult(path=path, status=Status.DONE)


def _resolve_target(path: Path, cache_dir_name: str) -> Path:
    """Canonicalize a project path and return its existing cache directory.

    Relative paths are resolved up front so removal does not depend on
    the working directory while work is in flight.
    """
    target = path.resolve(strict=True) / cache_dir_name
    if not target.is_dir():
        msg = f"Not a directory: {target}"
        raise NotADirectoryError(msg)
    return target


async def _emit(
    events: asyncio.Queue[StatusEvent | None] | None,
    path: Path,
    status: Status,
) -> None:
    """Send a status event if events are enabled."""
    if events is not None:
        await events.put(StatusEvent(path=path, status=status))
