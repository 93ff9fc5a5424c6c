"""Project scanner for dependency cache directories.

Walks a directory tree up to a bounded depth, looking for project
manifests (package.json by default). A directory holding a manifest is
a project; it becomes a cleanup candidate if it also holds the cache
directory (node_modules by default). The walker never descends into a
project, so nested packages and the cache's own manifests are skipped.
"""

import logging
import os
from pathlib import Path

from nmsweep.models.project import Project

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "package.json"
DEFAULT_CACHE_DIR_NAME = "node_modules"
DEFAULT_DEPTH = 2


class ProjectScanner:
    """Scans a directory tree for projects with a dependency cache.

    Args:
        root: Directory to start the walk from. Defaults to the current
            working directory.
        depth: Maximum number of path segments between the root and a
            manifest file. ``./package.json`` is one segment deep, so a
            depth of 0 inspects only the root entry and finds nothing.
        manifest_name: File name that marks a project directory.
        cache_dir_name: Directory name of the dependency cache.
    """

    def __init__(
        self,
        root: Path = Path("."),
        *,
        depth: int = DEFAULT_DEPTH,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        cache_dir_name: str = DEFAULT_CACHE_DIR_NAME,
    ) -> None:
        if depth < 0:
            msg = f"Depth must be >= 0, got {depth}"
            raise ValueError(msg)

        self._root = root
        self._depth = depth
        self._manifest_name = manifest_name
        self._cache_dir_name = cache_dir_name

    def scan(self) -> list[Project]:
        """Walk the tree once and collect cleanup candidates.

        Unreadable directories are logged and skipped. Symlinked
        directories are not followed.

        Returns:
            Projects in WAITING status, sorted by path.
        """
        projects: list[Project] = []

        for dirpath, dirnames, filenames in os.walk(self._root, onerror=self._on_walk_error):
            current = Path(dirpath)
            level = self._level(current)

            # Manifests in this directory sit one segment below it
            if level + 1 > self._depth:
                dirnames.clear()
                continue

            # Children would only hold manifests beyond the depth bound
            if level + 2 > self._depth:
                dirnames.clear()
            else:
                dirnames.sort()

            if self._manifest_name not in filenames:
                continue

            # Never descend into a project
            dirnames.clear()

            if (current / self._cache_dir_name).is_dir():
                logger.debug("Found project with %s: %s", self._cache_dir_name, current)
                projects.append(Project(current))
            else:
                logger.debug("Skipping project without %s: %s", self._cache_dir_name, current)

        projects.sort(key=lambda p: p.path)
        logger.info("Scan of %s found %d project(s)", self._root, len(projects))
        return projects

    def _level(self, path: Path) -> int:
        """Number of path segments between the scan root and a directory."""
        return len(path.relative_to(self._root).parts)

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        """Log an unreadable directory and let the walk continue."""
        logger.warning("Cannot read directory %s: %s", error.filename, error.strerror or error)
