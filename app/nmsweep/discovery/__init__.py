"""Project discovery module.

This module provides the depth-bounded directory walk that finds
projects holding a dependency cache directory.
"""

from nmsweep.discovery.scanner import (
    DEFAULT_CACHE_DIR_NAME,
    DEFAULT_DEPTH,
    DEFAULT_MANIFEST_NAME,
    ProjectScanner,
)

__all__ = [
    "DEFAULT_CACHE_DIR_NAME",
    "DEFAULT_DEPTH",
    "DEFAULT_MANIFEST_NAME",
    "ProjectScanner",
]
