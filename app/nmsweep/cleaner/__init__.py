"""Cache directory cleanup module.

This module provides the bounded-concurrency deletion pool.
"""

from nmsweep.cleaner.pool import DEFAULT_CONCURRENCY, delete_projects

__all__ = [
    "DEFAULT_CONCURRENCY",
    "delete_projects",
]
