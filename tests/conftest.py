"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_app_logger() -> Iterator[None]:
    """Undo logging configuration done by CLI invocations."""
    yield
    app_logger = logging.getLogger("nmsweep")
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)


def _make_project(root: Path, rel: str, *, with_cache: bool = True) -> Path:
    """Create a project directory with a package.json and optional node_modules."""
    project = root / rel if rel else root
    project.mkdir(parents=True, exist_ok=True)
    (project / "package.json").write_text('{"name": "test"}')
    if with_cache:
        cache = project / "node_modules"
        cache.mkdir(exist_ok=True)
        (cache / "left-pad").mkdir(exist_ok=True)
        (cache / "left-pad" / "index.js").write_text("module.exports = 1;")
    return project


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating projects below tmp_path."""

    def _factory(rel: str, *, with_cache: bool = True) -> Path:
        return _make_project(tmp_path, rel, with_cache=with_cache)

    return _factory


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A tree with one cleanable project, one without cache and one nested.

    Layout::

        a/package.json
        a/node_modules/
        a/sub/package.json
        a/sub/node_modules/
        b/package.json
    """
    _make_project(tmp_path, "a")
    _make_project(tmp_path, "a/sub")
    _make_project(tmp_path, "b", with_cache=False)
    return tmp_path
