"""Tests for ProjectScanner discovery."""

import logging
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from nmsweep.discovery.scanner import ProjectScanner
from nmsweep.models.project import Status


def _paths(root: Path, scanner: ProjectScanner) -> set[Path]:
    """Scan and return the found project paths relative to root."""
    return {p.path.relative_to(root) for p in scanner.scan()}


class TestProjectScanner:
    """Tests for ProjectScanner."""

    def test_finds_project_with_cache(self, tmp_path: Path, make_project: Callable) -> None:
        """A directory with package.json and node_modules is found."""
        make_project("app")

        projects = ProjectScanner(tmp_path).scan()

        assert len(projects) == 1
        assert projects[0].path == tmp_path / "app"
        assert projects[0].status == Status.WAITING

    def test_skips_project_without_cache(self, tmp_path: Path, make_project: Callable) -> None:
        """A project without node_modules is not a candidate."""
        make_project("app", with_cache=False)

        assert ProjectScanner(tmp_path).scan() == []

    def test_cache_file_is_not_a_directory(self, tmp_path: Path, make_project: Callable) -> None:
        """A regular file named node_modules does not count."""
        project = make_project("app", with_cache=False)
        (project / "node_modules").write_text("not a dir")

        assert ProjectScanner(tmp_path).scan() == []

    def test_ignores_cache_without_manifest(self, tmp_path: Path) -> None:
        """node_modules without a package.json next to it is ignored."""
        (tmp_path / "loose" / "node_modules").mkdir(parents=True)

        assert ProjectScanner(tmp_path).scan() == []

    def test_nested_project_scenario(self, sample_tree: Path) -> None:
        """Only the outer project is found; nested and cache-less ones are not."""
        scanner = ProjectScanner(sample_tree, depth=3)

        assert _paths(sample_tree, scanner) == {Path("a")}

    def test_does_not_descend_into_project_without_cache(
        self, tmp_path: Path, make_project: Callable
    ) -> None:
        """A project without cache still hides its nested projects."""
        make_project("outer", with_cache=False)
        make_project("outer/inner")

        assert ProjectScanner(tmp_path, depth=5).scan() == []

    def test_manifests_inside_cache_are_ignored(
        self, tmp_path: Path, make_project: Callable
    ) -> None:
        """Packages inside node_modules are never candidates."""
        project = make_project("app")
        dep = project / "node_modules" / "dep"
        dep.mkdir()
        (dep / "package.json").write_text("{}")
        (dep / "node_modules").mkdir()

        assert _paths(tmp_path, ProjectScanner(tmp_path, depth=6)) == {Path("app")}

    def test_sibling_projects(self, tmp_path: Path, make_project: Callable) -> None:
        """Several sibling projects are all found, sorted by path."""
        make_project("c")
        make_project("a")
        make_project("b")

        projects = ProjectScanner(tmp_path).scan()

        assert [p.path.name for p in projects] == ["a", "b", "c"]

    def test_root_project(self, tmp_path: Path, make_project: Callable) -> None:
        """The root itself is a candidate when it holds both entries."""
        make_project("")
        make_project("child")

        projects = ProjectScanner(tmp_path, depth=3).scan()

        assert [p.path for p in projects] == [tmp_path]

    def test_empty_tree(self, tmp_path: Path) -> None:
        """An empty tree yields no projects."""
        assert ProjectScanner(tmp_path).scan() == []

    def test_idempotent(self, sample_tree: Path, make_project: Callable) -> None:
        """Scanning an unmodified tree twice yields the same set."""
        make_project("c/d")
        scanner = ProjectScanner(sample_tree, depth=4)

        first = {p.path for p in scanner.scan()}
        second = {p.path for p in scanner.scan()}

        assert first == second
        assert len(first) == 2

    def test_relative_root(
        self, tmp_path: Path, make_project: Callable, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """With the default root, paths are relative to the cwd."""
        make_project("web")
        monkeypatch.chdir(tmp_path)

        projects = ProjectScanner().scan()

        assert [p.path for p in projects] == [Path("web")]
        assert str(projects[0]) == "web"

    def test_symlinked_directories_not_followed(
        self, tmp_path: Path, make_project: Callable
    ) -> None:
        """A symlink to a project directory is not reported again."""
        make_project("real")
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)

        assert _paths(tmp_path, ProjectScanner(tmp_path)) == {Path("real")}

    def test_negative_depth_rejected(self, tmp_path: Path) -> None:
        """Depth must not be negative."""
        with pytest.raises(ValueError, match="Depth"):
            ProjectScanner(tmp_path, depth=-1)

    def test_custom_names(self, tmp_path: Path) -> None:
        """Manifest and cache names are configurable."""
        project = tmp_path / "crate"
        (project / "target").mkdir(parents=True)
        (project / "Cargo.toml").write_text("[package]")

        scanner = ProjectScanner(tmp_path, manifest_name="Cargo.toml", cache_dir_name="target")

        assert _paths(tmp_path, scanner) == {Path("crate")}


class TestDepthBound:
    """Tests for the depth limit."""

    def test_depth_zero_finds_nothing(self, tmp_path: Path, make_project: Callable) -> None:
        """Depth 0 only inspects the root entry, so no manifest is considered."""
        make_project("")

        assert ProjectScanner(tmp_path, depth=0).scan() == []

    def test_depth_one_inspects_root_only(self, tmp_path: Path, make_project: Callable) -> None:
        """Depth 1 considers ./package.json but not ./a/package.json."""
        make_project("a")
        assert ProjectScanner(tmp_path, depth=1).scan() == []

        make_project("")
        assert [p.path for p in ProjectScanner(tmp_path, depth=1).scan()] == [tmp_path]

    @pytest.mark.parametrize(
        ("depth", "expected"),
        [
            (1, set()),
            (2, {Path("a")}),
            (3, {Path("a"), Path("x/b")}),
            (4, {Path("a"), Path("x/b"), Path("x/y/c")}),
        ],
    )
    def test_depth_is_exact(
        self, tmp_path: Path, make_project: Callable, depth: int, expected: set[Path]
    ) -> None:
        """No manifest deeper than `depth` path segments is considered."""
        make_project("a")  # manifest at 2 segments
        make_project("x/b")  # 3 segments
        make_project("x/y/c")  # 4 segments

        assert _paths(tmp_path, ProjectScanner(tmp_path, depth=depth)) == expected

    def test_default_depth_is_two(self, tmp_path: Path, make_project: Callable) -> None:
        """The default depth reaches direct children only."""
        make_project("a")
        make_project("x/b")

        assert _paths(tmp_path, ProjectScanner(tmp_path)) == {Path("a")}


class TestTraversalErrors:
    """Tests for unreadable directories."""

    def test_walk_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Walk errors are logged as warnings, not raised."""
        error = PermissionError(13, "Permission denied", "/secret")

        with caplog.at_level(logging.WARNING, logger="nmsweep.discovery.scanner"):
            ProjectScanner._on_walk_error(error)

        assert "Cannot read directory /secret" in caplog.text

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_directory_skipped(
        self, tmp_path: Path, make_project: Callable, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An unreadable directory is skipped and the walk continues."""
        make_project("ok")
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0)

        try:
            with caplog.at_level(logging.WARNING, logger="nmsweep"):
                projects = ProjectScanner(tmp_path, depth=3).scan()
        finally:
            locked.chmod(0o755)

        assert [p.path.name for p in projects] == ["ok"]
        assert "Cannot read directory" in caplog.text
