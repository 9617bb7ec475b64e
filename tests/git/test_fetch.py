"""Tests for repository snapshots."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from struct_analyzer.errors import FetchError
from struct_analyzer.git.fetch import RepositoryFetcher, is_remote


@pytest.mark.parametrize(
    ("locator", "expected"),
    [
        ("https://github.com/org/repo", True),
        ("http://example.com/repo.git", True),
        ("git@github.com:org/repo.git", True),
        ("ssh://git@example.com/repo.git", True),
        ("file:///srv/mirrors/repo.git", True),
        ("/home/user/repo", False),
        ("relative/path", False),
    ],
)
def test_is_remote(locator: str, expected: bool) -> None:
    assert is_remote(locator) is expected


def test_remote_snapshot_is_cloned_and_removed(tmp_path: Path) -> None:
    calls = []

    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        calls.append(list(args))
        (Path(args[-1]) / "go.mod").write_text("module example.com/r\n", encoding="utf-8")
        return ""

    fetcher = RepositoryFetcher(runner=runner, temp_root=tmp_path)
    with fetcher.snapshot("https://example.com/r.git") as root:
        assert (root / "go.mod").exists()
        assert root.parent == tmp_path

    assert not root.exists()
    assert calls == [["git", "clone", "--quiet", "--depth", "1", "https://example.com/r.git", str(root)]]


def test_file_url_is_cloned(tmp_path: Path) -> None:
    calls = []

    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        calls.append(list(args))
        return ""

    fetcher = RepositoryFetcher(runner=runner, temp_root=tmp_path)
    with fetcher.snapshot("file:///srv/mirrors/repo.git") as root:
        assert root.parent == tmp_path

    assert calls[0][-2:] == ["file:///srv/mirrors/repo.git", str(root)]
    assert not root.exists()


def test_full_clone_when_depth_disabled(tmp_path: Path) -> None:
    calls = []

    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        calls.append(list(args))
        return ""

    with RepositoryFetcher(runner=runner, clone_depth=None, temp_root=tmp_path).snapshot("git@h:o/r.git"):
        pass

    assert "--depth" not in calls[0]


def test_clone_failure_raises_fetch_error_and_cleans_up(tmp_path: Path) -> None:
    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(128, list(args), stderr="fatal: repository not found\n")

    fetcher = RepositoryFetcher(runner=runner, temp_root=tmp_path)
    with pytest.raises(FetchError) as excinfo:
        with fetcher.snapshot("https://example.com/missing.git"):
            pass

    assert excinfo.value.locator == "https://example.com/missing.git"
    assert "repository not found" in str(excinfo.value)
    assert list(tmp_path.iterdir()) == []


def test_snapshot_removed_when_body_raises(tmp_path: Path) -> None:
    fetcher = RepositoryFetcher(runner=lambda args, cwd, capture_output=False: "", temp_root=tmp_path)

    with pytest.raises(RuntimeError):
        with fetcher.snapshot("https://example.com/r.git"):
            raise RuntimeError("boom")

    assert list(tmp_path.iterdir()) == []


def test_local_directory_is_used_in_place(tmp_path: Path) -> None:
    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        raise AssertionError("local paths must not be cloned")

    with RepositoryFetcher(runner=runner).snapshot(str(tmp_path)) as root:
        assert root == tmp_path.resolve()
    assert tmp_path.exists()


def test_missing_local_directory(tmp_path: Path) -> None:
    with pytest.raises(FetchError):
        with RepositoryFetcher().snapshot(str(tmp_path / "missing")):
            pass
