"""Materialising repository locators as local snapshots."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator

from ..errors import FetchError
from ..logging import get_logger

_REMOTE_PREFIXES = ("http://", "https://", "ssh://", "git+ssh://", "git://", "file://", "git@")


def is_remote(locator: str) -> bool:
    """Return True when ``locator`` looks like a remote git URL."""
    return locator.startswith(_REMOTE_PREFIXES)


class RepositoryFetcher:
    """Clones remote repositories into temporary snapshots.

    Local directories are analysed in place and are never removed.
    """

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        clone_depth: int | None = 1,
        temp_root: Path | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self._clone_depth = clone_depth
        self._temp_root = temp_root
        self.logger = get_logger("git.fetch")

    @contextmanager
    def snapshot(self, locator: str) -> Iterator[Path]:
        """Yield a local directory holding the repository contents."""
        if not is_remote(locator):
            path = Path(locator).expanduser().resolve()
            if not path.is_dir():
                raise FetchError(locator, "not a directory")
            yield path
            return

        temp_dir = Path(
            tempfile.mkdtemp(
                prefix="struct-analyzer-",
                dir=str(self._temp_root) if self._temp_root is not None else None,
            )
        )
        try:
            self.clone(locator, temp_dir)
            yield temp_dir
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)
            self.logger.debug("Removed snapshot %s", temp_dir)

    def clone(self, locator: str, destination: Path) -> None:
        args = ["git", "clone", "--quiet"]
        if self._clone_depth:
            args.extend(["--depth", str(self._clone_depth)])
        args.extend([locator, str(destination)])
        self.logger.debug("Running %s", " ".join(args))
        try:
            self._run(args, cwd=destination.parent, capture_output=True)
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"git exited with status {exc.returncode}"
            raise FetchError(locator, detail) from exc
        except OSError as exc:
            raise FetchError(locator, str(exc)) from exc

    def _run(self, args: Iterable[str], *, cwd: Path, capture_output: bool = False) -> str:
        return self._runner(args, cwd=cwd, capture_output=capture_output)

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path, capture_output: bool = False) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        if capture_output:
            return completed.stdout
        return ""


__all__ = ["RepositoryFetcher", "is_remote"]
