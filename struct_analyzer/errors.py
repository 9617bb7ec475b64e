"""Error types raised by the analysis pipeline."""

from __future__ import annotations

from typing import Sequence, Tuple


class StructAnalyzerError(RuntimeError):
    """Base class for every fatal analysis error."""


class FetchError(StructAnalyzerError):
    """Raised when a repository locator cannot be materialised locally."""

    def __init__(self, locator: str, reason: str) -> None:
        super().__init__(f"Unable to fetch {locator}: {reason}")
        self.locator = locator
        self.reason = reason


class WalkError(StructAnalyzerError):
    """Raised when the filesystem cannot be read during traversal."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to read {path}: {reason}")
        self.path = path
        self.reason = reason


def raise_walk_error(error: OSError) -> None:
    """``os.walk`` error hook that turns read failures into ``WalkError``."""
    raise WalkError(str(error.filename or ""), error.strerror or str(error)) from error


class ParseError(StructAnalyzerError):
    """Raised when a source file does not parse cleanly."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


class UnsupportedShapeError(StructAnalyzerError):
    """Raised when a type expression has no canonical rendering rule."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unsupported type expression shape: {kind}")
        self.kind = kind


class BatchAnalysisError(StructAnalyzerError):
    """Aggregate of every repository task that failed in one run."""

    def __init__(self, failures: Sequence[Tuple[str, BaseException]]) -> None:
        self.failures: Tuple[Tuple[str, BaseException], ...] = tuple(failures)
        details = "; ".join(f"{locator}: {exc}" for locator, exc in self.failures)
        count = len(self.failures)
        noun = "repository" if count == 1 else "repositories"
        super().__init__(f"{count} {noun} failed: {details}")

    @property
    def locators(self) -> Tuple[str, ...]:
        return tuple(locator for locator, _ in self.failures)


__all__ = [
    "BatchAnalysisError",
    "FetchError",
    "ParseError",
    "StructAnalyzerError",
    "UnsupportedShapeError",
    "WalkError",
    "raise_walk_error",
]
