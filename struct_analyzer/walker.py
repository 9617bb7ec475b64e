"""Traversal of repository snapshots for Go source files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .analyzers.declarations import DeclarationExtractor
from .analyzers.tree_sitter import GoSourceParser
from .config import WalkerConfig
from .errors import WalkError, raise_walk_error
from .logging import get_logger
from .models import File
from .modules import ModuleIndex, ModuleResolver, align_path


class SourceWalker:
    """Walks a snapshot and yields a ``File`` for every file that declares structs or aliases."""

    def __init__(
        self,
        config: WalkerConfig | None = None,
        *,
        resolver: ModuleResolver | None = None,
        parser: GoSourceParser | None = None,
        extractor: DeclarationExtractor | None = None,
    ) -> None:
        self.config = config or WalkerConfig()
        self.resolver = resolver or ModuleResolver(self.config)
        self.parser = parser or GoSourceParser()
        self.extractor = extractor or DeclarationExtractor()
        self.logger = get_logger("walker")

    def iter_candidates(self, root: Path) -> Iterator[Path]:
        """Yield candidate source files in a stable, sorted order."""
        for dirpath, dirnames, filenames in os.walk(root, onerror=raise_walk_error):
            dirnames[:] = sorted(name for name in dirnames if name not in self.config.skip_dirs)
            current_dir = Path(dirpath)
            for filename in sorted(filenames):
                if self.config.is_candidate(filename):
                    yield current_dir / filename

    def walk(self, root: Path, locator: str, index: ModuleIndex) -> Iterator[File]:
        for path in self.iter_candidates(root):
            try:
                source = path.read_bytes()
            except OSError as exc:
                raise WalkError(str(path), str(exc)) from exc

            rel_path = path.relative_to(root).as_posix()
            parsed = self.parser.parse(source, rel_path)
            self.logger.debug("Parsed %s", rel_path)

            module = self.resolver.module_for(path, root, locator, index)
            record = self.extractor.extract(
                parsed,
                module=module,
                location=align_path(module, rel_path),
            )
            if record is not None:
                yield record


__all__ = ["SourceWalker"]
