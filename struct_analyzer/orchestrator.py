"""Pipeline orchestration for multi-repository struct analysis."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .assembler import assemble, write_analysis
from .config import AnalyzerConfig
from .dispatcher import execute_all
from .git.fetch import RepositoryFetcher
from .logging import get_logger
from .models import File
from .modules import ModuleResolver
from .walker import SourceWalker


class Orchestrator:
    """Coordinates fetch, module resolution, extraction and output for one run."""

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        *,
        fetcher: RepositoryFetcher | None = None,
    ) -> None:
        self.config = config or AnalyzerConfig(root=Path.cwd())
        self.fetcher = fetcher or RepositoryFetcher(clone_depth=self.config.fetch.clone_depth)
        self.logger = get_logger("orchestrator")

    def run(self, locators: Sequence[str], destination: Path | None = None) -> Path:
        """Analyse every locator and write the combined result.

        Nothing is written unless every repository succeeds.
        """
        output = Path(destination) if destination is not None else self.config.output_path
        self.logger.info("Analysing %d repositories", len(locators))
        files = self.collect(locators)
        write_analysis(files, output)
        self.logger.info("Wrote %d file records to %s", len(files), output)
        return output

    def collect(self, locators: Sequence[str]) -> List[File]:
        results = execute_all(
            list(locators),
            self.analyze_repository,
            max_workers=self.config.max_workers,
        )
        return assemble(results)

    def analyze_repository(self, locator: str) -> List[File]:
        # tree-sitter parsers are not shared between tasks.
        resolver = ModuleResolver(self.config.walker)
        walker = SourceWalker(self.config.walker, resolver=resolver)
        with self.fetcher.snapshot(locator) as root:
            index = resolver.build_index(root)
            files = list(walker.walk(root, locator, index))
        self.logger.info("Analysed %s: %d file records", locator, len(files))
        return files


__all__ = ["Orchestrator"]
