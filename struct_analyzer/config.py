"""Configuration loading for struct-analyzer (.struct-analyzer.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Sequence

import yaml

CONFIG_FILENAME = ".struct-analyzer.yml"

DEFAULT_SKIP_DIRS: FrozenSet[str] = frozenset({".git", "vendor", "testdata"})
DEFAULT_OUTPUT = "analysis.json"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class WalkerConfig:
    """Traversal settings handed to the source walker and module resolver."""

    skip_dirs: FrozenSet[str] = DEFAULT_SKIP_DIRS
    source_suffix: str = ".go"
    test_suffix: str = "_test.go"
    module_descriptor: str = "go.mod"

    def is_candidate(self, filename: str) -> bool:
        return filename.endswith(self.source_suffix) and not filename.endswith(self.test_suffix)


@dataclass(frozen=True)
class FetchConfig:
    """Repository fetch settings."""

    clone_depth: Optional[int] = 1


@dataclass(frozen=True)
class AnalyzerConfig:
    """Represents the settings defined in .struct-analyzer.yml."""

    root: Path
    walker: WalkerConfig = field(default_factory=WalkerConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    max_workers: Optional[int] = None
    output: Optional[Path] = None

    @property
    def output_path(self) -> Path:
        return self.output if self.output is not None else self.root / DEFAULT_OUTPUT


def load_config(config_path: Path) -> AnalyzerConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AnalyzerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    walker_data = _as_dict(data.get("walker"))
    defaults = WalkerConfig()
    skip_dirs = walker_data.get("skip_dirs")
    walker = WalkerConfig(
        skip_dirs=frozenset(_as_str_list(skip_dirs)) if skip_dirs is not None else defaults.skip_dirs,
        source_suffix=_as_str(walker_data.get("source_suffix")) or defaults.source_suffix,
        test_suffix=_as_str(walker_data.get("test_suffix")) or defaults.test_suffix,
        module_descriptor=_as_str(walker_data.get("module_descriptor")) or defaults.module_descriptor,
    )

    fetch_data = _as_dict(data.get("fetch"))
    fetch = FetchConfig()
    if "clone_depth" in fetch_data:
        depth = _as_int(fetch_data.get("clone_depth"))
        fetch = FetchConfig(clone_depth=depth if depth and depth > 0 else None)

    dispatch_data = _as_dict(data.get("dispatch"))
    max_workers = _as_int(dispatch_data.get("max_workers"))
    if max_workers is not None and max_workers < 1:
        raise ConfigError("dispatch.max_workers must be a positive integer")

    output_str = _as_str(data.get("output"))
    output = root / output_str if output_str else None

    return AnalyzerConfig(
        root=root,
        walker=walker,
        fetch=fetch,
        max_workers=max_workers,
        output=output,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "AnalyzerConfig",
    "ConfigError",
    "FetchConfig",
    "WalkerConfig",
    "load_config",
]
