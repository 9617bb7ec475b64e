"""Module identity resolution for files inside a repository snapshot."""

from __future__ import annotations

import ast
import os
import re
from pathlib import Path
from typing import Dict, Optional

from .config import WalkerConfig
from .errors import WalkError, raise_walk_error
from .logging import get_logger

ModuleIndex = Dict[Path, str]

_TRANSPORT_PREFIXES = ("https://", "http://", "ssh://", "git+ssh://", "git://", "file://")
_SCP_LOCATOR = re.compile(r"^[\w.-]+@(?P<host>[^:/]+):(?P<path>.+)$")


def parse_module_path(text: str) -> Optional[str]:
    """Return the path declared by the ``module`` directive, if any."""
    for raw_line in text.splitlines():
        line = raw_line.split("//", 1)[0].strip()
        if not line.startswith("module"):
            continue
        rest = line[len("module") :]
        value = rest.strip()
        if not value or len(value) == len(rest):
            continue
        if value[0] in "\"`":
            try:
                unquoted = ast.literal_eval(value) if value[0] == '"' else value.strip("`")
            except (SyntaxError, ValueError):
                return None
            return unquoted if isinstance(unquoted, str) and unquoted else None
        return value
    return None


def align_path(module: str, rel_path: str) -> str:
    """Drop the leading directories of ``rel_path`` already named by ``module``.

    The longest run of leading directory segments that ``module`` ends with
    (on a segment boundary) is removed. ``rel_path`` is returned unchanged
    when nothing overlaps.
    """
    parts = rel_path.split("/")
    cut = 0
    for index in range(1, len(parts)):
        prefix = "/".join(parts[:index])
        if module == prefix or module.endswith("/" + prefix):
            cut = index
    return "/".join(parts[cut:])


class ModuleResolver:
    """Maps source files to the module that owns them."""

    def __init__(self, config: WalkerConfig | None = None) -> None:
        self._config = config or WalkerConfig()
        self.logger = get_logger("modules")

    def build_index(self, root: Path) -> ModuleIndex:
        """Record the module declared by every descriptor below ``root``."""
        index: ModuleIndex = {}
        descriptor = self._config.module_descriptor
        for dirpath, dirnames, filenames in os.walk(root, onerror=raise_walk_error):
            dirnames[:] = sorted(name for name in dirnames if name not in self._config.skip_dirs)
            if descriptor not in filenames:
                continue
            directory = Path(dirpath)
            module = self._read_descriptor(directory / descriptor)
            if module is None:
                self.logger.debug("Ignoring malformed %s in %s", descriptor, directory)
                continue
            self.logger.debug("Indexed module %s at %s", module, directory)
            index[directory] = module
        return index

    @staticmethod
    def resolve(file_path: Path, index: ModuleIndex) -> str:
        """Return the module of the nearest indexed ancestor directory, or ``""``."""
        for directory in Path(file_path).parents:
            module = index.get(directory)
            if module is not None:
                return module
        return ""

    @staticmethod
    def synthesize(remote_locator: str, relative_dir: str) -> str:
        """Derive a module identity from the repository locator."""
        base = _strip_transport(remote_locator.strip()).rstrip("/")
        base = base.removesuffix(".git")
        relative = relative_dir.replace(os.sep, "/").strip("/")
        if relative in ("", "."):
            return base
        return f"{base}/{relative}"

    def module_for(self, file_path: Path, root: Path, locator: str, index: ModuleIndex) -> str:
        module = self.resolve(file_path, index)
        if module:
            return module
        relative_dir = file_path.parent.relative_to(root).as_posix()
        return self.synthesize(locator, relative_dir)

    @staticmethod
    def _read_descriptor(path: Path) -> Optional[str]:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            return None
        except OSError as exc:
            raise WalkError(str(path), str(exc)) from exc
        return parse_module_path(text)


def _strip_transport(locator: str) -> str:
    for prefix in _TRANSPORT_PREFIXES:
        if locator.startswith(prefix):
            remainder = locator[len(prefix) :]
            host, sep, path = remainder.partition("/")
            return f"{host.rpartition('@')[2]}{sep}{path}"
    match = _SCP_LOCATOR.match(locator)
    if match:
        return f"{match.group('host')}/{match.group('path')}"
    return locator


__all__ = ["ModuleIndex", "ModuleResolver", "align_path", "parse_module_path"]
