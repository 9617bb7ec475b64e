"""Flattening and serialisation of analysis results."""

from __future__ import annotations

import json
from itertools import chain
from pathlib import Path
from typing import Iterable, List, Sequence

from .models import File


def assemble(results: Iterable[Sequence[File]]) -> List[File]:
    """Concatenate per-repository results, keeping repository order."""
    return list(chain.from_iterable(results))


def render_analysis(files: Sequence[File]) -> str:
    return json.dumps([record.to_dict() for record in files], indent=2, ensure_ascii=False) + "\n"


def write_analysis(files: Sequence[File], destination: Path) -> Path:
    """Serialise ``files`` as a JSON array at ``destination``."""
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render_analysis(files), encoding="utf-8")
    return destination


__all__ = ["assemble", "render_analysis", "write_analysis"]
