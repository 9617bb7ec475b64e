"""Go source analysis: parsing, type rendering, tag parsing and extraction."""

from __future__ import annotations

from .declarations import DeclarationExtractor, extract_field_documentation
from .tags import parse_tags
from .tree_sitter import GoSourceParser
from .types import render_type

__all__ = [
    "DeclarationExtractor",
    "GoSourceParser",
    "extract_field_documentation",
    "parse_tags",
    "render_type",
]
