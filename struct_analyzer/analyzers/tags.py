"""Parsing of struct field annotation literals."""

from __future__ import annotations

import ast
from typing import List, Tuple

from ..models import Tag


def parse_tags(literal: str) -> Tuple[Tag, ...]:
    """Split a raw tag literal into ordered ``Tag`` entries.

    Entries without a ``:`` or with an empty key or value are skipped.
    Repeated keys are kept as separate entries.
    """
    tags: List[Tag] = []
    for token in _unwrap(literal).split(" "):
        key, sep, value = token.partition(":")
        value = value.strip('"')
        if not sep or not key or not value:
            continue
        argument, *options = value.split(",")
        tags.append(Tag(type=key, argument=argument, options=tuple(options)))
    return tuple(tags)


def _unwrap(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] == '"':
        try:
            decoded = ast.literal_eval(literal)
        except (SyntaxError, ValueError):
            return ""
        return decoded if isinstance(decoded, str) else ""
    return literal.strip("`")


__all__ = ["parse_tags"]
