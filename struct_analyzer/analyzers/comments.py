"""Conversion of raw comment groups into documentation text."""

from __future__ import annotations

import re
from typing import List, Sequence

_DIRECTIVE = re.compile(r"^(line |extern |export |[a-z0-9]+:[a-z0-9])")


def comment_text(raw_comments: Sequence[str]) -> str:
    """Return the text of a comment group without markers.

    Line comments lose ``//`` and one following space, block comments lose
    their delimiters, tool directives such as ``//go:generate`` are dropped,
    trailing spaces are trimmed, and runs of blank lines collapse to one.
    The result has no trailing newline.
    """
    lines: List[str] = []
    for raw in raw_comments:
        if raw.startswith("//"):
            body = raw[2:]
            if _DIRECTIVE.match(body):
                continue
            if body.startswith(" "):
                body = body[1:]
            lines.append(body)
        elif raw.startswith("/*"):
            lines.extend(raw[2:-2].split("\n"))
        else:
            lines.append(raw)

    cleaned: List[str] = []
    for line in lines:
        line = line.rstrip()
        if not line and (not cleaned or not cleaned[-1]):
            continue
        cleaned.append(line)
    while cleaned and not cleaned[-1]:
        cleaned.pop()
    return "\n".join(cleaned)


__all__ = ["comment_text"]
