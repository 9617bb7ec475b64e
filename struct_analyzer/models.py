"""Records emitted by the struct analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Tag:
    """One `key:"argument,option,..."` entry of a field annotation."""

    type: str
    argument: str
    options: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": self.type}
        if self.argument:
            payload["argument"] = self.argument
        if self.options:
            payload["options"] = list(self.options)
        return payload


@dataclass(frozen=True)
class Field:
    """A named struct field that carries at least one tag."""

    go_type: str
    tags: Tuple[Tag, ...] = ()
    documentation: str = ""
    comments: str = ""

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "goType": self.go_type,
            "tags": [tag.to_dict() for tag in self.tags],
        }
        _put_text(payload, "documentation", self.documentation)
        _put_text(payload, "comments", self.comments)
        return payload


@dataclass(frozen=True)
class Struct:
    """Tagged fields and embedded types of one struct declaration."""

    embeds: Tuple[str, ...] = ()
    fields: Mapping[str, Field] = field(default_factory=dict)
    documentation: str = ""
    comments: str = ""

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.embeds:
            payload["embeds"] = list(self.embeds)
        payload["fields"] = {name: self.fields[name].to_dict() for name in sorted(self.fields)}
        _put_text(payload, "documentation", self.documentation)
        _put_text(payload, "comments", self.comments)
        return payload


@dataclass(frozen=True)
class Import:
    """A file import; `alias` is set only for renamed, dot or blank imports."""

    path: str
    alias: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"path": self.path}
        if self.alias:
            payload["alias"] = self.alias
        return payload


@dataclass(frozen=True)
class File:
    """Extracted metadata for a single source file."""

    module: str
    package: str
    location: str
    imports: Tuple[Import, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)
    structs: Mapping[str, Struct] = field(default_factory=dict)
    documentation: str = ""

    def is_empty(self) -> bool:
        return not self.structs and not self.aliases

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "module": self.module,
            "package": self.package,
            "location": self.location,
        }
        if self.imports:
            payload["imports"] = [item.to_dict() for item in self.imports]
        if self.aliases:
            payload["aliases"] = {name: self.aliases[name] for name in sorted(self.aliases)}
        if self.structs:
            payload["structs"] = {name: self.structs[name].to_dict() for name in sorted(self.structs)}
        _put_text(payload, "documentation", self.documentation)
        return payload


def _put_text(payload: Dict[str, Any], key: str, value: str) -> None:
    if value:
        payload[key] = value


__all__ = ["Field", "File", "Import", "Struct", "Tag"]
