"""Declaration tree consumed by the extractor.

The tree-sitter adapter produces these records; everything downstream of the
parser works on them only. Type expressions form a closed set of variants,
see ``TypeExpr``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Name:
    """A plain type identifier such as ``string`` or ``Config``."""

    value: str


@dataclass(frozen=True)
class Qualified:
    """``namespace.member``, e.g. ``time.Duration``."""

    namespace: "TypeExpr"
    member: str


@dataclass(frozen=True)
class Pointer:
    target: "TypeExpr"


@dataclass(frozen=True)
class Sequence:
    """Slice or fixed-length array; the length is not retained."""

    element: "TypeExpr"


@dataclass(frozen=True)
class Mapping:
    key: "TypeExpr"
    value: "TypeExpr"


@dataclass(frozen=True)
class Generic:
    """An instantiated generic type with one or more type arguments."""

    base: "TypeExpr"
    arguments: Tuple["TypeExpr", ...]


@dataclass(frozen=True)
class FieldDecl:
    """One line of a struct body: zero names means an embedded type."""

    names: Tuple[str, ...]
    type: "TypeExpr"
    tag: Optional[str] = None
    doc: str = ""
    comment: str = ""

    @property
    def embedded(self) -> bool:
        return not self.names


@dataclass(frozen=True)
class StructShape:
    fields: Tuple[FieldDecl, ...] = ()


@dataclass(frozen=True)
class FuncShape:
    """Function signature; each entry is the type of one parameter group."""

    params: Tuple["TypeExpr", ...] = ()
    results: Tuple["TypeExpr", ...] = ()


@dataclass(frozen=True)
class InterfaceShape:
    pass


@dataclass(frozen=True)
class ChannelShape:
    pass


TypeExpr = Union[
    Name,
    Qualified,
    Pointer,
    Sequence,
    Mapping,
    Generic,
    StructShape,
    FuncShape,
    InterfaceShape,
    ChannelShape,
]


@dataclass(frozen=True)
class TypeSpec:
    """A top-level ``type`` declaration; ``alias`` marks ``type A = B``."""

    name: str
    type: TypeExpr
    alias: bool = False
    doc: str = ""
    comment: str = ""


@dataclass(frozen=True)
class ImportSpec:
    """An import with its raw (still quoted) path literal."""

    path: str
    name: Optional[str] = None


@dataclass(frozen=True)
class ParsedFile:
    path: str
    package: str
    imports: Tuple[ImportSpec, ...] = ()
    type_specs: Tuple[TypeSpec, ...] = ()
    doc: str = ""


__all__ = [
    "ChannelShape",
    "FieldDecl",
    "FuncShape",
    "Generic",
    "ImportSpec",
    "InterfaceShape",
    "Mapping",
    "Name",
    "ParsedFile",
    "Pointer",
    "Qualified",
    "Sequence",
    "StructShape",
    "TypeExpr",
    "TypeSpec",
]
