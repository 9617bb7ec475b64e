"""Canonical rendering of type expressions."""

from __future__ import annotations

from typing import Iterable

from ..errors import UnsupportedShapeError
from ..syntax import (
    ChannelShape,
    FuncShape,
    Generic,
    InterfaceShape,
    Mapping,
    Name,
    Pointer,
    Qualified,
    Sequence,
    StructShape,
    TypeExpr,
)


def render_type(expr: TypeExpr) -> str:
    """Return the canonical string for ``expr``.

    Interface and channel shapes render as ``""``, which callers treat as
    "unsupported, drop it". Anything outside the known variants raises
    ``UnsupportedShapeError``.
    """
    if isinstance(expr, Name):
        return expr.value
    if isinstance(expr, Qualified):
        return f"{render_type(expr.namespace)}.{expr.member}"
    if isinstance(expr, Pointer):
        return "*" + render_type(expr.target)
    if isinstance(expr, Sequence):
        return "[]" + render_type(expr.element)
    if isinstance(expr, Mapping):
        return f"map[{render_type(expr.key)}]{render_type(expr.value)}"
    if isinstance(expr, Generic):
        return f"{render_type(expr.base)}[{_join(expr.arguments)}]"
    if isinstance(expr, StructShape):
        return "struct{" + _join(decl.type for decl in expr.fields) + "}"
    if isinstance(expr, FuncShape):
        return f"func({_join(expr.params)}) ({_join(expr.results)})"
    if isinstance(expr, (InterfaceShape, ChannelShape)):
        return ""
    raise UnsupportedShapeError(type(expr).__name__)


def _join(exprs: Iterable[TypeExpr]) -> str:
    return ", ".join(render_type(expr) for expr in exprs)


__all__ = ["render_type"]
