"""Tests for canonical type rendering."""

from __future__ import annotations

import pytest

from struct_analyzer.analyzers.types import render_type
from struct_analyzer.errors import UnsupportedShapeError
from struct_analyzer.syntax import (
    ChannelShape,
    FieldDecl,
    FuncShape,
    Generic,
    InterfaceShape,
    Mapping,
    Name,
    Pointer,
    Qualified,
    Sequence,
    StructShape,
)


def test_pointer_to_slice_of_pointer() -> None:
    assert render_type(Pointer(Sequence(Pointer(Name("T"))))) == "*[]*T"


def test_qualified_and_map_types() -> None:
    expr = Mapping(Name("string"), Sequence(Qualified(Name("time"), "Duration")))
    assert render_type(expr) == "map[string][]time.Duration"


def test_generic_arguments_are_comma_joined() -> None:
    assert render_type(Generic(Name("Box"), (Name("int"),))) == "Box[int]"
    pair = Generic(Qualified(Name("maps"), "Pair"), (Name("string"), Pointer(Name("Item"))))
    assert render_type(pair) == "maps.Pair[string, *Item]"


def test_inline_struct_keeps_only_field_types() -> None:
    shape = StructShape(
        (
            FieldDecl(names=("A",), type=Name("int"), tag='`json:"a"`'),
            FieldDecl(names=("B", "C"), type=Sequence(Name("byte"))),
        )
    )
    assert render_type(StructShape((FieldDecl(names=("A",), type=Name("int")),))) == "struct{int}"
    assert render_type(shape) == "struct{int, []byte}"
    assert render_type(StructShape()) == "struct{}"


def test_function_shapes() -> None:
    handler = FuncShape(
        params=(Qualified(Name("context"), "Context"), Name("string")),
        results=(Name("error"),),
    )
    assert render_type(handler) == "func(context.Context, string) (error)"
    assert render_type(FuncShape()) == "func() ()"


def test_interface_and_channel_render_empty() -> None:
    assert render_type(InterfaceShape()) == ""
    assert render_type(ChannelShape()) == ""
    assert render_type(Sequence(ChannelShape())) == "[]"


def test_unknown_shape_is_fatal() -> None:
    with pytest.raises(UnsupportedShapeError) as excinfo:
        render_type("string")  # type: ignore[arg-type]
    assert "str" in str(excinfo.value)


@pytest.mark.parametrize(
    "canonical",
    [
        "string",
        "*[]*T",
        "map[string][]*pkg.Type",
        "Box[int]",
        "Pair[string, int]",
        "func(string, int) (error)",
        "func() ()",
        "struct{int}",
    ],
)
def test_rendering_is_idempotent(go_parser, canonical: str) -> None:  # type: ignore[no-untyped-def]
    parsed = go_parser.parse(f"package p\n\ntype X {canonical}\n".encode())
    rendered = render_type(parsed.type_specs[0].type)
    assert rendered == canonical

    reparsed = go_parser.parse(f"package p\n\ntype X {rendered}\n".encode())
    assert render_type(reparsed.type_specs[0].type) == rendered
