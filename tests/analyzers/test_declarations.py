"""Tests for the declaration extractor."""

from __future__ import annotations

import textwrap

import pytest

from struct_analyzer.analyzers.declarations import DeclarationExtractor, extract_field_documentation
from struct_analyzer.errors import UnsupportedShapeError
from struct_analyzer.models import Field, Import, Tag
from struct_analyzer.syntax import (
    ChannelShape,
    FieldDecl,
    ImportSpec,
    InterfaceShape,
    Name,
    ParsedFile,
    Sequence,
    StructShape,
    TypeSpec,
)


def _parse(go_parser, source: str):  # type: ignore[no-untyped-def]
    return go_parser.parse(textwrap.dedent(source).lstrip("\n").encode("utf-8"), "model.go")


def test_untagged_named_fields_are_dropped(go_parser) -> None:  # type: ignore[no-untyped-def]
    parsed = _parse(
        go_parser,
        """
        package people

        type Person struct {
        	Name string `json:"name"`
        	Age  int
        }
        """,
    )

    record = DeclarationExtractor().extract(parsed, module="example.com/people", location="model.go")

    assert record is not None
    assert record.module == "example.com/people"
    assert record.location == "model.go"
    assert record.package == "people"
    assert dict(record.structs["Person"].fields) == {
        "Name": Field(go_type="string", tags=(Tag(type="json", argument="name"),)),
    }
    assert record.structs["Person"].embeds == ()


def test_embeds_grouped_names_and_unsupported_fields(go_parser) -> None:  # type: ignore[no-untyped-def]
    parsed = _parse(
        go_parser,
        """
        package config

        import (
        	"time"
        	yml "gopkg.in/yaml.v3"
        )

        // Settings controls the service.
        type Settings struct {
        	Base
        	*Shared `json:",inline"`
        	Min, Max time.Duration `yaml:"bounds,flow"`
        	Events chan string `json:"events"`
        	Hook func(int) error `json:"-"`
        	Lookup map[string][]*Entry `json:"lookup,omitempty"` // indexed by name
        	Empty string `json:""`
        } // settings
        """,
    )

    record = DeclarationExtractor().extract(parsed)
    assert record is not None
    assert record.imports == (Import(path="time"), Import(path="gopkg.in/yaml.v3", alias="yml"))

    settings = record.structs["Settings"]
    assert settings.documentation == "Settings controls the service."
    assert settings.comments == "settings"
    assert settings.embeds == ("Base", "*Shared")
    assert sorted(settings.fields) == ["Hook", "Lookup", "Max", "Min"]

    bounds = (Tag(type="yaml", argument="bounds", options=("flow",)),)
    assert settings.fields["Min"] == Field(go_type="time.Duration", tags=bounds)
    assert settings.fields["Max"].tags == settings.fields["Min"].tags
    assert settings.fields["Hook"].go_type == "func(int) (error)"
    assert settings.fields["Lookup"].go_type == "map[string][]*Entry"
    assert settings.fields["Lookup"].comments == "indexed by name"


def test_aliases_and_named_types(go_parser) -> None:  # type: ignore[no-untyped-def]
    parsed = _parse(
        go_parser,
        """
        package kinds

        type ID = string
        type Names []string
        type Stream = chan int
        type Reader interface{ Read() }
        type Plain struct {
        	Value int
        }
        """,
    )

    record = DeclarationExtractor().extract(parsed)

    assert record is not None
    assert dict(record.aliases) == {"ID": "string", "Names": "[]string"}
    assert dict(record.structs) == {}


def test_files_without_structs_or_aliases_are_discarded(go_parser) -> None:  # type: ignore[no-untyped-def]
    parsed = _parse(
        go_parser,
        """
        package empty

        type Reader interface{ Read() }

        type Plain struct {
        	Value int
        }

        func Run() {}
        """,
    )

    assert DeclarationExtractor().extract(parsed) is None


def test_retained_records_satisfy_invariants() -> None:
    parsed = ParsedFile(
        path="x.go",
        package="x",
        imports=(ImportSpec(path='"fmt"'),),
        type_specs=(
            TypeSpec(
                name="Mixed",
                type=StructShape(
                    (
                        FieldDecl(names=("A",), type=Name("int"), tag='`json:"a"`'),
                        FieldDecl(names=("B",), type=Name("int"), tag='`nonsense`'),
                        FieldDecl(names=("C",), type=InterfaceShape(), tag='`json:"c"`'),
                        FieldDecl(names=(), type=ChannelShape()),
                    )
                ),
            ),
            TypeSpec(name="Bare", type=StructShape((FieldDecl(names=("D",), type=Sequence(Name("int"))),))),
        ),
    )

    record = DeclarationExtractor().extract(parsed)

    assert record is not None
    assert list(record.structs) == ["Mixed"]
    for struct in record.structs.values():
        assert len(struct.fields) + len(struct.embeds) > 0
        for field in struct.fields.values():
            assert len(field.tags) >= 1
    assert record.imports == (Import(path="fmt"),)


def test_unknown_field_shape_aborts() -> None:
    parsed = ParsedFile(
        path="x.go",
        package="x",
        type_specs=(
            TypeSpec(name="Odd", type=StructShape((FieldDecl(names=("A",), type="int"),))),  # type: ignore[arg-type]
        ),
    )

    with pytest.raises(UnsupportedShapeError):
        DeclarationExtractor().extract(parsed)


def test_field_documentation_map(go_parser) -> None:  # type: ignore[no-untyped-def]
    parsed = _parse(
        go_parser,
        """
        package sdk

        type Request struct {
        	// Bucket to read from.
        	Bucket *string
        	Key, Version string
        }

        type Alias = Request
        """,
    )

    assert extract_field_documentation(parsed) == {
        "Request": {"Bucket": "Bucket to read from.", "Key": "", "Version": ""},
    }
