"""Tree-sitter powered Go source parser."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import ParseError, UnsupportedShapeError
from ..syntax import (
    ChannelShape,
    FieldDecl,
    FuncShape,
    Generic,
    ImportSpec,
    InterfaceShape,
    Mapping,
    Name,
    ParsedFile,
    Pointer,
    Qualified,
    Sequence,
    StructShape,
    TypeExpr,
    TypeSpec,
)
from .comments import comment_text

GO_LANGUAGE = Language(tree_sitter_go.language())

_TERMINATORS = {"\n", ";", "\0"}
_IDENTIFIERS = {"type_identifier", "identifier", "package_identifier"}
_SEQUENCES = {"slice_type", "array_type", "implicit_length_array_type"}
_PARAMETERS = {"parameter_declaration", "variadic_parameter_declaration"}


class GoSourceParser:
    """Parses Go source into the declaration tree used by the extractor.

    A parser instance is not shared between threads; each repository task
    creates its own.
    """

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)

    def parse(self, source: bytes, path: str = "<memory>") -> ParsedFile:
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            raise ParseError(path, _describe_error(root))
        return _TreeAdapter(source).file(root, path)

    def parse_file(self, path: Path) -> ParsedFile:
        return self.parse(path.read_bytes(), str(path))


def _describe_error(root: Node) -> str:
    node = _first_error(root)
    if node is None:
        return "syntax error"
    row, column = node.start_point
    problem = f"missing {node.type}" if node.is_missing else "syntax error"
    return f"{problem} at line {row + 1}, column {column + 1}"


def _first_error(node: Node) -> Optional[Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _named(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type != "comment"]


class _TreeAdapter:
    def __init__(self, source: bytes) -> None:
        self._source = source

    def text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    # ------------------------------------------------------------------
    # Declarations

    def file(self, root: Node, path: str) -> ParsedFile:
        package = ""
        doc = ""
        imports: List[ImportSpec] = []
        specs: List[TypeSpec] = []
        for child in root.named_children:
            if child.type == "package_clause":
                names = _named(child)
                package = self.text(names[0]) if names else ""
                doc = self.doc(child)
            elif child.type == "import_declaration":
                imports.extend(self._imports(child))
            elif child.type == "type_declaration":
                specs.extend(self._type_specs(child))
        return ParsedFile(
            path=path,
            package=package,
            imports=tuple(imports),
            type_specs=tuple(specs),
            doc=doc,
        )

    def _imports(self, decl: Node) -> Iterable[ImportSpec]:
        for child in _named(decl):
            specs = _named(child) if child.type == "import_spec_list" else [child]
            for spec in specs:
                if spec.type != "import_spec":
                    continue
                name = spec.child_by_field_name("name")
                path = spec.child_by_field_name("path")
                yield ImportSpec(
                    path=self.text(path) if path is not None else "",
                    name=self.text(name) if name is not None else None,
                )

    def _type_specs(self, decl: Node) -> Iterable[TypeSpec]:
        grouped = any(child.type == "(" for child in decl.children)
        for spec in _named(decl):
            if spec.type not in ("type_spec", "type_alias"):
                continue
            doc = self.doc(spec)
            comment = self.line_comment(spec)
            if not grouped:
                doc = doc or self.doc(decl)
                comment = comment or self.line_comment(decl)
            name = spec.child_by_field_name("name")
            yield TypeSpec(
                name=self.text(name) if name is not None else "",
                type=self.type_expr(spec.child_by_field_name("type")),
                alias=spec.type == "type_alias",
                doc=doc,
                comment=comment,
            )

    # ------------------------------------------------------------------
    # Type expressions

    def type_expr(self, node: Optional[Node]) -> TypeExpr:
        if node is None:
            raise UnsupportedShapeError("missing type")
        kind = node.type
        if kind in _IDENTIFIERS:
            return Name(self.text(node))
        if kind == "qualified_type":
            return Qualified(
                Name(self.text(node.child_by_field_name("package"))),
                self.text(node.child_by_field_name("name")),
            )
        if kind == "pointer_type":
            return Pointer(self.type_expr(_named(node)[0]))
        if kind in _SEQUENCES:
            return Sequence(self.type_expr(node.child_by_field_name("element")))
        if kind == "map_type":
            return Mapping(
                self.type_expr(node.child_by_field_name("key")),
                self.type_expr(node.child_by_field_name("value")),
            )
        if kind == "generic_type":
            return Generic(
                self.type_expr(node.child_by_field_name("type")),
                self._type_arguments(node.child_by_field_name("type_arguments")),
            )
        if kind == "struct_type":
            return StructShape(tuple(self._fields(node)))
        if kind == "function_type":
            return FuncShape(
                self._parameters(node.child_by_field_name("parameters")),
                self._results(node.child_by_field_name("result")),
            )
        if kind == "interface_type":
            return InterfaceShape()
        if kind == "channel_type":
            return ChannelShape()
        if kind == "parenthesized_type":
            return self.type_expr(_named(node)[0])
        raise UnsupportedShapeError(kind)

    def _type_arguments(self, node: Optional[Node]) -> Tuple[TypeExpr, ...]:
        if node is None:
            return ()
        arguments: List[TypeExpr] = []
        for child in _named(node):
            if child.type == "type_elem":
                terms = _named(child)
                if len(terms) != 1:
                    raise UnsupportedShapeError("type union")
                child = terms[0]
            arguments.append(self.type_expr(child))
        return tuple(arguments)

    def _parameters(self, node: Optional[Node]) -> Tuple[TypeExpr, ...]:
        if node is None:
            return ()
        return tuple(
            self.type_expr(child.child_by_field_name("type"))
            for child in _named(node)
            if child.type in _PARAMETERS
        )

    def _results(self, node: Optional[Node]) -> Tuple[TypeExpr, ...]:
        if node is None:
            return ()
        if node.type == "parameter_list":
            return self._parameters(node)
        return (self.type_expr(node),)

    def _fields(self, struct_node: Node) -> Iterable[FieldDecl]:
        for body in _named(struct_node):
            if body.type != "field_declaration_list":
                continue
            for decl in _named(body):
                if decl.type != "field_declaration":
                    continue
                names = tuple(self.text(name) for name in decl.children_by_field_name("name"))
                expr = self.type_expr(decl.child_by_field_name("type"))
                if not names and any(child.type == "*" for child in decl.children):
                    expr = Pointer(expr)
                tag = decl.child_by_field_name("tag")
                yield FieldDecl(
                    names=names,
                    type=expr,
                    tag=self.text(tag) if tag is not None else None,
                    doc=self.doc(decl),
                    comment=self.line_comment(decl),
                )

    # ------------------------------------------------------------------
    # Comments

    def doc(self, node: Node) -> str:
        """Comment group ending on the line directly above ``node``."""
        comments: List[Node] = []
        row = node.start_point[0]
        sibling = node.prev_sibling
        while sibling is not None:
            if sibling.type == "comment":
                if sibling.end_point[0] < row - 1:
                    break
                comments.append(sibling)
                row = sibling.start_point[0]
            elif sibling.type not in _TERMINATORS:
                break
            sibling = sibling.prev_sibling
        if sibling is not None and sibling.type != "comment":
            # A comment sharing a line with the previous token trails it.
            comments = [c for c in comments if c.start_point[0] > sibling.end_point[0]]
        comments.reverse()
        return comment_text([self.text(comment) for comment in comments])

    def line_comment(self, node: Node) -> str:
        """Comments that follow ``node`` on its last line."""
        row = node.end_point[0]
        comments: List[str] = []
        sibling = node.next_sibling
        while sibling is not None:
            if sibling.type == "comment" and sibling.start_point[0] == row:
                comments.append(self.text(sibling))
            elif sibling.type != ";":
                break
            sibling = sibling.next_sibling
        return comment_text(comments)


__all__ = ["GO_LANGUAGE", "GoSourceParser"]
