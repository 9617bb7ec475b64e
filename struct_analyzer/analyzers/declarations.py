"""Conversion of parsed Go files into ``File`` records."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..models import Field, File, Import, Struct
from ..syntax import ImportSpec, ParsedFile, StructShape
from .tags import parse_tags
from .types import render_type


class DeclarationExtractor:
    """Builds the struct, alias and import metadata for one parsed file."""

    def extract(self, parsed: ParsedFile, *, module: str = "", location: str = "") -> Optional[File]:
        """Return the file record, or ``None`` when it declares no struct or alias."""
        aliases: Dict[str, str] = {}
        structs: Dict[str, Struct] = {}
        for spec in parsed.type_specs:
            if not spec.alias and isinstance(spec.type, StructShape):
                struct = self.extract_struct(spec.type)
                if struct is not None:
                    structs[spec.name] = Struct(
                        embeds=struct.embeds,
                        fields=struct.fields,
                        documentation=spec.doc,
                        comments=spec.comment,
                    )
                continue
            rendered = render_type(spec.type)
            if rendered:
                aliases[spec.name] = rendered

        if not structs and not aliases:
            return None
        return File(
            module=module,
            package=parsed.package,
            location=location,
            imports=tuple(_import(spec) for spec in parsed.imports),
            aliases=aliases,
            structs=structs,
            documentation=parsed.doc,
        )

    def extract_struct(self, shape: StructShape) -> Optional[Struct]:
        fields: Dict[str, Field] = {}
        embeds: List[str] = []
        for decl in shape.fields:
            go_type = render_type(decl.type)
            if not go_type:
                continue
            if decl.embedded:
                embeds.append(go_type)
                continue
            if decl.tag is None:
                continue
            tags = parse_tags(decl.tag)
            if not tags:
                continue
            for name in decl.names:
                fields[name] = Field(
                    go_type=go_type,
                    tags=tags,
                    documentation=decl.doc,
                    comments=decl.comment,
                )
        if not fields and not embeds:
            return None
        return Struct(embeds=tuple(embeds), fields=fields)


def extract_field_documentation(parsed: ParsedFile) -> Dict[str, Dict[str, str]]:
    """Map every struct in ``parsed`` to ``{field name: field doc}``.

    Unlike ``DeclarationExtractor`` this keeps untagged fields and does not
    render types.
    """
    result: Dict[str, Dict[str, str]] = {}
    for spec in parsed.type_specs:
        if spec.alias or not isinstance(spec.type, StructShape):
            continue
        result[spec.name] = {
            name: decl.doc for decl in spec.type.fields for name in decl.names
        }
    return result


def _import(spec: ImportSpec) -> Import:
    return Import(path=spec.path.strip('"`'), alias=spec.name)


__all__ = ["DeclarationExtractor", "extract_field_documentation"]
