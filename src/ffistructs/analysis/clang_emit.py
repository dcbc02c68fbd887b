from __future__ import annotations

from typing import Optional

from .clang_emit_types import EnumDecl, StructDecl
from .clang_emit_utils import _sanitize_identifier


EXPORT_SUFFIX = "T"


def _indent_doc(doc: Optional[str], indent: str) -> list[str]:
    if not doc:
        return []
    return [f"{indent}{line}" for line in doc.splitlines()]


def export_name(name: str) -> str:
    return f"{_sanitize_identifier(name)}{EXPORT_SUFFIX}"


def render_struct(decl: StructDecl) -> str:
    lines: list[str] = []
    lines.extend(_indent_doc(decl.doc, ""))
    lines.append(f"export const {export_name(decl.name)} = {{")
    lines.append(f"  // Byte size: {decl.size}")
    lines.append("  struct: [")
    for member in decl.fields:
        lines.extend(_indent_doc(member.doc, "    "))
        lines.append(f"    /** {member.name}, offset {member.offset} */ {member.type_token},")
    lines.append("  ],")
    lines.append("} as const;")
    return "\n".join(lines) + "\n"


def render_enum(decl: EnumDecl) -> str:
    name = _sanitize_identifier(decl.name)
    lines: list[str] = []
    lines.extend(_indent_doc(decl.doc, ""))
    lines.append(f"export const enum {name} {{")
    for constant in decl.constants:
        lines.extend(_indent_doc(constant.doc, "  "))
        lines.append(f"  {constant.name} = {constant.value},")
    lines.append("}")
    lines.append(f"export const {export_name(decl.name)} = {decl.integer_type};")
    return "\n".join(lines) + "\n"


def join_blocks(blocks: list[str]) -> str:
    return "\n".join(blocks)
