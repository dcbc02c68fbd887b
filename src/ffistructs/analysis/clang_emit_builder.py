from __future__ import annotations

from typing import Callable, Optional

from clang.cindex import CursorKind

from .clang_comments import render_comment
from .clang_emit_types import DeclarationBuckets, EnumConstant, EnumDecl, FieldInfo, ShapeError, StructDecl
from .clang_emit_utils import _cursor_label, _kind_spelling, _tag_name
from .clang_provider import ChildVisit, visit_children
from .clang_type_map import resolve_type


BUCKET_BY_KIND = {
    CursorKind.STRUCT_DECL: "structs",
    CursorKind.TYPEDEF_DECL: "typedefs",
    CursorKind.FUNCTION_DECL: "functions",
    CursorKind.ENUM_DECL: "enums",
}


def collect_declarations(
    root,
    predicate: Optional[Callable[[object], bool]] = None,
    log=None,
) -> DeclarationBuckets:
    buckets = DeclarationBuckets()

    def visit(cursor, parent) -> ChildVisit:
        if predicate is not None and not predicate(cursor):
            return ChildVisit.CONTINUE
        bucket = BUCKET_BY_KIND.get(cursor.kind)
        if bucket is None:
            if log is not None:
                log(f"ignoring {_kind_spelling(cursor.kind)} {_cursor_label(cursor)}")
            return ChildVisit.CONTINUE
        # Forward declarations carry no layout.
        if bucket in {"structs", "enums"} and not cursor.is_definition():
            if log is not None:
                log(f"ignoring forward declaration {_cursor_label(cursor)}")
            return ChildVisit.CONTINUE
        getattr(buckets, bucket).append(cursor)
        return ChildVisit.CONTINUE

    visit_children(root, visit)
    return buckets


def _byte_offset(field_cursor, struct_name: str, field_name: str) -> int:
    bit_offset = field_cursor.get_field_offsetof()
    if bit_offset < 0:
        raise ShapeError(f"field '{field_name}' has no computable offset ({bit_offset})", node=struct_name)
    byte_offset, remainder = divmod(bit_offset, 8)
    if remainder:
        raise ShapeError(
            f"field '{field_name}' is not byte aligned (bit offset {bit_offset}); bit-fields are not supported",
            node=struct_name,
        )
    return byte_offset


def extract_struct(cursor, comment_log=None, member_log=None) -> StructDecl:
    struct_type = cursor.type
    name = _tag_name(struct_type.spelling)
    if not name:
        raise ShapeError("struct has no resolvable name", node=_cursor_label(cursor), kind="STRUCT_DECL")
    size = struct_type.get_size()
    if size < 0:
        raise ShapeError(f"struct size is not available ({size})", node=name, kind="STRUCT_DECL")

    fields: list[FieldInfo] = []

    def visit(child, parent) -> ChildVisit:
        if child.kind != CursorKind.FIELD_DECL:
            raise ShapeError(
                f"unsupported struct member {_cursor_label(child)}",
                node=name,
                kind=_kind_spelling(child.kind),
            )
        field_name = child.displayname
        field_type = child.type
        token = resolve_type(field_type)
        offset = _byte_offset(child, name, field_name)
        if fields and offset < fields[-1].offset:
            raise ShapeError(
                f"field '{field_name}' at offset {offset} precedes '{fields[-1].name}' at {fields[-1].offset}",
                node=name,
            )
        if member_log is not None:
            member_log(f"{name}.{field_name}: {field_type.spelling} -> {token} @ {offset}")
        fields.append(
            FieldInfo(
                name=field_name,
                type_token=token,
                offset=offset,
                doc=render_comment(child.parsed_comment, log=comment_log),
            )
        )
        return ChildVisit.CONTINUE

    visit_children(cursor, visit)

    return StructDecl(
        name=name,
        size=size,
        fields=fields,
        doc=render_comment(cursor.parsed_comment, log=comment_log),
    )


def extract_enum(cursor, comment_log=None) -> EnumDecl:
    name = _tag_name(cursor.type.spelling)
    if not name:
        raise ShapeError("enum has no resolvable name", node=_cursor_label(cursor), kind="ENUM_DECL")
    integer_type = resolve_type(cursor.enum_type)

    constants: list[EnumConstant] = []

    def visit(child, parent) -> ChildVisit:
        if child.kind != CursorKind.ENUM_CONSTANT_DECL:
            raise ShapeError(
                f"unsupported enum member {_cursor_label(child)}",
                node=name,
                kind=_kind_spelling(child.kind),
            )
        constants.append(
            EnumConstant(
                name=child.spelling,
                value=child.enum_value,
                doc=render_comment(child.parsed_comment, log=comment_log),
            )
        )
        return ChildVisit.CONTINUE

    visit_children(cursor, visit)

    return EnumDecl(
        name=name,
        integer_type=integer_type,
        constants=constants,
        doc=render_comment(cursor.parsed_comment, log=comment_log),
    )
