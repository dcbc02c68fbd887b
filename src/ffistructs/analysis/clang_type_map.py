from __future__ import annotations

from clang.cindex import TypeKind

from .clang_emit_types import UnsupportedTypeError
from .clang_emit_utils import _kind_spelling, _tag_name


MAX_POINTER_DEPTH = 16

# LongDouble narrows to double: the FFI layer has no wider float.
SCALAR_TOKENS = {
    TypeKind.VOID: "void",
    TypeKind.BOOL: "bool",
    TypeKind.INT: "int",
    TypeKind.SHORT: "short",
    TypeKind.USHORT: "ushort",
    TypeKind.UINT: "uint",
    TypeKind.LONG: "long",
    TypeKind.ULONG: "ulong",
    TypeKind.LONGLONG: "longlong",
    TypeKind.ULONGLONG: "ulonglong",
    TypeKind.SCHAR: "char",
    TypeKind.CHAR_S: "char",
    TypeKind.CHAR_U: "uchar",
    TypeKind.UCHAR: "uchar",
    TypeKind.WCHAR: "wchar",
    TypeKind.CHAR16: "char16",
    TypeKind.CHAR32: "char32",
    TypeKind.FLOAT: "float",
    TypeKind.DOUBLE: "double",
    TypeKind.LONGDOUBLE: "double",
}


def resolve_type(type_obj, depth: int = 0) -> str:
    kind = type_obj.kind
    token = SCALAR_TOKENS.get(kind)
    if token is not None:
        return token

    if kind == TypeKind.POINTER:
        if depth >= MAX_POINTER_DEPTH:
            raise UnsupportedTypeError(
                f"pointer nesting deeper than {MAX_POINTER_DEPTH} levels",
                node=type_obj.spelling,
                kind=_kind_spelling(kind),
            )
        return f"ptr({resolve_type(type_obj.get_pointee(), depth + 1)})"

    if kind == TypeKind.TYPEDEF:
        name = type_obj.get_typedef_name()
        if not name:
            raise UnsupportedTypeError("typedef without a name", node=type_obj.spelling, kind=_kind_spelling(kind))
        return name

    if kind == TypeKind.ELABORATED:
        return resolve_type(type_obj.get_named_type(), depth)

    if kind in {TypeKind.RECORD, TypeKind.ENUM}:
        name = _tag_name(type_obj.spelling)
        if not name:
            raise UnsupportedTypeError("anonymous record or enum type", node=type_obj.spelling, kind=_kind_spelling(kind))
        return name

    raise UnsupportedTypeError(
        f"unsupported type kind {_kind_spelling(kind)}",
        node=type_obj.spelling,
        kind=_kind_spelling(kind),
    )
