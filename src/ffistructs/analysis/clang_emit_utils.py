from __future__ import annotations

from typing import Optional


TAG_KEYWORDS = ("struct ", "union ", "enum ")
ANONYMOUS_MARKERS = ("(unnamed", "(anonymous")


def _kind_spelling(kind) -> str:
    name = getattr(kind, "name", None)
    if isinstance(name, str):
        return name
    return str(kind)


def _sanitize_identifier(name: str) -> str:
    if not name:
        return name
    cleaned = []
    for ch in name:
        if ch.isalnum() or ch == "_":
            cleaned.append(ch)
        else:
            cleaned.append("_")
    out = "".join(cleaned)
    if out[0].isdigit():
        out = "_" + out
    return out


def _strip_qualifiers(spelling: str) -> str:
    words = [word for word in spelling.split() if word not in {"const", "volatile", "restrict"}]
    return " ".join(words)


def _tag_name(spelling: Optional[str]) -> str:
    """Return the bare declared name for a record/enum type spelling.

    Anonymous records are spelled by libclang as e.g.
    ``struct (unnamed at foo.h:3:9)``; those have no usable name and map to "".
    """

    if not spelling:
        return ""
    name = _strip_qualifiers(spelling.strip())
    for keyword in TAG_KEYWORDS:
        if name.startswith(keyword):
            name = name[len(keyword):].strip()
            break
    if any(marker in name for marker in ANONYMOUS_MARKERS):
        return ""
    return name


def _cursor_label(cursor) -> str:
    name = getattr(cursor, "spelling", None) or getattr(cursor, "displayname", None)
    if name:
        return name
    cursor_type = getattr(cursor, "type", None)
    if cursor_type is not None and getattr(cursor_type, "spelling", None):
        return cursor_type.spelling
    return "<anonymous>"
