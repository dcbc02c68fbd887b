"""Render libclang parsed documentation comments as JSDoc blocks."""

from __future__ import annotations

from typing import Optional

from .clang_emit_types import ShapeError
from .clang_provider import ChildVisit, CommentKind, InlineCommandRenderKind, visit_children


DOC_OPEN = "/**"
DOC_LINE = " *"
DOC_CLOSE = " */"


def render_inline_command(command) -> str:
    style = command.render_kind
    parts: list[str] = []
    for arg in command.arguments:
        if style == InlineCommandRenderKind.NORMAL:
            parts.append(arg)
        elif style == InlineCommandRenderKind.BOLD:
            parts.append(f"**{arg}**")
        elif style == InlineCommandRenderKind.MONOSPACED:
            parts.append(f"`{arg}`")
        elif style == InlineCommandRenderKind.EMPHASIZED:
            parts.append(f"*{arg}*")
    return "".join(parts)


def render_paragraph(paragraph) -> str:
    parts: list[str] = [DOC_LINE]

    def visit(child, parent) -> ChildVisit:
        kind = child.kind
        if kind == CommentKind.PARAGRAPH:
            raise ShapeError("paragraph nested inside a paragraph", kind=kind.name)
        if kind == CommentKind.TEXT:
            parts.append(child.text)
        elif kind == CommentKind.INLINE_COMMAND:
            parts.append(render_inline_command(child))
        return ChildVisit.CONTINUE

    visit_children(paragraph, visit)
    return "".join(parts)


def render_comment(comment, log=None) -> Optional[str]:
    """Return a JSDoc block for ``comment`` or None for a null comment.

    Top-level text becomes its own line; paragraphs are flattened onto one
    line followed by an empty separator line. Nested paragraphs and inline
    commands outside a paragraph raise ``ShapeError``. Any other child kind
    is skipped and reported through ``log``.
    """

    if comment is None or comment.kind == CommentKind.NULL:
        return None

    lines: list[str] = [DOC_OPEN]

    def visit(child, parent) -> ChildVisit:
        kind = child.kind
        if kind == CommentKind.TEXT:
            lines.append(f"{DOC_LINE} {child.text}")
        elif kind == CommentKind.PARAGRAPH:
            lines.append(render_paragraph(child))
            lines.append(DOC_LINE)
        elif kind == CommentKind.INLINE_COMMAND:
            raise ShapeError("inline command outside of a paragraph", kind=kind.name)
        elif log is not None:
            log(f"skipping unrecognized comment node {kind.name}")
        return ChildVisit.CONTINUE

    visit_children(comment, visit)
    if lines[-1] == DOC_LINE:
        lines.pop()
    lines.append(DOC_CLOSE)
    return "\n".join(lines)
