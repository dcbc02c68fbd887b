from __future__ import annotations

import enum
import os
import sys
from ctypes import Structure, c_int, c_uint, c_void_p
from typing import Callable, Optional

import clang.cindex
from clang.cindex import Config, Cursor, Diagnostic, Index, TranslationUnit, TranslationUnitLoadError

from .clang_emit_types import ParseError, ShapeError


DEFAULT_CLANG_ARGS = ["-x", "c", "-std=c11"]

PARSE_OPTIONS = (
    TranslationUnit.PARSE_DETAILED_PROCESSING_RECORD
    | TranslationUnit.PARSE_SKIP_FUNCTION_BODIES
)


class ChildVisit(enum.Enum):
    CONTINUE = "continue"
    RECURSE = "recurse"
    BREAK = "break"


def visit_children(node, visitor: Callable[[object, object], ChildVisit]) -> bool:
    """Depth-first walk over ``node.get_children()`` driven by ``visitor``.

    ``visitor(child, parent)`` decides per node whether to move on to the next
    sibling, descend into the child first, or stop the walk. Returns True when
    the walk was stopped by ``ChildVisit.BREAK``.
    """

    for child in node.get_children():
        action = visitor(child, node)
        if action is ChildVisit.BREAK:
            return True
        if action is ChildVisit.RECURSE:
            if visit_children(child, visitor):
                return True
        elif action is not ChildVisit.CONTINUE:
            raise TypeError(f"visitor returned {action!r}, expected a ChildVisit")
    return False


class CommentKind(enum.IntEnum):
    NULL = 0
    TEXT = 1
    INLINE_COMMAND = 2
    HTML_START_TAG = 3
    HTML_END_TAG = 4
    PARAGRAPH = 5
    BLOCK_COMMAND = 6
    PARAM_COMMAND = 7
    TPARAM_COMMAND = 8
    VERBATIM_BLOCK_COMMAND = 9
    VERBATIM_BLOCK_LINE = 10
    VERBATIM_LINE = 11
    FULL_COMMENT = 12


class InlineCommandRenderKind(enum.IntEnum):
    NORMAL = 0
    BOLD = 1
    MONOSPACED = 2
    EMPHASIZED = 3
    ANCHOR = 4


class CXComment(Structure):
    _fields_ = [("ast_node", c_void_p), ("translation_unit", c_void_p)]


_COMMENT_FUNCTIONS = [
    ("clang_Cursor_getParsedComment", [Cursor], CXComment, None),
    ("clang_Comment_getKind", [CXComment], c_int, None),
    ("clang_Comment_getNumChildren", [CXComment], c_uint, None),
    ("clang_Comment_getChild", [CXComment, c_uint], CXComment, None),
    ("clang_TextComment_getText", [CXComment], clang.cindex._CXString, clang.cindex._CXString.from_result),
    ("clang_InlineCommandComment_getRenderKind", [CXComment], c_int, None),
    ("clang_InlineCommandComment_getNumArgs", [CXComment], c_uint, None),
    ("clang_InlineCommandComment_getArgText", [CXComment, c_uint], clang.cindex._CXString, clang.cindex._CXString.from_result),
]

_registered = False


def _comment_lib():
    # clang.cindex does not expose the comment API; bind it on first use.
    global _registered
    lib = clang.cindex.conf.lib
    if not _registered:
        for name, argtypes, restype, errcheck in _COMMENT_FUNCTIONS:
            func = getattr(lib, name)
            func.argtypes = argtypes
            func.restype = restype
            if errcheck is not None:
                func.errcheck = errcheck
        _registered = True
    return lib


class Comment:
    """A node of a parsed documentation comment.

    The wrapper keeps the owning cursor alive so the translation unit behind
    the raw ``CXComment`` handle is not released while the node is in use.
    """

    def __init__(self, raw: CXComment, owner) -> None:
        self._raw = raw
        self._owner = owner

    @property
    def kind(self) -> CommentKind:
        value = _comment_lib().clang_Comment_getKind(self._raw)
        try:
            return CommentKind(value)
        except ValueError:
            raise ShapeError(f"unknown comment kind {value}", kind="COMMENT") from None

    def get_children(self):
        lib = _comment_lib()
        for index in range(lib.clang_Comment_getNumChildren(self._raw)):
            yield Comment(lib.clang_Comment_getChild(self._raw, index), self._owner)

    @property
    def text(self) -> str:
        return _comment_lib().clang_TextComment_getText(self._raw)

    @property
    def render_kind(self) -> Optional[InlineCommandRenderKind]:
        value = _comment_lib().clang_InlineCommandComment_getRenderKind(self._raw)
        try:
            return InlineCommandRenderKind(value)
        except ValueError:
            return None

    @property
    def arguments(self) -> list[str]:
        lib = _comment_lib()
        count = lib.clang_InlineCommandComment_getNumArgs(self._raw)
        return [lib.clang_InlineCommandComment_getArgText(self._raw, index) for index in range(count)]

    def __repr__(self) -> str:
        return f"Comment(kind={self.kind.name})"


def _cursor_parsed_comment(self) -> Comment:
    return Comment(_comment_lib().clang_Cursor_getParsedComment(self), self)


if not hasattr(Cursor, "parsed_comment"):
    Cursor.parsed_comment = property(_cursor_parsed_comment)


_library_file: Optional[str] = None


def configure_library(library_file: Optional[str]) -> None:
    global _library_file
    if not library_file or library_file == _library_file:
        return
    if Config.loaded:
        raise ParseError("libclang is already loaded; --libclang must be set before parsing.")
    if os.path.isdir(library_file):
        Config.set_library_path(library_file)
    else:
        Config.set_library_file(library_file)
    _library_file = library_file


def _severity_name(severity: int) -> str:
    return {
        Diagnostic.Ignored: "ignored",
        Diagnostic.Note: "note",
        Diagnostic.Warning: "warning",
        Diagnostic.Error: "error",
        Diagnostic.Fatal: "fatal",
    }.get(severity, str(severity))


def _format_diagnostic(diagnostic) -> str:
    location = diagnostic.location
    where = ""
    if location is not None and location.file is not None:
        where = f"{location.file.name}:{location.line}:{location.column}: "
    return f"{where}{_severity_name(diagnostic.severity)}: {diagnostic.spelling}"


def check_diagnostics(tu, log=None) -> None:
    errors: list[str] = []
    for diagnostic in tu.diagnostics:
        if diagnostic.severity >= Diagnostic.Error:
            errors.append(_format_diagnostic(diagnostic))
        elif log is not None and diagnostic.severity >= Diagnostic.Warning:
            log(_format_diagnostic(diagnostic))
    if errors:
        raise ParseError("libclang reported errors:\n  " + "\n  ".join(errors))


def parse_header(
    path: str,
    include_paths: Optional[list[str]] = None,
    extra_args: Optional[list[str]] = None,
    library_file: Optional[str] = None,
    log=None,
):
    if not os.path.isfile(path):
        raise ParseError(f"Header '{path}' does not exist.")
    configure_library(library_file)
    args = list(DEFAULT_CLANG_ARGS)
    for include_dir in include_paths or []:
        args.append(f"-I{include_dir}")
    args.extend(extra_args or [])
    try:
        index = Index.create()
        tu = index.parse(path, args=args, options=PARSE_OPTIONS)
    except TranslationUnitLoadError as exc:
        raise ParseError(f"Failed to parse '{path}': {exc}") from exc
    check_diagnostics(tu, log=log)
    return tu


def in_file(cursor, path: str) -> bool:
    location = getattr(cursor, "location", None)
    if location is None or location.file is None:
        return False
    try:
        return os.path.samefile(location.file.name, path)
    except OSError:
        return os.path.abspath(location.file.name) == os.path.abspath(path)


def make_channel_log(channel: str, verbose: Optional[set[str]]):
    if not verbose or (channel not in verbose and "all" not in verbose):
        return None

    def _log(msg: str, *, _channel: str = channel) -> None:
        print(f"[ffistructs:{_channel}] {msg}", file=sys.stderr)

    return _log
