from __future__ import annotations

import sys
from typing import Optional

from .clang_emit import join_blocks, render_enum, render_struct
from .clang_emit_builder import collect_declarations, extract_enum, extract_struct
from .clang_emit_types import GenerationResult, ShapeError
from .clang_emit_utils import _cursor_label, _tag_name
from .clang_provider import in_file, make_channel_log, parse_header


def report_failure(name: str, message: str) -> None:
    print(f"[ffistructs:error] {name}: {message}", file=sys.stderr)


def _matches(name: str, name_filter: Optional[str]) -> bool:
    if not name_filter:
        return True
    return name_filter.lower() in name.lower()


def _declared_name(cursor) -> str:
    return _tag_name(cursor.type.spelling) or _cursor_label(cursor)


def generate_ts_for_header(
    root,
    header_path: Optional[str] = None,
    name_filter: Optional[str] = None,
    verbose: Optional[set[str]] = None,
    report=report_failure,
) -> GenerationResult:
    """Run collection, extraction and emission over one parsed header.

    Each struct and enum is extracted in isolation: a ``ShapeError`` is
    recorded in ``failures``, passed to ``report`` and generation moves on
    to the next declaration.
    """

    predicate = None
    if header_path is not None:
        predicate = lambda cursor: in_file(cursor, header_path)  # noqa: E731
    comment_log = make_channel_log("comments", verbose)
    member_log = make_channel_log("members", verbose)

    buckets = collect_declarations(root, predicate=predicate, log=make_channel_log("decls", verbose))
    result = GenerationResult()

    for cursor in buckets.structs:
        label = _declared_name(cursor)
        if not _matches(label, name_filter):
            continue
        try:
            decl = extract_struct(cursor, comment_log=comment_log, member_log=member_log)
        except ShapeError as exc:
            message = exc.describe(label)
            result.failures.append((label, message))
            report(label, message)
            continue
        result.blocks.append(render_struct(decl))

    for cursor in buckets.enums:
        label = _declared_name(cursor)
        if not _matches(label, name_filter):
            continue
        try:
            decl = extract_enum(cursor, comment_log=comment_log)
        except ShapeError as exc:
            message = exc.describe(label)
            result.failures.append((label, message))
            report(label, message)
            continue
        result.blocks.append(render_enum(decl))

    return result


def emit_ts_bindings(
    headers: list[str],
    include_paths: Optional[list[str]] = None,
    extra_args: Optional[list[str]] = None,
    library_file: Optional[str] = None,
    name_filter: Optional[str] = None,
    all_files: bool = False,
    verbose: Optional[set[str]] = None,
) -> tuple[str, list[tuple[str, str]]]:
    blocks: list[str] = []
    failures: list[tuple[str, str]] = []
    parse_log = make_channel_log("parse", verbose)
    for header in headers:
        tu = parse_header(
            header,
            include_paths=include_paths,
            extra_args=extra_args,
            library_file=library_file,
            log=parse_log,
        )
        result = generate_ts_for_header(
            tu.cursor,
            header_path=None if all_files else header,
            name_filter=name_filter,
            verbose=verbose,
        )
        blocks.extend(result.blocks)
        failures.extend(result.failures)
    return join_blocks(blocks), failures


def print_declarations(
    headers: list[str],
    include_paths: Optional[list[str]] = None,
    extra_args: Optional[list[str]] = None,
    library_file: Optional[str] = None,
    name_filter: Optional[str] = None,
    limit: Optional[int] = None,
    all_files: bool = False,
    verbose: Optional[set[str]] = None,
) -> None:
    if limit is None:
        limit = 100
    if limit < 0:
        raise ValueError("--limit must be >= 0")

    parse_log = make_channel_log("parse", verbose)
    for header in headers:
        tu = parse_header(
            header,
            include_paths=include_paths,
            extra_args=extra_args,
            library_file=library_file,
            log=parse_log,
        )
        predicate = None if all_files else (lambda cursor, _path=header: in_file(cursor, _path))
        buckets = collect_declarations(tu.cursor, predicate=predicate, log=make_channel_log("decls", verbose))

        sample: list[tuple[str, str]] = []
        for kind, cursors in (
            ("struct", buckets.structs),
            ("typedef", buckets.typedefs),
            ("function", buckets.functions),
            ("enum", buckets.enums),
        ):
            for cursor in cursors:
                name = cursor.spelling if kind in {"typedef", "function"} else _declared_name(cursor)
                if _matches(name, name_filter):
                    sample.append((kind, name))

        counts = buckets.counts()
        print(f"{header}: {sum(counts.values())} declarations found.")
        for kind in sorted(counts):
            print(f"{kind}: {counts[kind]}")
        if limit == 0:
            continue
        print("Sample declarations:")
        for kind, name in sample[:limit]:
            print(f"{kind} {name}")
