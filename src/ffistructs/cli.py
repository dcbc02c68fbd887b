import argparse
import sys
from pathlib import Path

from .analysis.clang_emit_types import ParseError
from .analysis.headers import emit_ts_bindings, print_declarations


def _split_csv(value: str) -> set[str]:
    return {item.strip() for item in value.split(",") if item.strip()}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Deno FFI struct and enum declarations from C headers using libclang."
    )
    parser.add_argument("headers", nargs="+", help="C header file(s) to parse, one translation unit each.")
    parser.add_argument(
        "-I",
        "--include",
        dest="include_paths",
        action="append",
        default=[],
        help="Add a directory to the include search path (repeatable).",
    )
    parser.add_argument(
        "--clang-arg",
        dest="clang_args",
        action="append",
        default=[],
        help="Extra raw argument passed to libclang (repeatable).",
    )
    parser.add_argument(
        "--libclang",
        default=None,
        help="Path to the libclang shared library (or the directory containing it).",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print a summary of collected declarations instead of generating code.",
    )
    parser.add_argument(
        "--filter",
        help="Only handle declarations whose name contains this substring (case-insensitive).",
        default=None,
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=100,
        help="Limit number of declaration names printed with --list (default: 100, use 0 to suppress).",
    )
    parser.add_argument(
        "--all-files",
        action="store_true",
        help="Also collect declarations coming from included headers.",
    )
    parser.add_argument(
        "--verbose",
        default="",
        help="Comma-separated list of diagnostic channels to log (parse, comments, members, decls, or 'all').",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write generated TypeScript to this path instead of stdout.",
    )
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    verbose = _split_csv(args.verbose)

    try:
        if args.list:
            print_declarations(
                args.headers,
                include_paths=args.include_paths,
                extra_args=args.clang_args,
                library_file=args.libclang,
                name_filter=args.filter,
                limit=args.limit,
                all_files=args.all_files,
                verbose=verbose,
            )
            return

        output, failures = emit_ts_bindings(
            args.headers,
            include_paths=args.include_paths,
            extra_args=args.clang_args,
            library_file=args.libclang,
            name_filter=args.filter,
            all_files=args.all_files,
            verbose=verbose,
        )
    except ParseError as exc:
        raise SystemExit(f"ffistructs: {exc}") from None

    if failures:
        print(f"[ffistructs:error] {len(failures)} declaration(s) skipped", file=sys.stderr)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        print(output, end="")


if __name__ == "__main__":
    main()
