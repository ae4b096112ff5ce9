"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from enumslices.internals.version import print_banner


def _default_int_size() -> int:
    raw = os.environ.get("ENUMSLICES_INT_SIZE")
    if not raw:
        return 64
    try:
        size = int(raw)
    except ValueError:
        size = 0
    if size not in (32, 64):
        print(f"error: ENUMSLICES_INT_SIZE must be 32 or 64, got '{raw}'", file=sys.stderr)
        raise SystemExit(2)
    return size


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="enumslices",
        description="Generate key/name slices for the constants of Go integer types",
        allow_abbrev=False,
    )

    ap.add_argument("paths", nargs="*", metavar="PATH",
                    help="Package directory (default: .) or list of .go files in one directory")
    ap.add_argument("-type", "--type", dest="types", action="append", default=[], metavar="NAMES",
                    help="Comma-separated list of type names; must be set")
    ap.add_argument("-output", "--output", metavar="FILE",
                    help="Output file name; default <dir>/<type>_enumslices.go, '-' for stdout")
    ap.add_argument("-trimprefix", "--trimprefix", default="", metavar="PREFIX",
                    help="Trim PREFIX from the generated constant names")
    ap.add_argument("-linecomment", "--linecomment", action="store_true",
                    help="Use line comment text as printed text when present")
    ap.add_argument("--int-size", type=int, choices=(32, 64), default=None,
                    help="Bit width of int, uint and uintptr (default: $ENUMSLICES_INT_SIZE or 64)")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("--dump-parse", action="store_true", help="Print raw Lark tree")
    ap.add_argument("--dump-ast", action="store_true", help="Print AST")
    return ap


def main(argv: list[str] | None = None) -> int:
    """Generator entry point."""
    if argv is None:
        argv = sys.argv[1:]

    ap = build_arg_parser()
    args = ap.parse_args(argv)

    if args.version:
        print_banner()
        return 0

    type_names = [t.strip() for chunk in args.types for t in chunk.split(",") if t.strip()]
    if not type_names:
        ap.print_usage(sys.stderr)
        print("error: -type is required", file=sys.stderr)
        return 2

    from enumslices.backend.emitter import render_file
    from enumslices.compiler.loader import get_effective_cwd, load_package
    from enumslices.compiler.pipeline import GenerateOptions, generate_package
    from enumslices.internals.report import Reporter

    options = GenerateOptions(
        type_names=type_names,
        trim_prefix=args.trimprefix,
        line_comment=args.linecomment,
        word_size=args.int_size or _default_int_size(),
    )

    reporter = Reporter(filename="enumslices")
    package = load_package(args.paths, reporter, dump_parse=args.dump_parse, dump_ast_flag=args.dump_ast)
    if package is None:
        reporter.print()
        return 2

    fragments, result = generate_package(package, options, reporter)
    reporter.print()

    if not fragments:
        return 2

    text = render_file(package.name, argv, fragments)

    if args.output == "-":
        sys.stdout.write(text)
        return result

    if args.output:
        out_path = Path(args.output)
        if not out_path.is_absolute():
            out_path = get_effective_cwd() / out_path
    else:
        out_path = package.directory / f"{type_names[0].lower()}_enumslices.go"

    try:
        out_path.write_text(text, encoding="utf-8")
    except OSError as e:
        print(f"error: writing output: {e}", file=sys.stderr)
        return 2

    return result


if __name__ == "__main__":
    raise SystemExit(main())
