"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from typedesc.internals.version import print_banner


def print_manifest_info(manifest_path: Path) -> int:
    """Print the contents of a descriptor manifest.

    Returns:
        0 on success, 2 on error.
    """
    from typedesc.backend.manifest_format import read_manifest
    from typedesc.internals.exceptions import ManifestError

    if not manifest_path.exists():
        print(f"Error: file not found: {manifest_path}", file=sys.stderr)
        return 2

    try:
        metadata = read_manifest(manifest_path)
    except (ManifestError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Module: {metadata.get('module', '?')}")
    print(f"Source: {metadata.get('source', '?')}")
    print(f"Generator: {metadata.get('compiler_version', '?')}")
    print(f"Generated: {metadata.get('generated_at', '?')}")
    print()

    types = metadata["types"]
    print(f"Types ({len(types)}):")
    for entry in types:
        inherits = f": {', '.join(entry['inherits'])}" if entry.get("inherits") else ""
        print(f"  {entry['kind']} {entry['name']}{inherits}")
        for fd in entry.get("fields", []):
            binding = "let" if fd.get("constant") else "var"
            static = "static " if fd.get("static") else ""
            print(f"    {static}{binding} {fd['name']}: {fd['type']}")
        for case in entry.get("cases", []):
            values = ", ".join(
                f"{v['label']}: {v['type']}" if v["label"] is not None else v["type"]
                for v in case.get("values", [])
            )
            print(f"    case {case['name']}({values})" if values else f"    case {case['name']}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main generator entry point."""
    ap = argparse.ArgumentParser(
        prog="typedesc",
        description="Generate summary/detail string methods for declared types",
    )

    ap.add_argument("source", nargs='?', help="Path to declaration file (.decl)")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("-q", "--quiet", action="store_true", help="Do not print the banner")
    ap.add_argument("--dump-parse", action="store_true", help="Print raw Lark tree")
    ap.add_argument("--dump-ast", action="store_true", help="Print AST")
    ap.add_argument("-o", "--out", metavar="OUT",
                    help="Output module path (default: source filename with .py)")
    ap.add_argument("--describe", action="store_true",
                    help="Print summary and sample detail strings instead of generating code")
    ap.add_argument("--attribute", metavar="NAME",
                    help="Attribute marking describable declarations (default: Foobar)")
    ap.add_argument("--no-manifest", action="store_true",
                    help="Do not write the <stem>.descriptors.json manifest")
    ap.add_argument("--config", metavar="PATH",
                    help="Configuration file (default: typedesc.toml in the working directory)")
    ap.add_argument("--manifest-info", metavar="FILE",
                    help="Display the contents of a descriptor manifest")
    ap.add_argument(
        "--traceback",
        action="store_true",
        help="Print full traceback on internal errors (for debugging)",
    )
    args = ap.parse_args(argv)

    if not args.quiet:
        print_banner()

    if args.version:
        return 0

    if args.manifest_info:
        return print_manifest_info(Path(args.manifest_info))

    if not args.source:
        print("error: source file required (unless using --manifest-info)", file=sys.stderr)
        return 2

    from typedesc.compiler.config import load_config
    from typedesc.compiler.loader import get_effective_cwd, load_program, resolve_source
    from typedesc.compiler.pipeline import GenerateOptions, compile_file
    from typedesc.frontend.ast_printer import dump_ast
    from typedesc.internals.exceptions import ConfigError
    from typedesc.internals.report import Reporter

    effective_cwd = get_effective_cwd()

    try:
        config_path = Path(args.config) if args.config else None
        if config_path is not None and not config_path.is_absolute():
            config_path = effective_cwd / config_path
        config = load_config(effective_cwd, path=config_path)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if args.attribute:
        config.attribute = args.attribute

    src_path = resolve_source(args.source)
    try:
        src = src_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"error: cannot read {src_path}: {e}", file=sys.stderr)
        return 2

    reporter = Reporter(source=src, filename=str(src_path))

    try:
        ast = load_program(src, reporter, dump_parse=args.dump_parse)
        if ast is None:
            return 2

        if args.dump_ast:
            print(dump_ast(ast))
            print()

        options = GenerateOptions(
            out=Path(args.out) if args.out else None,
            describe=args.describe,
            manifest=not args.no_manifest,
        )
        result = compile_file(ast, src_path, reporter, options, config, effective_cwd)
    except RuntimeError as exc:
        if args.traceback:
            raise
        print(f"internal error: {exc}", file=sys.stderr)
        return 2

    reporter.print()
    return result


if __name__ == "__main__":
    raise SystemExit(main())
