"""Command-line interface for uselex."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from report.generate import find_unused_exports
from report.write import write_jsonl_report, write_text_report
from rules.config import load_config
from scan.files import find_object_files
from utils import UselexError

PROG = "uselex"
VERSION = "0.0.1"

USAGE = f"""
 == SYNOPSIS ({PROG}-{VERSION})

      {PROG} - look for USEless EXports in object files

 == USAGE

    {PROG} [ -w whitelist_file ] [ -m mask_file ] [ -x exported_symbol ]
           [ --nm PATH ] [ --config PATH ] [ --format text|jsonl ]
           [ -v ] [ -d ] [ -V ] [ -h ] file1.o|dir ...

 == USAGE EXAMPLE

    $ {PROG} /tmp/z/bzip2-1.0.6/
    BZ2_bzwrite: [R]: exported from: /tmp/z/bzip2-1.0.6/bzlib.o
    blockSize100k: [R]: exported from: /tmp/z/bzip2-1.0.6/bzip2.o
    exitValue: [R]: exported from: /tmp/z/bzip2-1.0.6/bzip2.o

    BZ2_* are false positives: they are the library interface. A mask file
    containing '^BZ2_' suppresses them. Masks are unanchored regular
    expressions: 'BZ2_' alone would also match 'notBZ2_x'.

 == THEORY OF OPERATION

    External symbols are extracted with 'nm -C -g' from every object file
    (directories are scanned for '*.o'). Every defined symbol that no file,
    whitelist, mask or explicit export uses is reported.

    For a library it's usually OK to have exported, but not used symbols,
    but for a binary it usually means lack of a 'module-local' specifier
    ('static' keyword in C).
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("paths", nargs="*", help="Object files or directories")
    parser.add_argument("-h", "--help", action="store_true", dest="print_usage")
    parser.add_argument("-V", "--version", action="store_true", dest="show_version")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("-d", "--debug", action="store_true")
    parser.add_argument(
        "-w",
        "--whitelist",
        action="append",
        default=[],
        dest="whitelist_files",
        help="File with symbol names to treat as used",
    )
    parser.add_argument(
        "-m",
        "--mask",
        action="append",
        default=[],
        dest="mask_files",
        help="File with regular expressions of symbols to treat as used",
    )
    parser.add_argument(
        "-x",
        "--exported",
        action="append",
        default=[],
        dest="exported_symbols",
        help="Symbol to treat as exported library interface",
    )
    parser.add_argument("--nm", default=None, help="Symbol dumper (default: nm)")
    parser.add_argument(
        "--config",
        default=None,
        help="Config file (default: ./uselex.toml when present)",
    )
    parser.add_argument("--format", choices=("text", "jsonl"), default="text")
    return parser


def _usage() -> int:
    sys.stdout.write(USAGE)
    return 1


def _expand_paths(
    paths: list[str],
    include_patterns: list[str],
    exclude_patterns: list[str],
) -> list[str]:
    expanded: list[str] = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            found = [
                str(object_file)
                for object_file in find_object_files(
                    path,
                    include_patterns=include_patterns,
                    exclude_patterns=exclude_patterns,
                )
            ]
            if not found:
                sys.stderr.write(
                    f"[uselex] warning: no object files found in {entry}\n"
                )
            expanded.extend(found)
        else:
            expanded.append(entry)
    return expanded


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.show_version:
        sys.stdout.write(f"{PROG}-{VERSION}\n")
        return 0

    if args.print_usage or not args.paths:
        return _usage()

    try:
        config_path = None if args.config is None else Path(args.config)
        config = load_config(Path.cwd(), config_path)
        update: dict[str, object] = {
            "whitelist": [*config.whitelist, *args.whitelist_files],
            "masks": [*config.masks, *args.mask_files],
            "exported": [*config.exported, *args.exported_symbols],
        }
        if args.nm is not None:
            update["nm"] = args.nm
        config = config.model_copy(update=update)

        paths = _expand_paths(args.paths, config.include, config.exclude)
        records = find_unused_exports(
            paths,
            config=config,
            verbose=args.verbose,
            debug=args.debug,
        )
    except UselexError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if args.format == "jsonl":
        write_jsonl_report(sys.stdout.buffer, records)
        sys.stdout.flush()
    else:
        write_text_report(sys.stdout, records)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
