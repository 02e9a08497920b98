#!/usr/bin/env python3
"""Report reachable files and unused exports of a JS/TS project.

Usage:
    tsreach --root path/to/project --entry src/index.ts [--entry ...]

Without --entry, conventional entry files (src/index.ts, index.ts,
src/main.ts, ...) are probed under the root.

Notes:
- Purely a report: the exit code is 0 whatever the findings, unless
  --fail-on-findings is given (then 1 when any export is unused).
- Only relative imports are followed; package imports leave the graph.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from tsreach.analyzer import load_project
from tsreach.config import LOG_LEVEL
from tsreach.errors import TsreachError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tsreach", description=__doc__.splitlines()[0])
    parser.add_argument("-r", "--root", default=".", help="Project root to scan (default: current directory).")
    parser.add_argument(
        "-e",
        "--entry",
        action="append",
        default=[],
        help="Entrypoint file, relative to the root or prefixed with it. Repeatable.",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    parser.add_argument(
        "--fail-on-findings",
        action="store_true",
        help="Exit with status 1 when at least one export is unused.",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level for diagnostics on stderr.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    root = Path(args.root)
    try:
        analyzer, entrypoints = load_project(root, args.entry)
    except TsreachError as e:
        sys.stderr.write(str(e) + "\n")
        return 2

    files = analyzer.files.paths()
    result = analyzer.analyze(entrypoints)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        reachable = set(result.reachable_files)
        unreachable = sorted(files - reachable)

        print("Entrypoints:")
        for ep in entrypoints:
            print(f"  - {ep}")
        print()

        print(f"Reachable files ({len(result.reachable_files)}):")
        for f in result.reachable_files:
            print(f"  - {f}")
        print()

        print(f"Unreachable files ({len(unreachable)}):")
        for f in unreachable:
            print(f"  - {f}")
        print()

        print(f"Unused exports ({len(result.unused_exports)}):")
        for u in result.unused_exports:
            print(f"  - {u.file} -> {u.name}")

    if args.fail_on_findings and result.unused_exports:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
