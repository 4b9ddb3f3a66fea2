"""CLI interface: ccrtl [--revert | --check | --ensure]."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from . import __version__
from .discovery import ENV_EXT_DIR, discover_installs
from .patching import ensure, patch, status, unpatch


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccrtl",
        description="RTL text support patch for the Claude Code extension",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--ext-dir", metavar="DIR", default=None,
        help=f"Explicit extension directory (overrides auto-discovery and ${ENV_EXT_DIR})",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print errors")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--revert", action="store_true", help="Revert the patch")
    mode.add_argument("--check", action="store_true", help="Check if the patch is applied")
    mode.add_argument(
        "--ensure", action="store_true",
        help="Patch only installs that are not patched yet",
    )
    parser.add_argument(
        "--json", dest="json_output", action="store_true",
        help="Output --check results as JSON (only with --check)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.json_output and not args.check:
        parser.error("--json requires --check")

    installs = discover_installs(explicit_dir=args.ext_dir)
    if not installs:
        print("Error: Claude Code extension not found. Make sure it is installed.", file=sys.stderr)
        print(f"You can set {ENV_EXT_DIR} to specify the path manually.", file=sys.stderr)
        sys.exit(1)

    if args.check:
        report = status(installs=installs)
        if args.json_output:
            print(json.dumps(report.to_dict(), indent=2))
        elif not args.quiet:
            print(report.summary())
        if not report.ok:
            sys.exit(1)
        return

    if args.revert:
        report = unpatch(installs=installs)
    elif args.ensure:
        report = ensure(installs=installs)
    else:
        report = patch(installs=installs)

    if args.quiet:
        for path, msg in report.errors:
            print(f"{path}: {msg}", file=sys.stderr)
    else:
        print(report.summary())
    if not report.ok:
        sys.exit(1)
