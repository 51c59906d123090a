"""Pawprint CLI — pawprint export static.

Entry point for the ``pawprint`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pawprint CLI."""
    parser = argparse.ArgumentParser(
        prog="pawprint",
        description="Static export with content-addressed assets.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pawprint export
    export_parser = subparsers.add_parser(
        "export",
        help="Generates static exports from modules incl. used images and assets",
    )
    actions = export_parser.add_subparsers(dest="action", help="Export actions")

    # pawprint export static
    static_parser = actions.add_parser(
        "static",
        help="Exports templates as static webpages",
    )
    static_parser.add_argument(
        "query", nargs="?", default="*", help="Query for sites to use e.g. /base",
    )
    static_parser.add_argument(
        "--destination", default=None,
        help="Define a base folder where html files are written to",
    )
    static_parser.add_argument("--root", default=".", help="Project root directory")
    static_parser.add_argument(
        "--build", default=None, help="Build configuration to apply (e.g. production)",
    )
    static_parser.add_argument(
        "--quiet", action="store_true", help="Don't print the export summary",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from pawprint import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.action is None:
        parser.parse_args([args.command, "--help"])

    from pawprint._errors import PawprintError
    from pawprint.app import export_static

    try:
        export_static(
            root=args.root,
            query=args.query,
            destination=args.destination,
            build=args.build,
            quiet=args.quiet,
        )
    except PawprintError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
