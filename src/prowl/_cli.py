"""Prowl CLI — prowl dev / prowl build.

Entry point for the ``prowl`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the prowl CLI."""
    parser = argparse.ArgumentParser(
        prog="prowl",
        description="Template-driven static page generator with a dev server.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # prowl dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Start the development server",
    )
    dev_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    dev_parser.add_argument("--host", default=None, help="Bind address")
    dev_parser.add_argument("--port", type=int, default=None, help="Bind port")

    # prowl build
    build_parser = subparsers.add_parser(
        "build",
        help="Generate the site as static files",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument(
        "--mode",
        dest="output_mode",
        choices=["flat", "directory"],
        default=None,
        help="Output path strategy",
    )
    build_parser.add_argument(
        "--minify", action="store_true", default=None, help="Minify generated HTML",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from prowl import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    from prowl._errors import ProwlError
    from prowl.app import build, dev

    try:
        if args.command == "dev":
            dev(root=args.root, host=args.host, port=args.port)
        elif args.command == "build":
            build(
                root=args.root,
                output=args.output,
                output_mode=args.output_mode,
                minify=args.minify,
            )
    except ProwlError as exc:
        print(f"prowl: error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
