"""Prowl CLI — prowl routes / prowl validate.

Entry point for the ``prowl`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys

from prowl._errors import ProwlError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the prowl CLI."""
    parser = argparse.ArgumentParser(
        prog="prowl",
        description="Expand parameterized routes from a content API.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # prowl routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Expand all route templates and write the route list",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    routes_parser.add_argument("--output", default=None, help="Route list output file")
    routes_parser.add_argument(
        "--timeout", type=float, default=None, help="HTTP timeout in seconds",
    )
    routes_parser.add_argument(
        "--max-concurrency",
        type=int,
        default=None,
        help="Cap on in-flight fetches per route (default: unbounded)",
    )

    # prowl validate
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check route configuration without fetching",
    )
    validate_parser.add_argument("root", nargs="?", default=".", help="Project root directory")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from prowl import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """CLI flags that were given explicitly (None means "use the config file")."""
    names = ("output", "timeout", "max_concurrency")
    return {
        name: getattr(args, name)
        for name in names
        if getattr(args, name, None) is not None
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from prowl.app import generate, validate
    from prowl.banner import log_error

    try:
        if args.command == "routes":
            generate(root=args.root, **_overrides(args))
        elif args.command == "validate":
            validate(root=args.root)
    except ProwlError as exc:
        log_error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
