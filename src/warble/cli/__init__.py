"""Warble CLI: inspect localized route trees.

Entry point registered as ``warble`` in ``pyproject.toml``::

    [project.scripts]
    warble = "warble.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warble`` command."""
    parser = argparse.ArgumentParser(
        prog="warble",
        description="Warble: localized route trees.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- warble routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Print a route tree translated to a locale")
    routes_parser.add_argument("tree", help="JSON file holding the route list")
    routes_parser.add_argument(
        "--locales",
        required=True,
        help="Comma-separated supported locales (e.g. en,fr,de)",
    )
    routes_parser.add_argument("--default", default="", help="Default locale (first by default)")
    routes_parser.add_argument("--locale", default=None, help="Locale to translate to")
    routes_parser.add_argument(
        "--dictionary",
        action="append",
        default=[],
        metavar="LOCALE=FILE",
        help="JSON translation file for a locale (repeatable)",
    )
    routes_parser.add_argument(
        "--no-prefix",
        action="store_true",
        help="Leave the default locale unprefixed",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from warble.cli._routes import run_routes

        run_routes(args)
