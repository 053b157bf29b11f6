"""``warble routes``: print a route tree translated to one locale.

Loads a JSON route list and per-locale JSON dictionaries, runs the same
initialization an application would, and prints the resulting tree as an
indented PATH / REDIRECT table.
"""

import argparse
import json
import sys
from functools import partial
from pathlib import Path
from typing import Any

import anyio

from warble.config import LocaleSet, LocalizeSettings
from warble.detection import LocaleDetector
from warble.dictionaries import MappingDictionaryProvider
from warble.errors import WarbleError
from warble.routing.node import RouteNode
from warble.translator import RouteTreeTranslator


def _load_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Error: cannot read {path}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _parse_dictionaries(specs: list[str]) -> dict[str, Any]:
    dictionaries: dict[str, Any] = {}
    for spec in specs:
        locale, sep, path = spec.partition("=")
        if not sep or not locale or not path:
            print(f"Error: --dictionary expects LOCALE=FILE, got {spec!r}", file=sys.stderr)
            raise SystemExit(1)
        dictionaries[locale] = _load_json(path)
    return dictionaries


def _rows(routes: list[RouteNode], depth: int = 0) -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    for node in routes:
        path = node.path or '""'
        rows.append(("  " * depth + path, node.redirect_to or ""))
        rows.extend(_rows(node.children, depth + 1))
        rows.extend(_rows(node.loaded_routes or [], depth + 1))
    return rows


async def _translate(
    tree: list[RouteNode],
    locales: LocaleSet,
    settings: LocalizeSettings,
    dictionaries: dict[str, Any],
    locale: str | None,
) -> list[RouteNode]:
    # Detection from the path is how a request would pick the locale
    detector = LocaleDetector(settings, location=lambda: f"/{locale or ''}")
    translator = RouteTreeTranslator(
        locales,
        MappingDictionaryProvider(dictionaries),
        settings=settings,
        detector=detector,
    )
    return await translator.initialize(tree)


def run_routes(args: argparse.Namespace) -> None:
    """Translate the route tree in ``args.tree`` and print it."""
    raw = _load_json(args.tree)
    if not isinstance(raw, list):
        print(f"Error: {args.tree} must hold a JSON list of routes", file=sys.stderr)
        raise SystemExit(1)

    try:
        locales = LocaleSet(
            tuple(code.strip() for code in args.locales.split(",") if code.strip()),
            default=args.default,
        )
    except WarbleError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.locale is not None and args.locale not in locales:
        print(f"Error: locale {args.locale!r} is not one of {locales.locales}", file=sys.stderr)
        raise SystemExit(1)

    settings = LocalizeSettings(always_set_prefix=not args.no_prefix, use_cached_locale=False)
    tree = [RouteNode.from_dict(entry) for entry in raw]
    dictionaries = _parse_dictionaries(args.dictionary)

    routes = anyio.run(
        partial(_translate, tree, locales, settings, dictionaries, args.locale)
    )

    rows = _rows(routes)
    if not rows:
        print("No routes.")
        return

    max_path = max(max(len(r[0]) for r in rows), 4)  # "PATH" header
    fmt = f"{{:<{max_path}}}  {{}}"
    print(fmt.format("PATH", "REDIRECT"))
    print("-" * min(max_path + 2 + max(len(r[1]) for r in rows), 80))
    for path, redirect in rows:
        print(fmt.format(path, redirect).rstrip())
