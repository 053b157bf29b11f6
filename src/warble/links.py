"""Localized link rendering.

Turns canonical paths (``"products/42"``) into links for the active
locale (``"/fr/produits/42"``). Results are memoized per locale and the
memo is dropped on every locale notification, so templates can call
``localize`` freely.
"""

from collections.abc import Sequence

from warble.events import LocaleEventBus
from warble.translator import RouteTreeTranslator


class LocalizedLinks:
    """Memoizing path localizer bound to a translator.

    Usage::

        links = LocalizedLinks(translator, reconciler.bus)
        links.localize("products/42")        # "/fr/produits/42"
        links.localize(["products", "42"])   # ["/fr", "produits", "42"]
    """

    __slots__ = ("_memo", "_translator", "_unsubscribe")

    def __init__(self, translator: RouteTreeTranslator, bus: LocaleEventBus) -> None:
        self._translator = translator
        self._memo: dict[tuple[str, str], str] = {}
        self._unsubscribe = bus.listen(self._on_locale_changed)

    def localize(self, path: str | Sequence[object]) -> str | list[object]:
        """Localize a path string, or a list of command pieces.

        Empty input and calls before any locale is active return *path*
        unchanged.
        """
        locale = self._translator.current_locale
        if not path or locale is None:
            return path if isinstance(path, str) else list(path)

        if not isinstance(path, str):
            prefix = self._translator.url_prefix
            pieces = [
                self._translator.translate_route(piece) if isinstance(piece, str) else piece
                for piece in path
            ]
            return [f"/{prefix}" if prefix else "/", *pieces]

        key = (path, locale)
        value = self._memo.get(key)
        if value is None:
            translated = self._translator.translate_route(path)
            parts = [p.strip("/") for p in (self._translator.url_prefix, translated)]
            value = "/" + "/".join(p for p in parts if p)
            self._memo[key] = value
        return value

    def _on_locale_changed(self, locale: str) -> None:
        self._memo.clear()

    def close(self) -> None:
        """Stop listening for locale changes."""
        self._unsubscribe()
