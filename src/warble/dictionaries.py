"""In-process dictionary provider.

Most applications already have a translation catalogue; anything with
``get_dictionary`` / ``set_default_locale`` / ``set_active_locale`` works.
``MappingDictionaryProvider`` covers the simple case of dictionaries that
are already loaded (from JSON files, a settings module, a database row).
"""

from collections.abc import Mapping
from typing import Any


def flatten(tree: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested translation mappings into dotted keys.

    Example::

        {"routes": {"about": "a-propos"}} -> {"routes.about": "a-propos"}
    """
    flat: dict[str, str] = {}
    for key, value in tree.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten(value, f"{dotted}."))
        else:
            flat[dotted] = str(value)
    return flat


class MappingDictionaryProvider:
    """Serve per-locale dictionaries from memory.

    Nested mappings are flattened on construction. Unknown locales resolve
    to an empty dictionary, so every segment stays untranslated.
    """

    __slots__ = ("active_locale", "default_locale", "dictionaries")

    def __init__(self, dictionaries: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self.dictionaries: dict[str, dict[str, str]] = {
            locale: flatten(entries) for locale, entries in (dictionaries or {}).items()
        }
        self.default_locale: str | None = None
        self.active_locale: str | None = None

    def get_dictionary(self, locale: str) -> Mapping[str, str]:
        return self.dictionaries.get(locale, {})

    def set_default_locale(self, locale: str) -> None:
        self.default_locale = locale

    def set_active_locale(self, locale: str) -> None:
        self.active_locale = locale
