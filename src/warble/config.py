"""Localization configuration.

``LocaleSet`` and ``LocalizeSettings`` are frozen dataclasses: immutable
after creation, IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from warble.errors import ConfigurationError

DEFAULT_CACHE_KEY = "LOCALIZE_DEFAULT_LANGUAGE"
COOKIE_MAX_AGE = 30 * 86400  # 1 month


class CacheMechanism(StrEnum):
    """Where the chosen locale is remembered between visits."""

    NONE = "none"
    KEY_VALUE = "key-value"
    COOKIE = "cookie"


@dataclass(frozen=True, slots=True)
class LocaleSet:
    """Supported locale codes plus the designated default.

    The default falls back to the first code::

        locales = LocaleSet(("en", "fr", "de"))
        locales.default  # "en"
    """

    locales: tuple[str, ...] = ()
    default: str = ""

    def __post_init__(self) -> None:
        # Accept any iterable of codes (lists are common in app code)
        locales = tuple(self.locales)
        object.__setattr__(self, "locales", locales)

        if len(set(locales)) != len(locales):
            msg = f"Duplicate locale codes in {locales!r}"
            raise ConfigurationError(msg)

        if not self.default:
            object.__setattr__(self, "default", locales[0] if locales else "")
        elif self.default not in locales:
            msg = f"Default locale {self.default!r} is not one of {locales!r}"
            raise ConfigurationError(msg)

    def __contains__(self, locale: object) -> bool:
        return locale in self.locales

    def __iter__(self) -> Iterator[str]:
        return iter(self.locales)

    def __len__(self) -> int:
        return len(self.locales)

    def __bool__(self) -> bool:
        return bool(self.locales)


@dataclass(frozen=True, slots=True)
class LocalizeSettings:
    """Localization behaviour. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        settings = LocalizeSettings(always_set_prefix=False, cache_mechanism="cookie")
    """

    # Prefix the default locale too ("/en/about" instead of "/about")
    always_set_prefix: bool = True

    # Persistent cache
    use_cached_locale: bool = True
    cache_mechanism: CacheMechanism = CacheMechanism.KEY_VALUE
    cache_key: str = DEFAULT_CACHE_KEY
    cookie_max_age: int = COOKIE_MAX_AGE

    # Dictionary namespace for path segments ("routes.about")
    key_prefix: str = "routes."

    def __post_init__(self) -> None:
        object.__setattr__(self, "cache_mechanism", CacheMechanism(self.cache_mechanism))
