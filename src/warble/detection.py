"""Locale detection for the first load.

Decides which supported locale should be active, in priority order:

1. The cached locale (when ``use_cached_locale`` is on)
2. A locale embedded in the current path (``/fr/about``)
3. The browser's preferred language, truncated at the region (``fr-CA`` -> ``fr``)

Each stage only yields locales that are actually supported; anything else
falls through to the next stage. Detection never writes the cache; the
owner calls ``remember()`` once a locale is confirmed.
"""

import logging
from collections.abc import Callable, Sequence

from warble.cache import cache_for
from warble.config import LocalizeSettings
from warble.errors import StorageError
from warble.sources import PersistentLocaleCache

logger = logging.getLogger("warble.detection")


def parse_accept_language(header: str) -> list[str]:
    """Parse an ``Accept-Language`` header into tags, best first.

    Entries keep their header order among equal qualities. ``*`` and
    entries with ``q=0`` are dropped.

    Examples::

        "fr-CA,fr;q=0.9,en;q=0.8" -> ["fr-CA", "fr", "en"]
        "en;q=0.5, de"            -> ["de", "en"]
    """
    ranked: list[tuple[float, int, str]] = []
    for index, item in enumerate(header.split(",")):
        tag, _, params = item.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in params.split(";"):
            key, _, value = param.strip().partition("=")
            if key.strip() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            ranked.append((-quality, index, tag))
    return [tag for _, _, tag in sorted(ranked)]


def normalize_language(tag: str) -> str:
    """Truncate a language tag at its first region separator."""
    return tag.split("-", 1)[0]


class LocaleDetector:
    """Picks the active locale from cache, URL, and browser preference.

    *location* returns the current path; *browser_languages* returns the
    visitor's preferred language tags, best first. Both are optional so the
    detector works outside a request. Without *cache* the store is picked
    by ``settings.cache_mechanism``.
    """

    __slots__ = ("_browser_languages", "_cache", "_location", "locales", "settings")

    def __init__(
        self,
        settings: LocalizeSettings | None = None,
        *,
        cache: PersistentLocaleCache | None = None,
        location: Callable[[], str] | None = None,
        browser_languages: Callable[[], Sequence[str]] | None = None,
    ) -> None:
        self.settings = settings or LocalizeSettings()
        self._cache = cache if cache is not None else cache_for(self.settings)
        self._location = location
        self._browser_languages = browser_languages
        self.locales: tuple[str, ...] = ()

    def detect(self, locales: Sequence[str]) -> str | None:
        """Return the best supported locale, or None if no stage matched."""
        self.locales = tuple(locales)

        cached = self.cached_locale()
        if cached is not None:
            logger.debug("Detected cached locale %r", cached)
            return cached

        from_path = self.get_location_lang()
        if from_path is not None:
            logger.debug("Detected locale %r from path", from_path)
            return from_path

        from_browser = self.browser_locale()
        if from_browser is not None:
            logger.debug("Detected browser locale %r", from_browser)
        return from_browser

    def cached_locale(self) -> str | None:
        """The cached locale, if caching is enabled and the value is supported."""
        if not self.settings.use_cached_locale:
            return None
        try:
            value = self._cache.get()
        except (OSError, StorageError) as exc:
            logger.debug("Locale cache unavailable: %s", exc)
            return None
        return self._in_locales(value)

    def get_location_lang(self, url: str | None = None) -> str | None:
        """Return the supported locale at the start of *url*, or None.

        Without *url* the current location is used. Fragment and query are
        ignored. ``/fr/about`` and ``fr/about`` both yield ``"fr"``.
        """
        if url is None:
            url = self._location() if self._location is not None else ""
        path = (url or "").split("#", 1)[0].split("?", 1)[0]
        slices = path.split("/")
        if len(slices) > 1 and slices[1] in self.locales:
            return slices[1]
        if slices and slices[0] in self.locales:
            return slices[0]
        return None

    def browser_locale(self) -> str | None:
        """The visitor's first preferred language, if it is supported."""
        if self._browser_languages is None:
            return None
        preferred = list(self._browser_languages())
        if not preferred:
            return None
        return self._in_locales(normalize_language(preferred[0]))

    def remember(self, locale: str) -> None:
        """Write *locale* to the persistent cache. Storage failures are ignored."""
        try:
            self._cache.set(locale)
        except (OSError, StorageError) as exc:
            logger.debug("Could not remember locale %r: %s", locale, exc)

    def _in_locales(self, value: str | None) -> str | None:
        if value and value in self.locales:
            return value
        return None
