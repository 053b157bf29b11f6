"""Persistent locale caches.

A cache remembers the locale a visitor settled on so the next visit can
start there. Every implementation honours the same two-method contract
(``get`` / ``set``) and recovers from storage failures silently: an
unreadable store is a miss, an unwritable store is a no-op.
"""

import logging
from collections.abc import MutableMapping

from warble.config import CacheMechanism, LocalizeSettings
from warble.cookies import SetCookie, parse_cookies
from warble.errors import StorageError

logger = logging.getLogger("warble.cache")


class NullLocaleCache:
    """A cache that never remembers anything."""

    __slots__ = ()

    def get(self) -> str | None:
        return None

    def set(self, value: str) -> None:
        return None


class KeyValueLocaleCache:
    """Cache backed by any ``MutableMapping``.

    Works with a plain dict, a session mapping, or a ``shelve`` file::

        cache = KeyValueLocaleCache(request.session, key="locale")
    """

    __slots__ = ("_key", "_store")

    def __init__(self, store: MutableMapping[str, str], key: str) -> None:
        self._store = store
        self._key = key

    def get(self) -> str | None:
        try:
            value = self._store.get(self._key)
        except (OSError, StorageError) as exc:
            logger.debug("Locale store read failed for %r: %s", self._key, exc)
            return None
        return value or None

    def set(self, value: str) -> None:
        if not value:
            return
        try:
            self._store[self._key] = value
        except (OSError, StorageError) as exc:
            logger.debug("Locale store write failed for %r: %s", self._key, exc)


class CookieLocaleCache:
    """Cache backed by the request ``Cookie`` header.

    Reads come from the incoming header. Writes queue a ``SetCookie`` in
    ``pending`` for the caller to attach to its response, and are visible
    to later reads through the same cache.
    """

    __slots__ = ("_cookies", "_key", "_max_age", "pending")

    def __init__(self, header: str, key: str, max_age: int | None = None) -> None:
        self._cookies = parse_cookies(header)
        self._key = key
        self._max_age = max_age
        self.pending: list[SetCookie] = []

    def get(self) -> str | None:
        return self._cookies.get(self._key) or None

    def set(self, value: str) -> None:
        if not value:
            return
        self._cookies[self._key] = value
        self.pending.append(SetCookie(name=self._key, value=value, max_age=self._max_age))


type LocaleCache = NullLocaleCache | KeyValueLocaleCache | CookieLocaleCache


def cache_for(
    settings: LocalizeSettings,
    *,
    store: MutableMapping[str, str] | None = None,
    cookie_header: str = "",
) -> LocaleCache:
    """Build the cache selected by ``settings.cache_mechanism``.

    A key-value mechanism without a *store* gets a private dict, which
    only remembers for the lifetime of the process.
    """
    match settings.cache_mechanism:
        case CacheMechanism.KEY_VALUE:
            return KeyValueLocaleCache({} if store is None else store, settings.cache_key)
        case CacheMechanism.COOKIE:
            return CookieLocaleCache(cookie_header, settings.cache_key, settings.cookie_max_age)
        case _:
            return NullLocaleCache()
