"""Locale-changed notifications.

The reconciler publishes the resolved locale after every navigation
boundary crossing and every explicit switch. Consumers (link helpers,
templates, dashboards) either iterate ``subscribe()`` or register a
synchronous ``listen()`` callback.

Free-threading safety:
    - LocaleEventBus uses a Lock to protect the subscriber sets
    - Each async subscriber gets its own asyncio.Queue
    - Late subscribers see only locales published after they joined
"""

import asyncio
import logging
import threading
from collections.abc import AsyncIterator, Callable

logger = logging.getLogger("warble.events")


class LocaleEventBus:
    """Broadcast channel for locale codes.

    Usage::

        async for locale in bus.subscribe():
            rerender(locale)

        unsubscribe = bus.listen(lambda locale: cache.clear())
    """

    __slots__ = ("_listeners", "_lock", "_subscribers")

    def __init__(self) -> None:
        self._subscribers: set[asyncio.Queue[str | None]] = set()
        self._listeners: list[Callable[[str], object]] = []
        self._lock = threading.Lock()

    def publish(self, locale: str) -> None:
        """Deliver *locale* to every active subscriber and listener."""
        with self._lock:
            subscribers = set(self._subscribers)
            listeners = list(self._listeners)
        for queue in subscribers:
            queue.put_nowait(locale)
        for listener in listeners:
            listener(locale)
        logger.debug(
            "Published locale %r to %d subscriber(s)", locale, len(subscribers) + len(listeners)
        )

    def listen(self, callback: Callable[[str], object]) -> Callable[[], None]:
        """Register a synchronous callback. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    async def subscribe(self) -> AsyncIterator[str]:
        """Subscribe to locale changes.

        Returns an async iterator that yields locales as they are published.
        The subscription is cleaned up when the iterator exits.
        """
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        with self._lock:
            self._subscribers.add(queue)
        try:
            while True:
                locale = await queue.get()
                if locale is None:
                    break
                yield locale
        finally:
            with self._lock:
                self._subscribers.discard(queue)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers) + len(self._listeners)

    def close(self) -> None:
        """Signal all async subscribers to stop and drop all listeners."""
        with self._lock:
            for queue in self._subscribers:
                queue.put_nowait(None)
            self._subscribers.clear()
            self._listeners.clear()
