"""Protocols for the collaborators warble talks to but does not own.

- **RouteSource**: produces the canonical route tree at startup
- **DictionaryProvider**: resolves a locale to its translation mapping
- **HostRouter**: owns the active route configuration and navigation
- **PersistentLocaleCache**: remembers the chosen locale

Any object with the right shape satisfies a protocol; nothing here needs
to be subclassed. ``warble.testing`` ships in-memory implementations.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from warble.routing.node import RouteNode
from warble.routing.snapshot import RouteSnapshot

# -- Type aliases --

# A value that will resolve to T (already resolved or awaitable)
type Pending[T] = T | Awaitable[T]

# The canonical tree, supplied once
type RouteSource = Callable[[], Pending[list[RouteNode]]]

# "routes.about" -> "a-propos"
type TranslationDictionary = Mapping[str, str]

# A navigation command: a path piece, matrix params, or {"outlets": {...}}
type Command = str | Mapping[str, Any]


# -- Protocols --


@runtime_checkable
class DictionaryProvider(Protocol):
    """Resolves one locale at a time to its translation dictionary."""

    def get_dictionary(self, locale: str) -> Pending[TranslationDictionary]: ...

    def set_default_locale(self, locale: str) -> None: ...

    def set_active_locale(self, locale: str) -> None: ...


@runtime_checkable
class HostRouter(Protocol):
    """The routing engine whose configuration warble localizes."""

    @property
    def config(self) -> list[RouteNode]: ...

    @property
    def snapshot(self) -> RouteSnapshot: ...

    def reset_config(self, routes: list[RouteNode]) -> None: ...

    def navigate(
        self,
        commands: Sequence[Command],
        *,
        query_params: Mapping[str, str] | None = None,
        fragment: str | None = None,
    ) -> Pending[Any]: ...


@runtime_checkable
class PersistentLocaleCache(Protocol):
    """Remembers a locale between visits. May be backed by nothing."""

    def get(self) -> str | None: ...

    def set(self, value: str) -> None: ...
