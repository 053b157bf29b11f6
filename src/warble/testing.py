"""Test doubles for warble's external collaborators.

``MemoryRouter`` stands in for the host routing engine and records every
navigation; ``StaticDictionaryProvider`` serves dictionaries from memory
and can hold a locale's fetch open to exercise overlapping switches::

    provider = StaticDictionaryProvider({"fr": {"routes.products": "produits"}})
    router = MemoryRouter()
    reconciler = NavigationReconciler(RouteTreeTranslator(locales, provider), router)
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import anyio

from warble.dictionaries import MappingDictionaryProvider
from warble.routing.node import RouteNode
from warble.routing.snapshot import RouteSnapshot
from warble.sources import Command


def commands_to_url(
    commands: Sequence[Command],
    query_params: Mapping[str, str] | None = None,
    fragment: str | None = None,
) -> str:
    """Render navigation commands as an absolute URL.

    Strings are path pieces, ``{"outlets": {...}}`` renders secondary
    outlets as ``(name:path)``, and any other mapping becomes matrix
    parameters on the preceding segment.
    """
    parts: list[str] = []
    outlets: list[str] = []
    for command in commands:
        if isinstance(command, str):
            parts.extend(p for p in command.split("/") if p)
        elif "outlets" in command:
            outlets.extend(f"{name}:{value}" for name, value in command["outlets"].items())
        elif parts:
            parts[-1] += "".join(f";{k}={v}" for k, v in command.items())

    url = "/" + "/".join(parts)
    if outlets:
        url += "(" + "//".join(outlets) + ")"
    if query_params:
        url += "?" + urlencode(query_params)
    if fragment:
        url += "#" + fragment
    return url


@dataclass(frozen=True, slots=True)
class Navigation:
    """One recorded ``navigate()`` call."""

    commands: tuple[Command, ...]
    query_params: Mapping[str, str] = field(default_factory=dict)
    fragment: str | None = None

    @property
    def url(self) -> str:
        return commands_to_url(self.commands, self.query_params, self.fragment)


class MemoryRouter:
    """In-memory host router.

    Tests set ``snapshot`` to describe where the visitor currently is.
    """

    def __init__(self, snapshot: RouteSnapshot | None = None) -> None:
        self.config: list[RouteNode] = []
        self.snapshot = snapshot or RouteSnapshot()
        self.navigations: list[Navigation] = []
        self.reset_count = 0

    def reset_config(self, routes: list[RouteNode]) -> None:
        self.config = routes
        self.reset_count += 1

    async def navigate(
        self,
        commands: Sequence[Command],
        *,
        query_params: Mapping[str, str] | None = None,
        fragment: str | None = None,
    ) -> Navigation:
        navigation = Navigation(tuple(commands), dict(query_params or {}), fragment)
        self.navigations.append(navigation)
        await anyio.sleep(0)
        return navigation

    @property
    def last_url(self) -> str | None:
        return self.navigations[-1].url if self.navigations else None


class StaticDictionaryProvider(MappingDictionaryProvider):
    """Dictionary provider that records requests and can delay them."""

    __slots__ = ("_gates", "requests")

    def __init__(self, dictionaries: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        super().__init__(dictionaries)
        self.requests: list[str] = []
        self._gates: dict[str, anyio.Event] = {}

    def hold(self, locale: str) -> None:
        """Make fetches for *locale* wait until ``release(locale)``."""
        self._gates[locale] = anyio.Event()

    def release(self, locale: str) -> None:
        gate = self._gates.pop(locale, None)
        if gate is not None:
            gate.set()

    async def get_dictionary(self, locale: str) -> Mapping[str, str]:  # type: ignore[override]
        self.requests.append(locale)
        gate = self._gates.get(locale)
        if gate is not None:
            await gate.wait()
        await anyio.sleep(0)
        return self.dictionaries.get(locale, {})
