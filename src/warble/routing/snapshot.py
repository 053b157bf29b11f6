"""Frozen snapshot of the active navigation state.

The host router owns the live state; it hands the reconciler a
``RouteSnapshot`` tree describing which route matched at each level and
which URL segments it consumed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from warble.routing.node import RouteNode

PRIMARY_OUTLET = "primary"

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class UrlSegment:
    """One consumed URL segment plus its matrix parameters (``;k=v``)."""

    path: str
    parameters: Mapping[str, str] = field(default=_EMPTY)


@dataclass(frozen=True, slots=True)
class RouteSnapshot:
    """One level of the active route tree.

    ``params`` are this level's matrix parameters. Query parameters and
    the fragment belong to the whole URL; the host may set them on any
    level and the reconciler reads the deepest primary one.
    """

    route_config: RouteNode | None = None
    url: tuple[UrlSegment, ...] = ()
    params: Mapping[str, str] = field(default=_EMPTY)
    outlet: str = PRIMARY_OUTLET
    children: tuple[RouteSnapshot, ...] = ()
    query_params: Mapping[str, str] = field(default=_EMPTY)
    fragment: str | None = None

    @property
    def first_child(self) -> RouteSnapshot | None:
        """The primary-outlet child, if any."""
        for child in self.children:
            if child.outlet == PRIMARY_OUTLET:
                return child
        return None

    @property
    def leaf(self) -> RouteSnapshot:
        """Deepest snapshot along the primary outlet chain."""
        node = self
        while (child := node.first_child) is not None:
            node = child
        return node
