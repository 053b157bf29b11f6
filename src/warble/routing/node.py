"""RouteNode: one entry in a localizable route tree.

Nodes are deliberately mutable. The tree handed to the host router is the
same set of objects the translator rewrites, so a locale switch changes
what the router matches without rebuilding anything. All writes go
through ``set_path`` / ``set_redirect``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

WILDCARD = "**"

type LocalizedProperty = Literal["path", "redirect_to"]


@dataclass(slots=True, eq=False)
class RouteNode:
    """A route definition.

    ``localization_originals`` holds the canonical (untranslated) value of
    each property the first time it is translated. It is written once per
    property and read on every later translation.
    """

    path: str = ""
    redirect_to: str | None = None
    children: list[RouteNode] = field(default_factory=list)
    outlet: str | None = None
    path_match: Literal["prefix", "full"] = "prefix"
    skip_localization: bool = False
    data: dict[str, Any] = field(default_factory=dict)
    load_children: str | None = None
    loaded_routes: list[RouteNode] | None = None
    localization_originals: dict[str, str] = field(default_factory=dict)

    @property
    def is_wildcard(self) -> bool:
        return self.path == WILDCARD

    def set_path(self, value: str) -> None:
        self.path = value

    def set_redirect(self, value: str | None) -> None:
        self.redirect_to = value

    def original(self, prop: LocalizedProperty) -> str | None:
        """Canonical value of *prop*, frozen on first translation."""
        frozen = self.localization_originals.get(prop)
        if frozen is not None:
            return frozen
        return getattr(self, prop)

    def freeze_original(self, prop: LocalizedProperty) -> str:
        """Record the current value of *prop* as canonical, once.

        Returns the frozen value.
        """
        if prop not in self.localization_originals:
            self.localization_originals[prop] = getattr(self, prop) or ""
        return self.localization_originals[prop]

    def walk(self) -> list[RouteNode]:
        """This node and every descendant, depth first (lazy subtrees included)."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        for child in self.loaded_routes or ():
            nodes.extend(child.walk())
        return nodes

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RouteNode:
        """Build a node (and its children) from a plain mapping.

        Accepts snake_case keys and the camelCase spellings used by
        front-end route tables (``redirectTo``, ``pathMatch``,
        ``skipLocalization``, ``loadChildren``).
        """

        def pick(*names: str, default: Any = None) -> Any:
            for name in names:
                if name in raw:
                    return raw[name]
            return default

        data = dict(pick("data", default={}) or {})
        skip = pick("skip_localization", "skipLocalization", default=None)
        if skip is None:
            skip = bool(data.get("skipRouteLocalization", False))

        return cls(
            path=pick("path", default="") or "",
            redirect_to=pick("redirect_to", "redirectTo"),
            children=[cls.from_dict(child) for child in pick("children", default=()) or ()],
            outlet=pick("outlet"),
            path_match=pick("path_match", "pathMatch", default="prefix"),
            skip_localization=bool(skip),
            data=data,
            load_children=pick("load_children", "loadChildren"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-mapping view of the node as currently translated."""
        out: dict[str, Any] = {"path": self.path}
        if self.redirect_to is not None:
            out["redirect_to"] = self.redirect_to
        if self.path_match != "prefix":
            out["path_match"] = self.path_match
        if self.outlet:
            out["outlet"] = self.outlet
        if self.skip_localization:
            out["skip_localization"] = True
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        if self.loaded_routes:
            out["loaded_routes"] = [child.to_dict() for child in self.loaded_routes]
        return out
