"""Localization hook for lazily loaded route subtrees.

Wraps whatever resolves a node's ``load_children`` so the resolved routes
are translated before the host router sees them. The subtree is attached
to ``node.loaded_routes``, which the translator walks on every later
locale switch.
"""

import inspect
import logging
from collections.abc import Callable

from warble.routing.node import RouteNode
from warble.sources import Pending
from warble.translator import RouteTreeTranslator

logger = logging.getLogger("warble.loader")

type ChildrenLoader = Callable[[RouteNode], Pending[list[RouteNode]]]


class LocalizingLoader:
    """Resolve lazy subtrees and localize them for the current locale.

    Usage::

        loader = LocalizingLoader(translator, load_feature_routes)
        routes = await loader.load(node)
    """

    __slots__ = ("_inner", "_translator")

    def __init__(self, translator: RouteTreeTranslator, inner: ChildrenLoader) -> None:
        self._translator = translator
        self._inner = inner

    async def load(self, node: RouteNode) -> list[RouteNode]:
        """Return *node*'s subtree, resolving and localizing it on first use."""
        if node.loaded_routes is not None:
            return node.loaded_routes

        result = self._inner(node)
        if inspect.isawaitable(result):
            result = await result
        routes = list(result)

        self._translator.localize_routes(routes)
        node.loaded_routes = routes
        logger.debug(
            "Loaded %d route(s) for %r and localized them to %r",
            len(routes),
            node.load_children or node.path,
            self._translator.current_locale,
        )
        return routes
