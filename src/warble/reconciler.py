"""Live locale reconciliation.

Two directions:

- **Explicit switch** (``switch_locale``): retranslate the tree, then replay
  the visitor's current position in the new locale. The active snapshot
  is walked from the root and every level's segment is re-derived from its
  route's canonical path, carrying parameter values through untranslated.
- **Host-driven change** (``on_navigation_start``): the visitor edited the
  URL or followed a link into another locale. The root prefix is patched in
  place; nothing is retranslated.

Both directions publish the resolved locale on the event bus.
"""

import inspect
import logging
from collections.abc import AsyncIterator
from typing import Any

from warble.errors import UnsupportedLocaleError
from warble.events import LocaleEventBus
from warble.routing.node import RouteNode
from warble.routing.params import is_placeholder
from warble.routing.snapshot import PRIMARY_OUTLET, RouteSnapshot
from warble.sources import Command, HostRouter
from warble.translator import RouteTreeTranslator

logger = logging.getLogger("warble.reconciler")


class NavigationReconciler:
    """Keeps the host router's tree and position in step with the locale.

    Usage::

        reconciler = NavigationReconciler(translator, router)
        await reconciler.start(routes)

        await reconciler.switch_locale("fr")  # /en/products/42 -> /fr/produits/42
    """

    __slots__ = ("_previous_url", "bus", "router", "translator")

    def __init__(
        self,
        translator: RouteTreeTranslator,
        router: HostRouter,
        *,
        bus: LocaleEventBus | None = None,
    ) -> None:
        self.translator = translator
        self.router = router
        self.bus = bus or LocaleEventBus()
        self._previous_url: str | None = None

    @property
    def current_locale(self) -> str | None:
        return self.translator.current_locale

    async def start(self, raw_tree: list[RouteNode] | None = None) -> list[RouteNode]:
        """Initialize the translator and hand the finished tree to the router."""
        routes = await self.translator.initialize(raw_tree)
        self.router.reset_config(routes)
        if self.translator.current_locale is not None:
            self.translator.detector.remember(self.translator.current_locale)
        return routes

    # -- Explicit switch --

    async def switch_locale(self, locale: str) -> bool:
        """Switch to *locale* and navigate to the equivalent page.

        Returns False if *locale* is already active, or if a newer switch
        overtook this one while its dictionary was loading or while the
        router was navigating. An overtaken switch leaves the provider, the
        cache and the bus to the newer one.
        """
        translator = self.translator
        if locale == translator.current_locale:
            return False
        if locale not in translator.locale_set:
            raise UnsupportedLocaleError(locale, translator.locales)

        root_snapshot = self.router.snapshot
        if not await translator.translate_for_locale(locale):
            logger.debug("Switch to %r was superseded", locale)
            return False

        self.router.reset_config(translator.routes)

        commands = self.commands_for(root_snapshot)
        leaf = root_snapshot.leaf
        query_params = dict(leaf.query_params or root_snapshot.query_params)
        fragment = leaf.fragment or root_snapshot.fragment
        logger.debug("Navigating to %r after switch to %r", commands, locale)

        result = self.router.navigate(
            commands,
            query_params=query_params or None,
            fragment=fragment or None,
        )
        if inspect.isawaitable(result):
            await result

        if translator.current_locale != locale:
            logger.debug("Switch to %r was overtaken while navigating", locale)
            return False

        translator.provider.set_active_locale(locale)
        translator.detector.remember(locale)
        self.bus.publish(locale)
        return True

    def commands_for(self, root_snapshot: RouteSnapshot) -> list[Command]:
        """Navigation commands reaching *root_snapshot*'s position in the current locale."""
        commands = self._traverse(root_snapshot, is_root=True)
        # Redundant empty segments come from pathless levels
        return [command for i, command in enumerate(commands) if not i or command]

    def _traverse(
        self, snapshot: RouteSnapshot, *, is_root: bool = False, skipped: bool = False
    ) -> list[Command]:
        if is_root:
            first = snapshot.first_child
            if first is None:
                return [""]
            if first.first_child is not None and self._is_language_level(first):
                rest = self._traverse(first.first_child)
                prefix = self.translator.url_prefix
                return [f"/{prefix}", *rest] if prefix else rest

        config = snapshot.route_config
        skipped = skipped or (config is not None and config.skip_localization)

        commands: list[Command] = [self.segment_value(snapshot, translate=not skipped)]
        if snapshot.params:
            commands.append(dict(snapshot.params))

        outlet_children = [c for c in snapshot.children if c.outlet != PRIMARY_OUTLET]
        if outlet_children:
            outlets: dict[str, Any] = {
                c.outlet: self.segment_value(c, translate=not skipped) for c in outlet_children
            }
            commands.append({"outlets": outlets})

        primary = snapshot.first_child
        if primary is not None:
            commands.extend(self._traverse(primary, skipped=skipped))
        return commands

    def _is_language_level(self, snapshot: RouteSnapshot) -> bool:
        config = snapshot.route_config
        return config is None or config is self.translator.language_root

    def segment_value(self, snapshot: RouteSnapshot, *, translate: bool = True) -> str:
        """Re-derive the URL piece one snapshot level contributes, in the current locale.

        Parameter placeholders take their live value from the snapshot URL.
        With *translate* off (routes that opted out of localization) the
        canonical segments are kept as they are.
        """
        node = snapshot.route_config
        if node is None:
            return ""
        translator = self.translator
        if node is translator.language_root:
            return translator.url_prefix

        if node.is_wildcard:
            matched = "/".join(segment.path for segment in snapshot.url if segment.path)
            return translator.translate_route(matched)

        canonical = node.original("path")
        if not canonical:
            return ""

        pieces: list[str] = []
        for index, piece in enumerate(canonical.split("/")):
            if is_placeholder(piece):
                pieces.append(snapshot.url[index].path if index < len(snapshot.url) else piece)
            elif not translate or node.skip_localization:
                pieces.append(piece)
            else:
                pieces.append(translator.translate_route(piece))
        return "/".join(pieces)

    def translate_path(self, path: str) -> str:
        """Segment-translate *path* for display in the current locale."""
        return self.translator.translate_route(path)

    # -- Host-driven changes --

    def on_navigation_start(self, url: str) -> str | None:
        """Feed one navigation-start URL from the host router.

        URLs are paired with their predecessor; returns the resolved
        locale once a pair exists, None for the very first URL.
        """
        previous, self._previous_url = self._previous_url, url
        if previous is None:
            return None
        return self.on_navigation_boundary_crossed(previous, url)

    async def watch(self, urls: AsyncIterator[str]) -> None:
        """Consume a stream of navigation-start URLs until it ends."""
        async for url in urls:
            self.on_navigation_start(url)

    def on_navigation_boundary_crossed(self, previous_url: str, current_url: str) -> str:
        """Patch the root if the navigation changed locale; always publish.

        Navigating to the bare root ``/`` keeps the previous locale.
        """
        detector = self.translator.detector
        default = self.translator.default_locale

        previous_locale = detector.get_location_lang(previous_url) or default
        if current_url == "/":
            current_locale = previous_locale
        else:
            current_locale = detector.get_location_lang(current_url) or default

        if current_locale != previous_locale:
            logger.debug(
                "Navigation %r -> %r crossed %r -> %r",
                previous_url,
                current_url,
                previous_locale,
                current_locale,
            )
            self.translator.mutate_root_on_external_locale_change(
                current_locale, previous_locale, self.router.config
            )

        self.bus.publish(current_locale)
        return current_locale
