"""Route tree translation.

The translator owns the canonical route tree. ``initialize()`` restructures
it once (locale-prefix injection, wildcard extraction, exclusion of
routes that opt out); afterwards every locale switch only rewrites
``path`` and ``redirect_to`` values in place, always starting from the
canonical values frozen on first translation.

Resulting shape with ``always_set_prefix`` and two locales::

    ""    -> redirect_to "fr"        (synthetic, full match)
    "fr"                             (language root)
      "produits"
      "produits/:id"
    "admin"                          (skip_localization, untouched)
    "**"  -> redirect_to "/fr/accueil"

Free-threading safety:
    Tree writes happen under a single Lock. A generation counter makes
    sure a dictionary fetch that resolves late never overwrites the tree
    with an older locale.
"""

import inspect
import logging
import threading
from enum import StrEnum

from warble.config import LocaleSet, LocalizeSettings
from warble.detection import LocaleDetector
from warble.errors import ConfigurationError, LocalizationStateError, MalformedPathError
from warble.routing.node import LocalizedProperty, RouteNode
from warble.sources import DictionaryProvider, RouteSource, TranslationDictionary

logger = logging.getLogger("warble.translator")


class TranslatorState(StrEnum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class RouteTreeTranslator:
    """Builds and re-translates the locale-prefixed route tree.

    Usage::

        translator = RouteTreeTranslator(LocaleSet(("en", "fr")), provider)
        routes = await translator.initialize(raw_routes)
        router.reset_config(routes)

        await translator.translate_for_locale("fr")

    A *detector* passed in is switched over to the translator's *settings*;
    its cache stays whatever it was built with.
    """

    __slots__ = (
        "_applied_generation",
        "_base_redirect",
        "_generation",
        "_language_root",
        "_lock",
        "_source",
        "_state",
        "_wildcard",
        "current_locale",
        "detector",
        "dictionary",
        "locale_set",
        "provider",
        "routes",
        "settings",
    )

    def __init__(
        self,
        locales: LocaleSet,
        provider: DictionaryProvider,
        *,
        settings: LocalizeSettings | None = None,
        detector: LocaleDetector | None = None,
        source: RouteSource | None = None,
    ) -> None:
        self.locale_set = locales
        self.provider = provider
        self.settings = settings or LocalizeSettings()
        self.detector = detector or LocaleDetector(self.settings)
        self.detector.settings = self.settings
        self.detector.locales = locales.locales
        self.routes: list[RouteNode] = []
        self.current_locale: str | None = None
        self.dictionary: TranslationDictionary | None = None
        self._source = source
        self._state = TranslatorState.UNINITIALIZED
        self._language_root: RouteNode | None = None
        self._wildcard: RouteNode | None = None
        self._base_redirect: RouteNode | None = None
        self._generation = 0
        self._applied_generation = 0
        self._lock = threading.Lock()

    # -- Introspection --

    @property
    def state(self) -> TranslatorState:
        return self._state

    @property
    def locales(self) -> tuple[str, ...]:
        return self.locale_set.locales

    @property
    def default_locale(self) -> str:
        return self.locale_set.default

    @property
    def language_root(self) -> RouteNode | None:
        """The synthetic node parenting every prefixed route, if any."""
        return self._language_root

    @property
    def wildcard_route(self) -> RouteNode | None:
        """The catch-all route kept outside the locale prefix, if extracted."""
        return self._wildcard

    @property
    def url_prefix(self) -> str:
        """Path prefix for the current locale (``""`` for an unprefixed default)."""
        if self.current_locale is None:
            return ""
        return self._prefix_for(self.current_locale)

    # -- Lifecycle --

    async def initialize(self, raw_tree: list[RouteNode] | None = None) -> list[RouteNode]:
        """Restructure and translate the route tree. Runs exactly once.

        The tree is restructured in place: the list passed in (or produced
        by the route source) is the list returned. The initial translation
        has finished by the time this returns.

        If loading or the first translation fails, the error propagates and
        the translator goes back to ``UNINITIALIZED``. A list passed in may
        already be restructured by then; retry with a fresh tree.
        """
        if self._state is not TranslatorState.UNINITIALIZED:
            msg = f"initialize() may only run once (translator is {self._state})"
            raise LocalizationStateError(msg)
        self._state = TranslatorState.INITIALIZING
        try:
            return await self._initialize(raw_tree)
        except BaseException:
            self._reset()
            raise

    def _reset(self) -> None:
        with self._lock:
            self._state = TranslatorState.UNINITIALIZED
            self.routes = []
            self.current_locale = None
            self.dictionary = None
            self._language_root = None
            self._wildcard = None
            self._base_redirect = None

    async def _initialize(self, raw_tree: list[RouteNode] | None) -> list[RouteNode]:
        routes = raw_tree if raw_tree is not None else await self._load_source()
        self.routes = routes
        logger.debug("Initializing %d route(s) for locales %r", len(routes), self.locales)

        if not self.locale_set:
            self._state = TranslatorState.READY
            return routes

        selected = self.detector.detect(self.locales) or self.default_locale
        logger.debug("Selected locale %r", selected)
        self.provider.set_default_locale(selected)
        self.provider.set_active_locale(selected)

        self._restructure(routes)
        await self._translate(selected)

        self._state = TranslatorState.READY
        return routes

    def _restructure(self, routes: list[RouteNode]) -> None:
        always_prefix = self.settings.always_set_prefix

        if always_prefix:
            wildcard_index = next((i for i, r in enumerate(routes) if r.is_wildcard), None)
            if wildcard_index is not None:
                self._wildcard = routes.pop(wildcard_index)
            self._base_redirect = RouteNode(
                path="", redirect_to=self.default_locale, path_match="full"
            )
            children = routes[:]
            routes[:] = [self._base_redirect]
        else:
            children = routes[:]
            routes.clear()

        # Opted-out routes stay at the top level, outside any locale prefix
        routes.extend(r for r in children if r.skip_localization)
        children = [r for r in children if not r.skip_localization]

        if children:
            if len(self.locale_set) > 1 or always_prefix:
                self._language_root = RouteNode(children=children)
                position = 1 if self._base_redirect is not None else 0
                routes.insert(position, self._language_root)
            else:
                routes[0:0] = children

        if self._wildcard is not None and always_prefix:
            routes.append(self._wildcard)

    async def _load_source(self) -> list[RouteNode]:
        if self._source is None:
            msg = "No route tree given and no route source configured."
            raise ConfigurationError(msg)
        result = self._source()
        if inspect.isawaitable(result):
            result = await result
        return result if isinstance(result, list) else list(result)

    def _require_ready(self) -> None:
        if self._state is not TranslatorState.READY:
            msg = f"Route tree is not ready (translator is {self._state}); await initialize() first."
            raise LocalizationStateError(msg)

    # -- Translation --

    async def translate_for_locale(self, locale: str) -> bool:
        """Re-translate the tree for *locale*.

        Returns False when a newer translation was applied while this one
        waited for its dictionary; the tree is then left alone.
        """
        self._require_ready()
        return await self._translate(locale)

    async def _translate(self, locale: str) -> bool:
        with self._lock:
            self._generation += 1
            generation = self._generation

        logger.debug("Fetching dictionary for %r (generation %d)", locale, generation)
        result = self.provider.get_dictionary(locale)
        dictionary = await result if inspect.isawaitable(result) else result

        with self._lock:
            if generation < self._applied_generation:
                logger.debug(
                    "Dropping stale translation for %r (generation %d < %d)",
                    locale,
                    generation,
                    self._applied_generation,
                )
                return False
            self._applied_generation = generation
            self.dictionary = dictionary
            self.current_locale = locale

            if self._language_root is not None:
                self._language_root.set_path(self._prefix_for(locale))
            if self._base_redirect is not None:
                self._base_redirect.set_redirect(locale)

            targets = self._language_root.children if self._language_root else self.routes
            self._localize_tree(targets)

            if self._wildcard is not None and self._wildcard.original("redirect_to"):
                self._translate_property(self._wildcard, "redirect_to", prefixed=True)

        logger.debug("Route tree translated to %r", locale)
        return True

    def localize_routes(self, routes: list[RouteNode]) -> list[RouteNode]:
        """Translate a subtree for the current locale and return it.

        Used for route fragments that arrive after ``initialize()``, such
        as lazily loaded children.
        """
        self._require_ready()
        with self._lock:
            self._localize_tree(routes)
        return routes

    def _localize_tree(self, routes: list[RouteNode]) -> None:
        for node in routes:
            if (
                node.skip_localization
                or node is self._base_redirect
                or node is self._wildcard
            ):
                continue

            path = node.original("path")
            if path and not node.is_wildcard:
                self._translate_property(node, "path")

            redirect = node.original("redirect_to")
            if redirect:
                self._translate_property(node, "redirect_to", prefixed=redirect.startswith("/"))

            if node.children:
                self._localize_tree(node.children)
            if node.loaded_routes:
                self._localize_tree(node.loaded_routes)

    def _translate_property(
        self, node: RouteNode, prop: LocalizedProperty, *, prefixed: bool = False
    ) -> None:
        original = node.freeze_original(prop)
        result = self.translate_route(original)
        if prefixed:
            result = self._absolute(result)
        if prop == "path":
            node.set_path(result)
        else:
            node.set_redirect(result)

    def _absolute(self, path: str) -> str:
        parts = [p for p in (self.url_prefix, path.lstrip("/")) if p]
        return "/" + "/".join(parts)

    def _prefix_for(self, locale: str) -> str:
        if self.settings.always_set_prefix or locale != self.default_locale:
            return locale
        return ""

    def translate_route(self, path: str) -> str:
        """Translate every segment of *path* with the current dictionary.

        Empty segments (leading, trailing, or doubled slashes) and the
        query string pass through untouched.

        Raises ``MalformedPathError`` if *path* has more than one ``?``.
        """
        query_parts = path.split("?")
        if len(query_parts) > 2:
            raise MalformedPathError(path)
        translated = "/".join(
            self.translate_segment(part) if part else part for part in query_parts[0].split("/")
        )
        if len(query_parts) > 1:
            translated += f"?{query_parts[1]}"
        return translated

    def translate_segment(self, key: str) -> str:
        """Translate a single path segment, or return it unchanged.

        Missing, empty, and echoed-back keys (``"routes.about"``) all count
        as untranslated.
        """
        if self.dictionary is None:
            return key
        lookup = f"{self.settings.key_prefix}{key}"
        value = self.dictionary.get(lookup)
        if not value or value == lookup:
            return key
        return value

    # -- External locale changes --

    def mutate_root_on_external_locale_change(
        self,
        new_locale: str,
        previous_locale: str,
        routes: list[RouteNode] | None = None,
    ) -> None:
        """Re-point the root prefix after the host navigated across locales.

        Best effort: nodes that cannot be found are left alone, and the
        rest of the tree is not re-translated.
        """
        self._require_ready()
        routes = self.routes if routes is None else routes
        previous_prefix = self._prefix_for(previous_locale)
        new_prefix = self._prefix_for(new_locale)

        with self._lock:
            root = next((r for r in routes if r.path == previous_prefix), None)
            if root is not None:
                root.set_path(new_prefix)

            base = next(
                (r for r in routes if r.path == "" and r.redirect_to == previous_prefix), None
            )
            if base is not None:
                base.set_redirect(new_locale)

        logger.debug(
            "Root prefix moved %r -> %r (root %s)",
            previous_prefix,
            new_prefix,
            "patched" if root is not None else "not found",
        )
