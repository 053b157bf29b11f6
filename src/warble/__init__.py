"""Warble: localized route trees.

Translates a tree of route definitions into any supported locale, keeps
the canonical paths for re-translation, detects the visitor's locale on
first load, and replays the current position when the locale changes.

Basic usage::

    from warble import LocaleSet, NavigationReconciler, RouteNode, RouteTreeTranslator

    routes = [
        RouteNode(path="products"),
        RouteNode(path="products/:id"),
        RouteNode(path="**", redirect_to="/products"),
    ]
    translator = RouteTreeTranslator(LocaleSet(("en", "fr")), provider)
    reconciler = NavigationReconciler(translator, router)

    await reconciler.start(routes)          # /en/products, /en/products/:id
    await reconciler.switch_locale("fr")    # /fr/produits, /fr/produits/:id
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "CacheMechanism",
    "ConfigurationError",
    "LocaleDetector",
    "LocaleEventBus",
    "LocaleSet",
    "LocalizationStateError",
    "LocalizeSettings",
    "LocalizedLinks",
    "LocalizingLoader",
    "MalformedPathError",
    "MappingDictionaryProvider",
    "NavigationReconciler",
    "RouteNode",
    "RouteSnapshot",
    "RouteTreeTranslator",
    "UnsupportedLocaleError",
    "UrlSegment",
    "WarbleError",
    "cache_for",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "CacheMechanism": "warble.config",
    "ConfigurationError": "warble.errors",
    "LocaleDetector": "warble.detection",
    "LocaleEventBus": "warble.events",
    "LocaleSet": "warble.config",
    "LocalizationStateError": "warble.errors",
    "LocalizeSettings": "warble.config",
    "LocalizedLinks": "warble.links",
    "LocalizingLoader": "warble.loader",
    "MalformedPathError": "warble.errors",
    "MappingDictionaryProvider": "warble.dictionaries",
    "NavigationReconciler": "warble.reconciler",
    "RouteNode": "warble.routing.node",
    "RouteSnapshot": "warble.routing.snapshot",
    "RouteTreeTranslator": "warble.translator",
    "UnsupportedLocaleError": "warble.errors",
    "UrlSegment": "warble.routing.snapshot",
    "WarbleError": "warble.errors",
    "cache_for": "warble.cache",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_name), name)
