"""Warble exception hierarchy.

Shared across the detector, translator, reconciler, and caches so every
module raises and catches the same types.
"""


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class ConfigurationError(WarbleError):
    """Raised when locale or settings configuration is invalid.

    Typically raised while building a ``LocaleSet`` at startup.
    """


class MalformedPathError(WarbleError, ValueError):
    """A route path that cannot be segment-translated.

    Raised by ``RouteTreeTranslator.translate_route`` when the path holds
    more than one ``?`` query block.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"There should be only one query parameter block in {path!r}")


class LocalizationStateError(WarbleError, RuntimeError):
    """A tree operation was attempted in the wrong translator state.

    ``initialize()`` runs once; everything else needs it to have finished.
    """


class UnsupportedLocaleError(WarbleError, ValueError):
    """A locale switch was requested for a locale outside the ``LocaleSet``."""

    def __init__(self, locale: str, supported: tuple[str, ...]) -> None:
        self.locale = locale
        self.supported = supported
        allowed = ", ".join(supported) or "(none)"
        super().__init__(f"Locale {locale!r} is not supported. Supported locales: {allowed}")


class StorageError(WarbleError):
    """A persistent locale store could not be read or written.

    Caches recover from this silently: a failed read is a miss, a failed
    write is a no-op.
    """
