"""Tests for warble.detection — locale detection order and URL parsing."""

import pytest

from warble.cache import KeyValueLocaleCache
from warble.config import LocalizeSettings
from warble.detection import LocaleDetector, normalize_language, parse_accept_language
from warble.errors import StorageError

LOCALES = ("en", "fr")


class _FailingCache:
    def get(self) -> str | None:
        raise StorageError("storage disabled")

    def set(self, value: str) -> None:
        raise OSError("read-only")


def _detector(
    *,
    cached: str | None = None,
    path: str = "",
    browser: tuple[str, ...] = (),
    use_cache: bool = True,
) -> LocaleDetector:
    store = {"lang": cached} if cached is not None else {}
    return LocaleDetector(
        LocalizeSettings(use_cached_locale=use_cache, cache_key="lang"),
        cache=KeyValueLocaleCache(store, "lang"),
        location=lambda: path,
        browser_languages=lambda: browser,
    )


class TestDetectOrder:
    def test_cache_beats_url(self) -> None:
        detector = _detector(cached="fr", path="/en/about", browser=("en-US",))
        assert detector.detect(LOCALES) == "fr"

    def test_cache_ignored_when_disabled(self) -> None:
        detector = _detector(cached="fr", path="/en/about", use_cache=False)
        assert detector.detect(LOCALES) == "en"

    def test_unsupported_cache_falls_through(self) -> None:
        detector = _detector(cached="de", path="/fr/about")
        assert detector.detect(LOCALES) == "fr"

    def test_url_beats_browser(self) -> None:
        detector = _detector(path="/fr/a-propos", browser=("en-GB",))
        assert detector.detect(LOCALES) == "fr"

    def test_browser_is_normalized(self) -> None:
        detector = _detector(path="/about", browser=("fr-CA", "en"))
        assert detector.detect(LOCALES) == "fr"

    def test_only_first_browser_language_counts(self) -> None:
        detector = _detector(browser=("de-DE", "fr"))
        assert detector.detect(LOCALES) is None

    def test_nothing_matches(self) -> None:
        assert _detector().detect(LOCALES) is None

    def test_no_providers(self) -> None:
        assert LocaleDetector().detect(LOCALES) is None

    def test_storage_failure_is_cache_miss(self) -> None:
        detector = LocaleDetector(cache=_FailingCache(), location=lambda: "/fr")
        assert detector.detect(LOCALES) == "fr"


class TestGetLocationLang:
    @pytest.fixture
    def detector(self) -> LocaleDetector:
        detector = LocaleDetector()
        detector.locales = LOCALES
        return detector

    def test_absolute_path(self, detector: LocaleDetector) -> None:
        assert detector.get_location_lang("/fr/about") == "fr"

    def test_unknown_segment(self, detector: LocaleDetector) -> None:
        assert detector.get_location_lang("/xx/about") is None

    def test_relative_path(self, detector: LocaleDetector) -> None:
        assert detector.get_location_lang("fr/about") == "fr"

    def test_query_and_fragment_ignored(self, detector: LocaleDetector) -> None:
        assert detector.get_location_lang("/fr?x=1#top") == "fr"
        assert detector.get_location_lang("/about?lang=fr") is None

    def test_root(self, detector: LocaleDetector) -> None:
        assert detector.get_location_lang("/") is None

    def test_empty(self, detector: LocaleDetector) -> None:
        assert detector.get_location_lang("") is None

    def test_defaults_to_location(self) -> None:
        detector = LocaleDetector(location=lambda: "/en/home")
        detector.locales = LOCALES
        assert detector.get_location_lang() == "en"


class TestRemember:
    def test_writes_cache(self) -> None:
        store: dict[str, str] = {}
        detector = LocaleDetector(cache=KeyValueLocaleCache(store, "lang"))

        detector.remember("fr")

        assert store == {"lang": "fr"}

    def test_write_failure_ignored(self) -> None:
        LocaleDetector(cache=_FailingCache()).remember("fr")

    def test_detect_does_not_write(self) -> None:
        store: dict[str, str] = {}
        detector = LocaleDetector(
            cache=KeyValueLocaleCache(store, "lang"), location=lambda: "/fr"
        )

        detector.detect(LOCALES)

        assert store == {}


class TestAcceptLanguage:
    def test_quality_order(self) -> None:
        assert parse_accept_language("fr-CA,fr;q=0.9,en;q=0.8") == ["fr-CA", "fr", "en"]

    def test_reorders_by_quality(self) -> None:
        assert parse_accept_language("en;q=0.5, de") == ["de", "en"]

    def test_drops_wildcard_and_zero(self) -> None:
        assert parse_accept_language("*, fr;q=0, en") == ["en"]

    def test_bad_quality(self) -> None:
        assert parse_accept_language("fr;q=high, en") == ["en"]

    def test_empty(self) -> None:
        assert parse_accept_language("") == []

    def test_feeds_detector(self) -> None:
        header = "fr-FR,fr;q=0.9"
        detector = LocaleDetector(browser_languages=lambda: parse_accept_language(header))
        assert detector.detect(LOCALES) == "fr"


class TestNormalizeLanguage:
    def test_region(self) -> None:
        assert normalize_language("en-US") == "en"

    def test_plain(self) -> None:
        assert normalize_language("fr") == "fr"
