"""Tests for warble.dictionaries."""

from warble.dictionaries import MappingDictionaryProvider, flatten
from warble.sources import DictionaryProvider


class TestFlatten:
    def test_nested(self) -> None:
        tree = {"routes": {"about": "a-propos", "shop": {"cart": "panier"}}, "title": "Accueil"}
        assert flatten(tree) == {
            "routes.about": "a-propos",
            "routes.shop.cart": "panier",
            "title": "Accueil",
        }

    def test_already_flat(self) -> None:
        assert flatten({"routes.about": "a-propos"}) == {"routes.about": "a-propos"}


class TestMappingDictionaryProvider:
    def test_get_dictionary(self) -> None:
        provider = MappingDictionaryProvider({"fr": {"routes": {"about": "a-propos"}}})

        assert provider.get_dictionary("fr") == {"routes.about": "a-propos"}
        assert provider.get_dictionary("de") == {}

    def test_tracks_locales(self) -> None:
        provider = MappingDictionaryProvider()
        provider.set_default_locale("en")
        provider.set_active_locale("fr")

        assert provider.default_locale == "en"
        assert provider.active_locale == "fr"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MappingDictionaryProvider(), DictionaryProvider)
