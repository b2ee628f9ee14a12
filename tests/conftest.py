"""Pytest configuration and shared fixtures."""
import pytest

import langtabs.config as config_module
from langtabs import LanguageTabsConfig, set_global_config


class TranslatableArticle:
    """Test record using the json driver for every attribute."""
    translatable = ['title', 'body', 'blocks']

    def __init__(self, translations=None, locales=None):
        self._translations = translations or {}
        self._locales = locales

    def is_translatable_attribute(self, name):
        return name in self.translatable

    def get_translations(self, name):
        return self._translations.get(name)

    def get_translatable_locales(self):
        return self._locales


class HybridArticle(TranslatableArticle):
    """Test record storing the base locale inline and the rest under 'extra'."""
    translatable = {
        'title': {'driver': 'hybrid'},
        'summary': {'driver': 'extra_only', 'storage': 'meta'},
        'body': None,
    }

    def base_locale(self):
        return 'en'


@pytest.fixture(autouse=True)
def reset_global_config():
    """Reset the global config before each test."""
    original = getattr(config_module._global_config_context, 'value', None)

    set_global_config(LanguageTabsConfig(
        default_locales=['en', 'fr'],
        required_locales=['en'],
    ))

    yield

    if original is None:
        config_module.clear_global_config()
    else:
        set_global_config(original)


@pytest.fixture
def article():
    """Provide a record with persisted English titles."""
    return TranslatableArticle(translations={'title': {'en': 'Hello'}})


@pytest.fixture
def hybrid_article():
    """Provide a record with hybrid/extra-only attributes."""
    return HybridArticle()
