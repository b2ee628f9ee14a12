"""
Locale resolution.

Determines which locales get a tab, which one is the base locale and how
each tab is labelled. Sources, first non-empty wins:

    record.get_translatable_locales() → record.translatable_locales
        → config.default_locales → [config.app_locale]
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from langtabs.config import LanguageTabsConfig, get_current_config
from langtabs.record import call_accessor

logger = logging.getLogger(__name__)

TAB_KEY_PREFIX = 'tab_'


def unique_locales(locales: Iterable[Any]) -> List[str]:
    """Deduplicate locales, keeping the first occurrence order.

    A bare string counts as a single locale.
    """
    if isinstance(locales, str):
        locales = [locales]
    seen = set()
    result = []
    for locale in locales:
        if locale is None or locale == '':
            continue
        locale = str(locale)
        if locale not in seen:
            seen.add(locale)
            result.append(locale)
    return result


def _record_locales(record: Any) -> List[str]:
    locales = unique_locales(call_accessor(record, 'get_translatable_locales') or [])
    if locales:
        return locales

    declared = getattr(record, 'translatable_locales', None)
    if isinstance(declared, (str, list, tuple)):
        return unique_locales(declared)
    return []


def resolve_locales(record: Any = None, config: Optional[LanguageTabsConfig] = None) -> List[str]:
    """Resolve the ordered, deduplicated locale list.

    Never raises. With no record and no configured defaults the result is a
    single-element list holding the application locale.
    """
    config = config or get_current_config()

    if record is not None:
        locales = _record_locales(record)
        if locales:
            return locales

    locales = unique_locales(config.default_locales or [])
    if locales:
        return locales

    return [config.app_locale]


def resolve_base_locale(record: Any, locales: List[str], config: Optional[LanguageTabsConfig] = None) -> str:
    """Base locale: explicit record accessor, else first resolved locale."""
    config = config or get_current_config()

    if record is not None:
        base = getattr(record, 'base_locale', None)
        if callable(base):
            base = call_accessor(record, 'base_locale')
        if base:
            return str(base)

    return locales[0] if locales else config.app_locale


def resolve_locale_label(locale: str, config: Optional[LanguageTabsConfig] = None) -> str:
    """Tab label from config.locale_labels, else the upper-cased locale."""
    config = config or get_current_config()
    return config.locale_labels.get(locale, locale.upper())


def locale_from_tab_key(key: str) -> str:
    """'tab_fr' → 'fr'."""
    return key[len(TAB_KEY_PREFIX):] if key.startswith(TAB_KEY_PREFIX) else key


@dataclass
class LocaleContext:
    """Locale facts for one render cycle.

    Resolved once per cycle and shared by the cloner, the normalizer and the
    bindings so that every clone sees the same locale list.
    """
    locales: List[str]
    base_locale: str
    config: LanguageTabsConfig
    record: Any = None
    required_locales: List[str] = field(default_factory=list)

    @classmethod
    def resolve(cls, record: Any = None, config: Optional[LanguageTabsConfig] = None) -> 'LocaleContext':
        config = config or get_current_config()
        locales = resolve_locales(record, config)
        return cls(
            locales=locales,
            base_locale=resolve_base_locale(record, locales, config),
            config=config,
            record=record,
            required_locales=unique_locales(config.required_locales or []),
        )

    def is_required(self, locale: str) -> bool:
        return locale in self.required_locales

    def label_for(self, locale: str) -> str:
        return resolve_locale_label(locale, self.config)

    @staticmethod
    def tab_key(locale: str) -> str:
        return f"{TAB_KEY_PREFIX}{locale}"
