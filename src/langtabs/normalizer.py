"""
Attribute state normalization.

Before any locale-scoped read or write, an attribute's working value must be
a mapping of every configured locale to its value:

    'Hello'              → {'en': 'Hello', 'fr': None}
    {'en': 'Hi', 'xx': 1} → {'en': 'Hi', 'fr': None}

Persisted translations from the record take precedence over the raw
working value.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from langtabs.locales import LocaleContext
from langtabs.record import fetch_translations
from langtabs.render_cycle import RenderCycle

logger = logging.getLogger(__name__)


class AttributeStateNormalizer:
    """Coerce raw attribute state into a complete locale map.

    Normalization is idempotent and memoized per render cycle: once an
    attribute has been normalized, a map-shaped raw value is returned as is
    instead of being re-derived from the record for every clone.
    """

    def __init__(self, locale_context: LocaleContext, cycle: RenderCycle):
        self.locale_context = locale_context
        self.cycle = cycle

    def normalize(self, attribute: str, raw_state: Any, key: Optional[str] = None) -> Dict[str, Any]:
        """
        Normalize the raw state of an attribute.

        Args:
            attribute: Attribute name on the record
            raw_state: Current working value at the attribute's path
            key: Normalized-set key (defaults to attribute). Use the full
                 attribute path when the same name occurs under several prefixes.

        Returns:
            Mapping holding exactly the configured locales
        """
        key = key or attribute
        if self.cycle.is_normalized(key) and isinstance(raw_state, Mapping):
            return raw_state

        translations = fetch_translations(self.locale_context.record, attribute)

        if not translations:
            if isinstance(raw_state, Mapping):
                translations = dict(raw_state)
            elif raw_state is not None and raw_state != '':
                translations = {self.locale_context.base_locale: raw_state}
            else:
                translations = {}

        normalized = {locale: translations.get(locale) for locale in self.locale_context.locales}

        dropped = set(translations) - set(normalized)
        if dropped:
            logger.debug(f"Dropped unconfigured locales {sorted(str(k) for k in dropped)} from {key!r}")

        self.cycle.mark_normalized(key)
        return normalized
