"""
Storage driver selection for translated attributes.

A record declares per-attribute storage through its ``translatable``
metadata, either as a list of attribute names:

    translatable = ['title', 'body']

or as a mapping with per-attribute overrides:

    translatable = {
        'title': {'driver': 'hybrid'},
        'body': {'driver': 'extra_only', 'storage': 'meta'},
    }

Attributes without an override use config.default_driver and the record's
(or config's) storage column.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from langtabs.config import DriverKind, LanguageTabsConfig, get_current_config
from langtabs.record import call_accessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageDriver:
    """Driver descriptor: which layout an attribute uses and where extras live."""
    kind: DriverKind = DriverKind.PLAIN
    storage_column: str = 'extra'

    @classmethod
    def plain(cls, storage_column: str = 'extra') -> 'StorageDriver':
        return cls(DriverKind.PLAIN, storage_column)

    @property
    def is_plain(self) -> bool:
        return self.kind is DriverKind.PLAIN


def translatable_definition(record: Any, attribute: str) -> Optional[Dict[str, Any]]:
    """Read the attribute's entry from record.translatable.

    Returns:
        The override mapping ({} when declared without overrides), or None
        when the attribute is not declared at all.
    """
    translatable = getattr(record, 'translatable', None)

    if isinstance(translatable, Mapping):
        if attribute not in translatable:
            return None
        value = translatable[attribute]
        return dict(value) if isinstance(value, Mapping) else {}

    if isinstance(translatable, (list, tuple, set, frozenset)):
        return {} if attribute in translatable else None

    return None


def resolve_storage_column(record: Any, config: Optional[LanguageTabsConfig] = None) -> str:
    """Storage column: record.translation_storage_column(), else config default."""
    config = config or get_current_config()
    storage_column = call_accessor(record, 'translation_storage_column')
    if storage_column:
        return str(storage_column)
    return config.storage_column


def resolve_driver(record: Any, attribute: str, config: Optional[LanguageTabsConfig] = None) -> StorageDriver:
    """Select the driver descriptor for an attribute.

    PLAIN when there is no record or the record has no translatable
    metadata for the attribute.
    """
    config = config or get_current_config()

    if record is None:
        return StorageDriver.plain(config.storage_column)

    checker = getattr(record, 'is_translatable_attribute', None)
    if callable(checker) and not call_accessor(record, 'is_translatable_attribute', attribute, default=False):
        return StorageDriver.plain(config.storage_column)

    definition = translatable_definition(record, attribute)
    if definition is None and not callable(checker):
        return StorageDriver.plain(config.storage_column)
    definition = definition or {}

    kind = DriverKind.from_name(definition.get('driver') or config.default_driver)
    storage_column = definition.get('storage') or resolve_storage_column(record, config)

    logger.debug(f"Driver for {type(record).__name__}.{attribute}: {kind.value} (storage={storage_column})")
    return StorageDriver(kind, storage_column)
