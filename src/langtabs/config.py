"""
Configuration for locale tab generation.

Provides thread-local storage for the global LanguageTabsConfig plus a
contextvars-based override scope for temporarily changing it.

LAYERING:
- _global_config_context: thread-local GLOBAL config (application startup)
- current_config_override: ContextVar holding a scoped override

Resolution order used by get_current_config():
    innermost config_context() override → global config → static defaults
"""

import contextvars
import dataclasses
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class DriverKind(Enum):
    """Physical storage layout used for a translated attribute."""
    PLAIN = 'json'
    HYBRID = 'hybrid'
    EXTRA_ONLY = 'extra_only'

    @classmethod
    def from_name(cls, value: Union['DriverKind', str, None]) -> 'DriverKind':
        """Map a driver name (or enum) to a DriverKind. Unknown names read as PLAIN."""
        if isinstance(value, DriverKind):
            return value
        for kind in cls:
            if kind.value == value:
                return kind
        if value:
            logger.debug(f"Unknown translation driver {value!r}, using {cls.PLAIN.value!r}")
        return cls.PLAIN


@dataclass
class LanguageTabsConfig:
    """Global settings for locale tabs.

    default_locales and required_locales mirror the package config; the
    driver and storage column mirror the translatable-model config that
    decides where per-locale values live.
    """
    default_locales: List[str] = field(default_factory=list)
    required_locales: List[str] = field(default_factory=list)
    locale_labels: Dict[str, str] = field(default_factory=dict)
    default_driver: DriverKind = DriverKind.PLAIN
    storage_column: str = 'extra'
    app_locale: str = 'en'

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'LanguageTabsConfig':
        """Build from a plain mapping (e.g. loaded from a settings file).

        Unknown keys are ignored, missing keys keep their defaults.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if 'default_driver' in values:
            values['default_driver'] = DriverKind.from_name(values['default_driver'])
        for list_key in ('default_locales', 'required_locales'):
            if list_key in values:
                value = values[list_key] or []
                values[list_key] = [value] if isinstance(value, str) else list(value)
        if 'locale_labels' in values:
            values['locale_labels'] = dict(values['locale_labels'] or {})
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Export to a plain mapping."""
        return {
            'default_locales': list(self.default_locales),
            'required_locales': list(self.required_locales),
            'locale_labels': dict(self.locale_labels),
            'default_driver': self.default_driver.value,
            'storage_column': self.storage_column,
            'app_locale': self.app_locale,
        }


_global_config_context = threading.local()

current_config_override: contextvars.ContextVar[Optional[LanguageTabsConfig]] = contextvars.ContextVar(
    'current_config_override', default=None
)


def set_global_config(config: LanguageTabsConfig) -> None:
    """Set the global config for the current thread.

    Called at application startup, or by tests to set up a locale layout.
    """
    _global_config_context.value = config


def get_global_config() -> LanguageTabsConfig:
    """Get the global config, falling back to static defaults when unset."""
    config = getattr(_global_config_context, 'value', None)
    return config if config is not None else LanguageTabsConfig()


def clear_global_config() -> None:
    """Forget the global config for the current thread."""
    if hasattr(_global_config_context, 'value'):
        del _global_config_context.value


def get_current_config() -> LanguageTabsConfig:
    """Get the effective config: innermost override, else the global config."""
    override = current_config_override.get()
    return override if override is not None else get_global_config()


@contextmanager
def config_context(config: Optional[LanguageTabsConfig] = None, **overrides):
    """
    Create a scope where get_current_config() returns a different config.

    Args:
        config: Complete replacement config. Defaults to the current config.
        **overrides: Individual fields replaced on top of ``config``.

    Usage:
        with config_context(default_locales=['en', 'fr']):
            tabs.begin_render()
    """
    base = config if config is not None else get_current_config()
    if 'default_driver' in overrides:
        overrides['default_driver'] = DriverKind.from_name(overrides['default_driver'])
    scoped = dataclasses.replace(base, **overrides) if overrides else base

    token = current_config_override.set(scoped)
    try:
        yield scoped
    finally:
        current_config_override.reset(token)
