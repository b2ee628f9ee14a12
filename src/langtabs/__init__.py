"""
Per-locale translation tabs for form builders.

For each configured locale, declared form fields are cloned, renamed and
rebound to a locale-specific state path. Hooks installed on each clone keep
the attribute's translation map consistent while the form is hydrated and
edited.

Quick Start:
    >>> from langtabs import Form, FormField, LanguageTabs, config_context
    >>>
    >>> tabs = LanguageTabs([FormField('title'), FormField.repeater('links')])
    >>> with config_context(default_locales=['en', 'fr']):
    ...     form = Form([tabs], state={'title': 'Hello'})
    ...     form.render()
    >>> form.get('title')
    {'en': 'Hello', 'fr': None}

Storage drivers:
    PLAIN       title.fr
    HYBRID      title (base locale) / extra.fr.title (other locales)
    EXTRA_ONLY  extra.fr.title

Modules:
    - config: LanguageTabsConfig, global and scoped configuration
    - locales: locale list, base locale and tab labels
    - record: read-only access to the edited record
    - drivers: storage driver selection per attribute
    - state_paths: (attribute, locale, driver) → dotted state path
    - render_cycle: per-render processed/normalized sets
    - normalizer: attribute state → complete locale map
    - fields: component tree and field hooks
    - bindings: hydrate/update hooks per field kind
    - cloner: per-locale field clones
    - language_tabs: the tab set component
    - form: minimal host form and state container
"""

from langtabs.config import (
    DriverKind,
    LanguageTabsConfig,
    set_global_config,
    get_global_config,
    clear_global_config,
    get_current_config,
    config_context,
)

from langtabs.locales import (
    LocaleContext,
    unique_locales,
    resolve_locales,
    resolve_base_locale,
    resolve_locale_label,
    locale_from_tab_key,
)

from langtabs.record import resolve_record, fetch_translations

from langtabs.drivers import (
    StorageDriver,
    translatable_definition,
    resolve_storage_column,
    resolve_driver,
)

from langtabs.state_paths import (
    join_path,
    split_state_path,
    resolve_attribute_path,
    resolve_state_path,
)

from langtabs.render_cycle import RenderCycle
from langtabs.normalizer import AttributeStateNormalizer
from langtabs.fields import Component, FieldKind, FormField, Section, Tab
from langtabs.bindings import LocaleBinding, CollectionBinding, binding_for
from langtabs.cloner import FieldCloner
from langtabs.language_tabs import LanguageTabs
from langtabs.form import Form, FormState

__all__ = [
    # Config
    'DriverKind',
    'LanguageTabsConfig',
    'set_global_config',
    'get_global_config',
    'clear_global_config',
    'get_current_config',
    'config_context',
    # Locales
    'LocaleContext',
    'unique_locales',
    'resolve_locales',
    'resolve_base_locale',
    'resolve_locale_label',
    'locale_from_tab_key',
    # Record
    'resolve_record',
    'fetch_translations',
    # Drivers
    'StorageDriver',
    'translatable_definition',
    'resolve_storage_column',
    'resolve_driver',
    # State paths
    'join_path',
    'split_state_path',
    'resolve_attribute_path',
    'resolve_state_path',
    # Synchronization
    'RenderCycle',
    'AttributeStateNormalizer',
    'LocaleBinding',
    'CollectionBinding',
    'binding_for',
    'FieldCloner',
    # Components
    'Component',
    'FieldKind',
    'FormField',
    'Section',
    'Tab',
    'LanguageTabs',
    'Form',
    'FormState',
]

__version__ = '1.0.0'
__description__ = 'Per-locale translation tabs for form builders'
