"""
LanguageTabs: a component rendering one tab per locale.

Usage:
    tabs = LanguageTabs([
        FormField('title', required=True),
        FormField.builder('content'),
    ])
    form = Form([tabs], record=article)
    form.render()

Lifecycle:
- attach(host): called by the host form; the host provides get/set and
  optionally get_record()/get_model()/refresh_form_data()
- begin_render(): new render cycle, locale context re-resolved, tabs rebuilt
- change_locale(locale): the user switched tabs; collection fields of that
  locale are re-synchronized from the translation state
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from langtabs.bindings import META_KEY, CollectionBinding, LocaleBinding
from langtabs.cloner import FieldCloner
from langtabs.config import LanguageTabsConfig, get_current_config
from langtabs.fields import Component, FormField, Tab
from langtabs.locales import LocaleContext, locale_from_tab_key
from langtabs.record import resolve_record
from langtabs.render_cycle import RenderCycle

logger = logging.getLogger(__name__)

Schema = Union[List[Component], Callable[[], List[Component]]]


class LanguageTabs(Component):
    """
    Tab set holding a localized clone of each declared field per locale.

    Args:
        schema: Declared fields, or a zero-argument callable returning them
        key: Component key
        config: Fixed config; defaults to the current config at render time
    """

    def __init__(self, schema: Schema, key: str = META_KEY, config: Optional[LanguageTabsConfig] = None, **kwargs):
        super().__init__(key=key, **kwargs)
        self.schema = schema
        self.config = config
        self.host: Any = None
        self.cycle = RenderCycle()
        self.current_locale: Optional[str] = None
        self.has_collection_fields = False
        self._bindings: Dict[str, LocaleBinding] = {}
        self._tabs: Optional[List[Tab]] = None

    def attach(self, host: Any) -> 'LanguageTabs':
        self.host = host
        self.cycle.begin()
        self._tabs = None
        return self

    # === Building ===

    def get_declared_components(self) -> List[Component]:
        schema = self.schema() if callable(self.schema) else self.schema
        return list(schema or [])

    def get_locale_context(self) -> LocaleContext:
        return self.cycle.memoize(
            'locale_context',
            lambda: LocaleContext.resolve(resolve_record(self.host), self.config or get_current_config()),
        )

    @property
    def locales(self) -> List[str]:
        return self.get_locale_context().locales

    def begin_render(self) -> List[Tab]:
        """Start a new render cycle and rebuild the tabs."""
        self.cycle.begin()
        self._tabs = None
        return self.get_child_components()

    def get_child_components(self) -> List[Component]:
        if self._tabs is None:
            self._tabs = self._build_tabs()
        return self._tabs

    def _build_tabs(self) -> List[Tab]:
        context = self.get_locale_context()
        cloner = FieldCloner(self.host, context, self.cycle)
        tabs = cloner.build_tabs(self.get_declared_components())

        self._bindings = cloner.bindings
        self.has_collection_fields = any(
            isinstance(binding, CollectionBinding) for binding in self._bindings.values()
        )
        if self.current_locale not in context.locales:
            self.current_locale = context.locales[0] if context.locales else None

        logger.debug(
            f"Built {len(tabs)} locale tabs {context.locales} "
            f"(base={context.base_locale!r}, collections={self.has_collection_fields})"
        )
        return tabs

    def get_tab(self, locale: str) -> Optional[Tab]:
        key = LocaleContext.tab_key(locale)
        for tab in self.get_child_components():
            if tab.key == key:
                return tab
        return None

    def get_binding(self, field: FormField) -> Optional[LocaleBinding]:
        return self._bindings.get(field.identity)

    # === Locale switching ===

    def handle_tab_changed(self, tab_key: str) -> List[FormField]:
        """Handle a 'locale tab changed' event carrying a 'tab_{locale}' key."""
        return self.change_locale(locale_from_tab_key(tab_key))

    def change_locale(self, locale: str) -> List[FormField]:
        """Make ``locale`` the active locale and re-sync its collection fields."""
        logger.debug(f"Active locale {self.current_locale!r} → {locale!r}")
        self.current_locale = locale
        return self.refresh_collection_fields()

    def collect_collection_fields(self) -> List[FormField]:
        """All tagged collection fields in the tree, hidden ones included."""
        return [
            component for component in self.iter_components(with_hidden=True)
            if isinstance(component, FormField) and component.kind.is_collection
        ]

    def refresh_collection_fields(self, locale: Optional[str] = None) -> List[FormField]:
        """
        Re-apply translation state to collection fields.

        Args:
            locale: Locale to refresh; defaults to the active locale. With no
                    active locale every locale is refreshed.

        Returns:
            Fields that were refreshed
        """
        locale = locale or self.current_locale
        refreshed = []

        for field in self.collect_collection_fields():
            if field.is_hidden():
                continue

            meta = field.get_meta(META_KEY)
            if not isinstance(meta, dict):
                continue
            if locale is not None and meta.get('locale') != locale:
                continue

            binding = self.get_binding(field)
            if not isinstance(binding, CollectionBinding):
                logger.debug(f"No collection binding for {field!r}, skipping refresh")
                continue

            binding.refresh(field)
            refreshed.append(field)

        logger.debug(f"Refreshed {len(refreshed)} collection fields for locale {locale!r}")
        return refreshed
