"""
Per-locale field cloning.

For every declared field and every locale:
    clone → rename to '{attribute}_{locale}' → localize state path
          → toggle required-ness → install the binding for its FieldKind
"""
import logging
from typing import Any, Dict, List

from langtabs.bindings import LocaleBinding, binding_for
from langtabs.drivers import StorageDriver, resolve_driver
from langtabs.fields import Component, FormField, Tab
from langtabs.locales import LocaleContext
from langtabs.normalizer import AttributeStateNormalizer
from langtabs.render_cycle import RenderCycle
from langtabs.state_paths import join_path, resolve_state_path, split_state_path

logger = logging.getLogger(__name__)


class FieldCloner:
    """
    Builds localized clones of declared fields.

    Args:
        host: State container (get/set) and optional refresh_form_data()
        locale_context: Locales, base locale and config for this cycle
        cycle: Render cycle scoping the processed/normalized sets
    """

    def __init__(self, host: Any, locale_context: LocaleContext, cycle: RenderCycle):
        self.host = host
        self.locale_context = locale_context
        self.cycle = cycle
        self.normalizer = AttributeStateNormalizer(locale_context, cycle)
        self.bindings: Dict[str, LocaleBinding] = {}

    def resolve_driver(self, attribute: str) -> StorageDriver:
        return self.cycle.memoize(
            ('driver', attribute),
            lambda: resolve_driver(self.locale_context.record, attribute, self.locale_context.config),
        )

    def clone_for_locale(self, component: Component, locale: str) -> Component:
        """Clone one declared component for one locale."""
        if not isinstance(component, FormField):
            logger.debug(f"Cloning non-field component {component!r} without localization")
            return component.clone()

        clone = component.clone()
        attribute = clone.name
        original_path = clone.state_path or attribute
        prefix, leaf = split_state_path(original_path)
        leaf = leaf if prefix is not None else attribute

        driver = self.resolve_driver(leaf)
        clone.name = f"{attribute}_{locale}"
        clone.state_path = resolve_state_path(
            original_path, attribute, locale, driver, self.locale_context.base_locale
        )

        if not self.locale_context.is_required(locale):
            clone.required = False

        binding = binding_for(clone.kind)(
            host=self.host,
            attribute=leaf,
            attribute_path=join_path(prefix, leaf),
            locale=locale,
            driver=driver,
            normalizer=self.normalizer,
            cycle=self.cycle,
        )
        if binding.install(clone):
            self.bindings[clone.identity] = binding

        logger.debug(f"Cloned {attribute!r} for {locale!r} → {clone.state_path!r} ({type(binding).__name__})")
        return clone

    def build_tabs(self, components: List[Component]) -> List[Tab]:
        """One tab per locale holding that locale's clones."""
        tabs = []
        for locale in self.locale_context.locales:
            tabs.append(Tab(
                self.locale_context.label_for(locale),
                children=[self.clone_for_locale(component, locale) for component in components],
                key=self.locale_context.tab_key(locale),
            ))
        return tabs
