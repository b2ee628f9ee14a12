"""
Lifecycle bindings between cloned fields and translation state.

Each cloned field gets one binding for its (attribute, locale). The binding
is installed as after_state_hydrated / after_state_updated hooks and talks
to the host only through get(path) and set(path, value, notify).

Two layouts are handled:
- PLAIN driver: the attribute path holds a {locale: value} map. Hydration
  normalizes it and extracts the locale slice, updates write the slice back
  and persist the full map.
- HYBRID / EXTRA_ONLY: each clone is bound straight to its own storage slot.

Variants per FieldKind:
- LocaleBinding: scalar values ('' is stored as None)
- CollectionBinding: repeaters and block builders (values are always
  collections; wiring is guarded per render cycle and tagged for bulk refresh)
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Type

from langtabs.drivers import StorageDriver
from langtabs.fields import FieldKind, FormField
from langtabs.normalizer import AttributeStateNormalizer
from langtabs.render_cycle import RenderCycle

logger = logging.getLogger(__name__)

META_KEY = 'language_tabs'


class LocaleBinding:
    """Synchronizes one scalar clone with its locale slot."""

    def __init__(
        self,
        host: Any,
        attribute: str,
        attribute_path: str,
        locale: str,
        driver: StorageDriver,
        normalizer: AttributeStateNormalizer,
        cycle: Optional[RenderCycle] = None,
    ):
        self.host = host
        self.attribute = attribute
        self.attribute_path = attribute_path
        self.locale = locale
        self.driver = driver
        self.normalizer = normalizer
        self.cycle = cycle

    @property
    def uses_translation_map(self) -> bool:
        return self.driver.is_plain

    # === Pure value transforms ===

    def coerce_hydrated(self, value: Any) -> Any:
        return value

    def coerce_updated(self, value: Any) -> Any:
        return None if value == '' else value

    def hydrate_value(self, translations: Any) -> Any:
        """Working value for this locale from a translation map."""
        value = translations.get(self.locale) if isinstance(translations, Mapping) else None
        return self.coerce_hydrated(value)

    def apply_update(self, translations: Any, working_value: Any) -> Dict[str, Any]:
        """New translation map with this locale's slot replaced."""
        updated = dict(translations) if isinstance(translations, Mapping) else {}
        updated[self.locale] = self.coerce_updated(working_value)
        return updated

    # === Hooks ===

    def install(self, field: FormField) -> bool:
        """Append this binding's hooks to the field."""
        field.after_state_hydrated(self.hydrate)
        field.after_state_updated(self.update)
        return True

    def read_translations(self) -> Mapping[str, Any]:
        """Attribute map, normalized and written back silently when not map-shaped."""
        raw_state = self.host.get(self.attribute_path)
        if isinstance(raw_state, Mapping):
            return raw_state

        translations = self.normalizer.normalize(self.attribute, raw_state, key=self.attribute_path)
        self.host.set(self.attribute_path, translations, notify=False)
        return translations

    def hydrate(self, field: FormField, state: Any = None) -> Any:
        """Set the clone's working value from stored state."""
        if self.uses_translation_map:
            value = self.hydrate_value(self.read_translations())
        else:
            value = self.coerce_hydrated(self.host.get(field.get_state_path()))

        self.host.set(field.get_state_path(), value, notify=False)
        return value

    def update(self, field: FormField, state: Any) -> Any:
        """Write an edited working value back into storage."""
        if self.uses_translation_map:
            stored = self.apply_update(self.host.get(self.attribute_path), state)
            self.host.set(self.attribute_path, stored, notify=True)
        else:
            stored = self.coerce_updated(state)
            self.host.set(field.get_state_path(), stored, notify=True)

        self.request_refresh(field)
        return stored

    def refresh_targets(self, field: FormField) -> List[str]:
        return list(dict.fromkeys([field.get_state_path(), self.attribute_path]))

    def request_refresh(self, field: FormField) -> None:
        refresh = getattr(self.host, 'refresh_form_data', None)
        if callable(refresh):
            refresh(self.refresh_targets(field))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attribute_path!r}, locale={self.locale!r}, driver={self.driver.kind.value})"


class CollectionBinding(LocaleBinding):
    """Binding for repeaters and block builders.

    Hooks are appended after any hooks already on the field, so earlier
    hydration logic still runs first.
    """

    def coerce_hydrated(self, value: Any) -> Any:
        return value if isinstance(value, (list, Mapping)) else []

    def coerce_updated(self, value: Any) -> Any:
        return [] if value is None or value == '' else value

    def install(self, field: FormField) -> bool:
        if self.cycle is not None and not self.cycle.claim(field.identity, self.locale):
            return False

        field.key = f"{META_KEY}.{field.name}.{field.identity}"
        field.set_meta(META_KEY, {
            'attribute': self.attribute,
            'locale': self.locale,
            'attribute_path': self.attribute_path,
        })
        return super().install(field)

    def refresh(self, field: FormField) -> Any:
        """Re-apply this locale's slice to the field and fire its update hooks."""
        if self.uses_translation_map:
            value = self.hydrate_value(self.host.get(self.attribute_path))
        else:
            value = self.coerce_hydrated(self.host.get(field.get_state_path()))

        self.host.set(field.get_state_path(), value, notify=False)
        field.call_after_state_updated(value)
        return value


_BINDINGS: Dict[FieldKind, Type[LocaleBinding]] = {
    FieldKind.SCALAR: LocaleBinding,
    FieldKind.REPEATER: CollectionBinding,
    FieldKind.BUILDER: CollectionBinding,
}


def binding_for(kind: FieldKind) -> Type[LocaleBinding]:
    """Binding class for a field kind."""
    return _BINDINGS[kind]
