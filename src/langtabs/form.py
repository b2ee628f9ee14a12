"""
Host form: working-value tree plus component lifecycle.

FormState is the state container the synchronization layer talks to. It
only exposes get(path) and set(path, value, notify). Form drives the
component lifecycle the way a form framework does:

    render() → begin_render() on attached components → hydrate()
    set_field_state(field, value) → write state → after_state_updated hooks
"""
import copy
import logging
from typing import Any, Callable, Dict, Iterator, List, Mapping, MutableMapping, Optional

from langtabs.fields import Component, FormField
from langtabs.state_paths import SEPARATOR

logger = logging.getLogger(__name__)

_MISSING = object()


class FormState:
    """Dotted-path working-value tree.

    Listeners receive (path, value) and fire only for writes made with
    notify=True. Writes made with notify=False (e.g. hydration-time
    normalization) change the tree silently.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(dict(data or {}))
        self._listeners: List[Callable[[str, Any], None]] = []

    def get(self, path: str, default: Any = None) -> Any:
        node: Any = self._data
        for segment in path.split(SEPARATOR):
            if not isinstance(node, Mapping):
                return default
            node = node.get(segment, _MISSING)
            if node is _MISSING:
                return default
        return node

    def set(self, path: str, value: Any, notify: bool = True) -> None:
        segments = path.split(SEPARATOR)
        node: MutableMapping[str, Any] = self._data
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, MutableMapping):
                # Non-mapping intermediates are replaced
                child = {}
                node[segment] = child
            node = child
        node[segments[-1]] = value

        if notify:
            self._notify(path, value)

    def replace(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data = copy.deepcopy(dict(data or {}))

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def on_updated(self, callback: Callable[[str, Any], None]) -> None:
        """Subscribe to notifying writes."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def off_updated(self, callback: Callable[[str, Any], None]) -> None:
        """Unsubscribe from notifying writes."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, path: str, value: Any) -> None:
        for callback in list(self._listeners):
            try:
                callback(path, value)
            except Exception as e:
                logger.warning(f"Error in state listener for {path!r}: {e}")


class Form:
    """
    Minimal form host.

    Args:
        components: Top-level components
        state: Initial working values
        record: Record being edited (optional)
        model: Model instance, class or dotted class path used when there is no record
    """

    def __init__(
        self,
        components: Optional[List[Component]] = None,
        state: Optional[Mapping[str, Any]] = None,
        record: Any = None,
        model: Any = None,
    ):
        self.components: List[Component] = list(components or [])
        self.state = FormState(state)
        self.record = record
        self.model = model
        self.refreshed: List[List[str]] = []

        for component in self._walk_declared():
            attach = getattr(component, 'attach', None)
            if callable(attach):
                attach(self)

    # === State container contract ===

    def get(self, path: str, default: Any = None) -> Any:
        return self.state.get(path, default)

    def set(self, path: str, value: Any, notify: bool = True) -> None:
        self.state.set(path, value, notify=notify)

    # === Record access ===

    def get_record(self) -> Any:
        return self.record

    def get_model(self) -> Any:
        return self.model

    def refresh_form_data(self, paths: List[str]) -> None:
        """Record a targeted refresh request for the given paths."""
        logger.debug(f"Refresh requested for {paths}")
        self.refreshed.append(list(paths))

    # === Lifecycle ===

    def iter_fields(self, with_hidden: bool = True) -> Iterator[FormField]:
        for component in self.components:
            if isinstance(component, FormField) and (with_hidden or not component.is_hidden()):
                yield component
            if component.is_hidden() and not with_hidden:
                continue
            for child in component.iter_components(with_hidden=with_hidden):
                if isinstance(child, FormField):
                    yield child

    def _walk_declared(self, components: Optional[List[Component]] = None) -> Iterator[Component]:
        """Walk declared components at any depth, hidden ones included.

        Follows the static ``children`` lists only, so tab sets that build
        their children lazily are reached without being built.
        """
        for component in self.components if components is None else components:
            yield component
            yield from self._walk_declared(component.children)

    def render(self) -> None:
        """Start a render cycle on every component that tracks one, then hydrate."""
        for component in self._walk_declared():
            begin_render = getattr(component, 'begin_render', None)
            if callable(begin_render):
                begin_render()
        self.hydrate()

    def fill(self, data: Optional[Mapping[str, Any]] = None) -> None:
        """Replace the working values and hydrate every field."""
        self.state.replace(data)
        self.render()

    def hydrate(self) -> None:
        for field in self.iter_fields(with_hidden=True):
            field.call_after_state_hydrated(self.get_field_state(field))

    def get_field_state(self, field: FormField) -> Any:
        return self.state.get(field.get_state_path(), field.default)

    def set_field_state(self, field: FormField, value: Any) -> None:
        """Apply a user edit: write the field's state then fire its update hooks."""
        self.state.set(field.get_state_path(), value, notify=True)
        field.call_after_state_updated(value)
