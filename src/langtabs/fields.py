"""
Form components: fields and layout nodes.

A minimal component tree for the host form:
- Component: base node with key, visibility, metadata and children
- FormField: a bound input (scalar, repeater or block builder)
- Section / Tab: layout containers

Hooks are explicit ordered observer lists owned by each field. Adding a
hook appends; previously registered hooks keep running first.
"""
import copy
import logging
import uuid
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

# Hooks receive (field, state)
FieldHook = Callable[['FormField', Any], None]


def _new_identity() -> str:
    return uuid.uuid4().hex


class FieldKind(Enum):
    """Closed set of field value shapes."""
    SCALAR = 'scalar'
    REPEATER = 'repeater'
    BUILDER = 'builder'

    @property
    def is_collection(self) -> bool:
        return self is not FieldKind.SCALAR


class Component:
    """Base node of the component tree."""

    def __init__(
        self,
        children: Optional[List['Component']] = None,
        key: Optional[str] = None,
        visible: bool = True,
        meta: Optional[Dict[str, Any]] = None,
    ):
        self.children: List[Component] = list(children or [])
        self.key = key
        self.visible = visible
        self.meta: Dict[str, Any] = dict(meta or {})

    def get_child_components(self) -> List['Component']:
        return self.children

    def is_hidden(self) -> bool:
        return not self.visible

    def get_meta(self, name: str, default: Any = None) -> Any:
        return self.meta.get(name, default)

    def set_meta(self, name: str, value: Any) -> 'Component':
        self.meta[name] = value
        return self

    def iter_components(self, with_hidden: bool = False) -> Iterator['Component']:
        """Walk descendants depth-first (self excluded)."""
        for child in self.get_child_components():
            if child.is_hidden() and not with_hidden:
                continue
            yield child
            yield from child.iter_components(with_hidden=with_hidden)

    def clone(self) -> 'Component':
        """Copy this node and its subtree."""
        cloned = copy.copy(self)
        cloned.meta = copy.deepcopy(self.meta)
        cloned.children = [child.clone() for child in self.children]
        return cloned

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"


class FormField(Component):
    """
    A bound form input.

    Attributes:
        name: Field name (the translated attribute for declared fields)
        kind: Value shape; collection kinds hold lists of sub-records
        state_path: Relative dotted path of the working value (defaults to name)
        required: Whether the host should validate presence
        identity: Opaque token, unique per instance (new on every clone)
    """

    def __init__(
        self,
        name: str,
        kind: FieldKind = FieldKind.SCALAR,
        state_path: Optional[str] = None,
        required: bool = False,
        label: Optional[str] = None,
        default: Any = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.name = name
        self.kind = kind
        self.state_path = state_path
        self.required = required
        self.label = label
        self.default = default
        self.identity = _new_identity()
        self._after_state_hydrated: List[FieldHook] = []
        self._after_state_updated: List[FieldHook] = []

    @classmethod
    def repeater(cls, name: str, **kwargs) -> 'FormField':
        return cls(name, kind=FieldKind.REPEATER, **kwargs)

    @classmethod
    def builder(cls, name: str, **kwargs) -> 'FormField':
        return cls(name, kind=FieldKind.BUILDER, **kwargs)

    def get_state_path(self) -> str:
        return self.state_path or self.name

    # === Hooks ===

    def after_state_hydrated(self, hook: FieldHook) -> 'FormField':
        """Append a hydration hook."""
        self._after_state_hydrated.append(hook)
        return self

    def after_state_updated(self, hook: FieldHook) -> 'FormField':
        """Append an update hook."""
        self._after_state_updated.append(hook)
        return self

    @property
    def hydration_hooks(self) -> List[FieldHook]:
        return list(self._after_state_hydrated)

    @property
    def update_hooks(self) -> List[FieldHook]:
        return list(self._after_state_updated)

    def call_after_state_hydrated(self, state: Any) -> None:
        self._run_hooks(self._after_state_hydrated, state, 'hydrated')

    def call_after_state_updated(self, state: Any) -> None:
        self._run_hooks(self._after_state_updated, state, 'updated')

    def _run_hooks(self, hooks: List[FieldHook], state: Any, event: str) -> None:
        for hook in list(hooks):
            try:
                hook(self, state)
            except Exception as e:
                logger.warning(f"Error in after_state_{event} hook of {self.name!r}: {e}")

    def clone(self) -> 'FormField':
        cloned = super().clone()
        cloned.identity = _new_identity()
        cloned.default = copy.deepcopy(self.default)
        cloned._after_state_hydrated = list(self._after_state_hydrated)
        cloned._after_state_updated = list(self._after_state_updated)
        return cloned

    def __repr__(self) -> str:
        return f"FormField({self.name!r}, kind={self.kind.value}, path={self.get_state_path()!r})"


class Section(Component):
    """Plain layout group."""

    def __init__(self, children: Optional[List[Component]] = None, heading: Optional[str] = None, **kwargs):
        super().__init__(children=children, **kwargs)
        self.heading = heading


class Tab(Component):
    """One tab of a tab set."""

    def __init__(self, label: str, children: Optional[List[Component]] = None, **kwargs):
        super().__init__(children=children, **kwargs)
        self.label = label
