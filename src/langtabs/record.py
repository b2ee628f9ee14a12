"""
Read-only access to the record being edited.

The record is an external collaborator. Everything it offers is optional:
- get_record() / get_model() / model on the host page
- get_translations(attribute) on the record itself

Missing pieces resolve to None or an empty mapping, never to an error.
"""
import importlib
import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def _instantiate(model: Any) -> Optional[Any]:
    """Turn a model reference (instance, class or dotted class path) into an instance."""
    if model is None:
        return None

    if isinstance(model, str):
        module_name, _, class_name = model.rpartition('.')
        if not module_name:
            logger.warning(f"Cannot import model {model!r}: expected 'package.module.Class'")
            return None
        try:
            model = getattr(importlib.import_module(module_name), class_name)
        except (ImportError, AttributeError) as e:
            logger.warning(f"Cannot import model {model!r}: {e}")
            return None

    if isinstance(model, type):
        try:
            return model()
        except Exception as e:
            logger.warning(f"Cannot instantiate model {model.__name__}: {e}")
            return None

    return model


def resolve_record(host: Any) -> Optional[Any]:
    """Find the record behind a host page.

    Order: host.get_record(), then host.get_model() or host.model. A model
    given as a class or a dotted path yields a fresh, empty instance.

    Args:
        host: The page or form owning the locale tabs (may be None)

    Returns:
        Record instance or None
    """
    if host is None:
        return None

    get_record = getattr(host, 'get_record', None)
    if callable(get_record):
        record = get_record()
        if record is not None:
            return record

    get_model = getattr(host, 'get_model', None)
    if callable(get_model):
        return _instantiate(get_model())

    return _instantiate(getattr(host, 'model', None))


def call_accessor(record: Any, name: str, *args: Any, default: Any = None) -> Any:
    """Call an optional record method.

    Returns ``default`` when the record lacks the method or the method raises.
    """
    accessor = getattr(record, name, None) if record is not None else None
    if not callable(accessor):
        return default

    try:
        return accessor(*args)
    except Exception as e:
        logger.warning(f"{name}() failed on {type(record).__name__}: {e}")
        return default


def fetch_translations(record: Any, attribute: str) -> Dict[str, Any]:
    """Fetch persisted translations for an attribute.

    Any failure (no accessor, accessor raising, non-mapping result) reads as
    "no existing translations".
    """
    getter = getattr(record, 'get_translations', None) if record is not None else None
    if not callable(getter):
        return {}

    try:
        translations = getter(attribute)
    except Exception as e:
        logger.warning(f"get_translations({attribute!r}) failed on {type(record).__name__}: {e}")
        return {}

    if not isinstance(translations, Mapping):
        return {}
    return dict(translations)
