"""
State path resolution.

Maps (attribute, locale, driver) to the dotted path holding that locale's
value inside the form's working-value tree:

    PLAIN       title.fr
    HYBRID      title            (base locale, stored inline)
                extra.fr.title   (other locales)
    EXTRA_ONLY  extra.fr.title

All functions here are pure. Clone identity across re-renders depends on it.
"""
from typing import Optional, Tuple

from langtabs.config import DriverKind
from langtabs.drivers import StorageDriver

SEPARATOR = '.'


def join_path(*segments: Optional[str]) -> str:
    """Join non-empty segments with the path separator."""
    return SEPARATOR.join(s for s in segments if s)


def split_state_path(path: str) -> Tuple[Optional[str], str]:
    """'data.title' → ('data', 'title'); 'title' → (None, 'title')."""
    if SEPARATOR not in path:
        return None, path
    prefix, _, leaf = path.rpartition(SEPARATOR)
    return prefix, leaf


def resolve_attribute_path(attribute: str, locale: str, driver: StorageDriver, base_locale: str) -> str:
    """Relative path of one locale's value for an attribute."""
    if driver.kind is DriverKind.HYBRID:
        if locale == base_locale:
            return attribute
        return join_path(driver.storage_column, locale, attribute)

    if driver.kind is DriverKind.EXTRA_ONLY:
        return join_path(driver.storage_column, locale, attribute)

    return join_path(attribute, locale)


def resolve_state_path(
    original_path: Optional[str],
    attribute: str,
    locale: str,
    driver: StorageDriver,
    base_locale: str,
) -> str:
    """
    Localize a field's state path.

    When the original path is nested, its last segment is the attribute and
    the localized relative path is appended to the remaining prefix.

    Args:
        original_path: The declared field's relative state path (may be empty)
        attribute: Declared field name, used when original_path is empty
        locale: Locale of the clone
        driver: Storage driver for the attribute
        base_locale: Locale stored inline under HYBRID

    Returns:
        Dotted state path for the clone
    """
    prefix, leaf = split_state_path(original_path or attribute)
    if prefix is None:
        leaf = attribute
    return join_path(prefix, resolve_attribute_path(leaf, locale, driver, base_locale))
