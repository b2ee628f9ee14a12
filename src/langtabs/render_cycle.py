"""
Per-render-cycle bookkeeping.

One RenderCycle is owned by each LanguageTabs component and passed to the
cloner and the normalizer. begin() is called at the start of every
top-level render and bumps the cycle token, which invalidates:

- processed components: (identity, locale) pairs that already have hooks
- normalized attributes: attribute keys already coerced to a locale map
- memoized lookups: values computed once per cycle (locale context, drivers)
"""
import logging
from typing import Any, Callable, Dict, Hashable, Set, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RenderCycle:
    """Scoped replacement for request-global caches."""

    def __init__(self):
        self._token: int = 0
        self._processed: Set[Tuple[str, str]] = set()
        self._normalized: Set[str] = set()
        self._memo: Dict[Hashable, Any] = {}

    @property
    def token(self) -> int:
        return self._token

    def begin(self) -> int:
        """Start a new cycle, dropping everything recorded in the previous one."""
        self._token += 1
        self._processed.clear()
        self._normalized.clear()
        self._memo.clear()
        logger.debug(f"Render cycle {self._token} started")
        return self._token

    # === Processed components ===

    def claim(self, identity: str, locale: str) -> bool:
        """Mark a component as wired for a locale.

        Returns:
            True on first claim in this cycle, False when already processed
        """
        key = (identity, locale)
        if key in self._processed:
            logger.debug(f"Component {identity} already wired for {locale!r} in cycle {self._token}")
            return False
        self._processed.add(key)
        return True

    def is_processed(self, identity: str, locale: str) -> bool:
        return (identity, locale) in self._processed

    # === Normalized attributes ===

    def is_normalized(self, key: str) -> bool:
        return key in self._normalized

    def mark_normalized(self, key: str) -> None:
        self._normalized.add(key)

    # === Memoized lookups ===

    def memoize(self, key: Hashable, compute_fn: Callable[[], T]) -> T:
        """Get a value cached for this cycle, computing it on first use."""
        if key in self._memo:
            return self._memo[key]
        value = compute_fn()
        self._memo[key] = value
        return value
