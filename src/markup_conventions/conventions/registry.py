"""
registry.py

PURPOSE: The active convention set consulted at parse time.
DEPENDENCIES: convention model, store

ARCHITECTURE NOTES:
The registry is the fixed built-in mapping unioned with the custom mapping
from the store. Custom conventions are re-read on every call, so authoring
changes take effect on the next parse without any cache invalidation.

snapshot() returns an immutable tuple sorted by opening length, longest
first, so that a parse works on its own copy and never sees a concurrent
authoring change halfway through.

The failure policy only governs reads for rendering. Authoring reads with
strict=True, so an unreadable store aborts the write instead of being
overwritten with an empty collection.
"""

import logging

from markup_conventions.config import StoreFailurePolicy
from markup_conventions.conventions.errors import ConventionStoreError
from markup_conventions.conventions.store import CustomConventionStore, MemoryKeyValueStore
from markup_conventions.models.convention import BUILTIN_CONVENTIONS, Convention

logger = logging.getLogger(__name__)


class ConventionRegistry:
    """
    Built-in conventions plus custom conventions from a store.

    Usage:
        registry = ConventionRegistry(CustomConventionStore(backend))
        for convention in registry.snapshot():
            ...
    """

    def __init__(
        self,
        store: CustomConventionStore | None = None,
        failure_policy: StoreFailurePolicy = "fallback",
    ):
        """
        Initialize the registry.

        Args:
            store: Custom convention store (an empty in-memory store if omitted)
            failure_policy: "fallback" renders with built-ins only when the
                            store cannot be read; "raise" propagates the error
        """
        self.store = store or CustomConventionStore(MemoryKeyValueStore())
        self.failure_policy = failure_policy

    def builtins(self) -> list[Convention]:
        """The fixed built-in conventions."""
        return list(BUILTIN_CONVENTIONS.values())

    def custom(self, strict: bool = False) -> dict[str, Convention]:
        """
        Re-read the custom conventions from the store.

        Args:
            strict: Raise store errors even under the fallback policy.
                    Anything that writes the collection back reads strictly.
        """
        try:
            loaded = self.store.load()
        except ConventionStoreError as e:
            if strict or self.failure_policy == "raise":
                raise
            logger.warning(f"Using built-in conventions only: {e}")
            return {}

        custom: dict[str, Convention] = {}
        for key, convention in loaded.items():
            if key in BUILTIN_CONVENTIONS:
                logger.warning(f'Ignoring custom convention "{key}" that uses a built-in key')
                continue
            custom[key] = convention
        return custom

    def all(self, strict: bool = False) -> list[Convention]:
        """Built-ins first, then custom conventions in stored order."""
        return self.builtins() + list(self.custom(strict).values())

    def get(self, key: str) -> Convention | None:
        """Look up a convention by key."""
        if key in BUILTIN_CONVENTIONS:
            return BUILTIN_CONVENTIONS[key]
        return self.custom().get(key)

    def snapshot(self) -> tuple[Convention, ...]:
        """
        The active conventions, longest opening first.

        The sort is stable, so conventions with equal opening lengths keep
        the built-ins-then-custom order.
        """
        return sort_longest_first(self.all())


def sort_longest_first(conventions: list[Convention]) -> tuple[Convention, ...]:
    """Sort conventions by opening length, longest first (stable)."""
    return tuple(sorted(conventions, key=lambda c: len(c.opening), reverse=True))
