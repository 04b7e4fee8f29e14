"""
TEST DOC: Convention Registry

WHAT: Tests for the active convention set
WHY: Every parse must see built-ins plus the latest custom conventions
HOW: Change the store between calls and check what the registry returns

CASES:
- Built-ins always present
- Custom conventions appear without any cache invalidation
- Snapshot is sorted longest opening first, stable otherwise

EDGE CASES:
- Custom record under a built-in key is ignored
- Store failure falls back to built-ins, or raises with the "raise" policy
"""

import pytest

from markup_conventions.conventions.errors import ConventionStoreError
from markup_conventions.conventions.registry import ConventionRegistry
from markup_conventions.conventions.store import (
    CUSTOM_CONVENTIONS_NAME,
    CustomConventionStore,
    MemoryKeyValueStore,
)
from markup_conventions.models.convention import BUILTIN_CONVENTIONS, Convention


class TestRegistry:
    """Tests for ConventionRegistry."""

    def test_builtins_only(self, registry: ConventionRegistry):
        assert [c.key for c in registry.all()] == list(BUILTIN_CONVENTIONS)

    def test_reload_on_every_call(
        self,
        registry: ConventionRegistry,
        store: CustomConventionStore,
        dots: Convention,
    ):
        """Authoring changes are visible on the next call."""
        assert registry.get(dots.key) is None
        store.save({dots.key: dots})
        assert registry.get(dots.key) == dots
        store.save({})
        assert registry.get(dots.key) is None

    def test_snapshot_longest_first(
        self,
        registry: ConventionRegistry,
        store: CustomConventionStore,
        dots: Convention,
        double_angle: Convention,
    ):
        store.save({dots.key: dots, double_angle.key: double_angle})
        keys = [c.key for c in registry.snapshot()]
        assert keys == [dots.key, double_angle.key, "angleBrackets", "squareBrackets", "exclamation"]

    def test_snapshot_is_immutable(self, registry: ConventionRegistry):
        assert isinstance(registry.snapshot(), tuple)

    def test_builtin_key_not_reassigned(
        self,
        registry: ConventionRegistry,
        store: CustomConventionStore,
        dots: Convention,
    ):
        hijack = dots.model_copy(update={"key": "exclamation"})
        store.save({"exclamation": hijack})
        assert registry.get("exclamation") == BUILTIN_CONVENTIONS["exclamation"]
        assert registry.custom() == {}

    def test_default_store_is_empty(self):
        assert len(ConventionRegistry().all()) == 3


class TestStoreFailure:
    """Tests for the store failure policy."""

    @pytest.fixture
    def broken_store(self) -> CustomConventionStore:
        return CustomConventionStore(MemoryKeyValueStore({CUSTOM_CONVENTIONS_NAME: "{oops"}))

    def test_fallback(self, broken_store: CustomConventionStore):
        registry = ConventionRegistry(broken_store, failure_policy="fallback")
        assert [c.key for c in registry.all()] == list(BUILTIN_CONVENTIONS)

    def test_raise(self, broken_store: CustomConventionStore):
        registry = ConventionRegistry(broken_store, failure_policy="raise")
        with pytest.raises(ConventionStoreError):
            registry.all()
