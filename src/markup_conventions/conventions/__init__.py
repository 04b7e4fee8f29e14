"""Convention definition, storage, and authoring."""

from markup_conventions.conventions.authoring import (
    ConflictResolution,
    ConventionAuthor,
    SaveResult,
    SaveStatus,
    draft_convention,
)
from markup_conventions.conventions.conflicts import find_conflicts
from markup_conventions.conventions.detector import PatternType, detect
from markup_conventions.conventions.errors import (
    BuiltinConventionError,
    ConventionError,
    ConventionStoreError,
    InvalidPatternError,
    UnknownConventionError,
)
from markup_conventions.conventions.registry import ConventionRegistry
from markup_conventions.conventions.store import (
    CustomConventionStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
)

__all__ = [
    "BuiltinConventionError",
    "ConflictResolution",
    "ConventionAuthor",
    "ConventionError",
    "ConventionRegistry",
    "ConventionStoreError",
    "CustomConventionStore",
    "InvalidPatternError",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PatternType",
    "SaveResult",
    "SaveStatus",
    "UnknownConventionError",
    "detect",
    "draft_convention",
    "find_conflicts",
]
