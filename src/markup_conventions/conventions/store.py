"""
store.py

PURPOSE: Persistence surface for custom conventions.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
The engine treats persistence as a plain get/set key-value store. The whole
custom collection lives under one name ("customMarkupConventions") as a JSON
object keyed by convention key, so a reader always sees a complete
collection.

    KeyValueStore            - protocol: get(name) / set(name, value)
    MemoryKeyValueStore      - dict-backed, for tests and embedding
    JsonFileKeyValueStore    - one JSON document on disk, atomic replace on write
    CustomConventionStore    - (de)serializes the custom collection
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from markup_conventions.conventions.errors import ConventionStoreError
from markup_conventions.models.convention import Convention

logger = logging.getLogger(__name__)

CUSTOM_CONVENTIONS_NAME = "customMarkupConventions"

_collection_adapter = TypeAdapter(dict[str, Convention])


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the host's key-value persistence."""

    def get(self, name: str) -> str | None: ...
    def set(self, name: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """An in-memory key-value store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value


class JsonFileKeyValueStore:
    """
    A key-value store kept in a single JSON file.

    Writes go to a temporary file in the same directory followed by
    os.replace, so a concurrent reader sees either the old or the new
    document, never a partial one.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConventionStoreError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ConventionStoreError(f"{self.path} does not contain a JSON object")
        return data

    def get(self, name: str) -> str | None:
        value = self._read_all().get(name)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ConventionStoreError(f'Entry "{name}" in {self.path} is not a string')
        return value

    def set(self, name: str, value: str) -> None:
        data = self._read_all()
        data[name] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".conventions-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise ConventionStoreError(f"Cannot write {self.path}: {e}") from e


class CustomConventionStore:
    """
    Load and save the custom convention collection.

    Usage:
        store = CustomConventionStore(MemoryKeyValueStore())
        store.save({"custom_1": convention})
        conventions = store.load()
    """

    def __init__(self, backend: KeyValueStore, name: str = CUSTOM_CONVENTIONS_NAME) -> None:
        self.backend = backend
        self.name = name

    def load(self) -> dict[str, Convention]:
        """
        Read the full custom collection.

        Returns:
            Conventions keyed by convention key, in stored order

        Raises:
            ConventionStoreError: If the stored document is corrupt or invalid
        """
        raw = self.backend.get(self.name)
        if not raw:
            return {}
        try:
            conventions = _collection_adapter.validate_json(raw)
        except ValidationError as e:
            raise ConventionStoreError(f"Invalid custom conventions: {e}") from e

        for key, convention in conventions.items():
            if convention.key != key:
                raise ConventionStoreError(
                    f'Custom convention stored under "{key}" has key "{convention.key}"'
                )
        return conventions

    def save(self, conventions: dict[str, Convention]) -> None:
        """Write the full custom collection."""
        payload = _collection_adapter.dump_json(conventions).decode("utf-8")
        self.backend.set(self.name, payload)
        logger.debug(f"Saved {len(conventions)} custom conventions")
