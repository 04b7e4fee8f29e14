"""
conftest.py

Shared pytest fixtures for markup_conventions tests.
"""

from pathlib import Path

import pytest

from markup_conventions.conventions.authoring import ConventionAuthor
from markup_conventions.conventions.registry import ConventionRegistry
from markup_conventions.conventions.store import CustomConventionStore, MemoryKeyValueStore
from markup_conventions.models.convention import Convention, Effects
from markup_conventions.render.parser import MarkupParser


@pytest.fixture
def backend() -> MemoryKeyValueStore:
    """An empty in-memory key-value store."""
    return MemoryKeyValueStore()


@pytest.fixture
def store(backend: MemoryKeyValueStore) -> CustomConventionStore:
    """Custom convention store over the in-memory backend."""
    return CustomConventionStore(backend)


@pytest.fixture
def registry(store: CustomConventionStore) -> ConventionRegistry:
    """Registry with built-ins and no custom conventions."""
    return ConventionRegistry(store)


@pytest.fixture
def author(registry: ConventionRegistry) -> ConventionAuthor:
    return ConventionAuthor(registry)


@pytest.fixture
def parser(registry: ConventionRegistry) -> MarkupParser:
    return MarkupParser(registry)


@pytest.fixture
def double_angle() -> Convention:
    """A custom << >> convention, bold gold."""
    return Convention(
        key="custom_double_angle",
        syntax="<<text>>",
        opening="<<",
        closing=">>",
        color="#ffaa00",
        effects=Effects(bold=True),
    )


@pytest.fixture
def dots() -> Convention:
    """A custom ..text.. convention with no effects, inheriting colour."""
    return Convention(
        key="custom_dots",
        syntax="..text..",
        opening="..",
        closing="..",
        color="inherit",
    )


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the settings data directory at a temporary path."""
    directory = tmp_path / "data"
    monkeypatch.setenv("MARKUP_CONVENTIONS_DATA_DIR", str(directory))
    return directory
