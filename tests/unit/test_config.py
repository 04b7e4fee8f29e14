"""
TEST DOC: Settings

WHAT: Tests for environment-driven configuration
HOW: Set MARKUP_CONVENTIONS_* variables and load Settings
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from markup_conventions.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("MARKUP_CONVENTIONS_KEYWORD_COLOR", raising=False)
        settings = Settings()
        assert settings.keyword_color == "#ff00ff"
        assert settings.store_failure_policy == "fallback"
        assert settings.otel.enabled is False

    def test_store_path_creates_directory(self, data_dir: Path):
        path = Settings().store_path()
        assert path == data_dir / "conventions.json"
        assert data_dir.is_dir()

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MARKUP_CONVENTIONS_KEYWORD_COLOR", "#00ffff")
        monkeypatch.setenv("MARKUP_CONVENTIONS_STORE_FAILURE_POLICY", "raise")
        settings = Settings()
        assert settings.keyword_color == "#00ffff"
        assert settings.store_failure_policy == "raise"

    def test_invalid_policy(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MARKUP_CONVENTIONS_STORE_FAILURE_POLICY", "ignore")
        with pytest.raises(ValidationError):
            Settings()
