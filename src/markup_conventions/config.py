"""
config.py

PURPOSE: Configuration loading and settings management.
DEPENDENCIES: pydantic, pydantic-settings

ARCHITECTURE NOTES:
Configuration comes from multiple sources (in priority order):
1. CLI flags (highest priority)
2. Environment variables (MARKUP_CONVENTIONS_*)
3. Defaults (lowest priority)

The store failure policy is a host decision: "fallback" renders with the
built-in conventions only, "raise" surfaces the store error to the caller.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from markup_conventions.models.convention import DEFAULT_KEYWORD_COLOR

StoreFailurePolicy = Literal["fallback", "raise"]


class OpenTelemetrySettings(BaseSettings):
    """Settings for optional tracing."""

    enabled: bool = Field(
        default=False,
        description="Enable OpenTelemetry tracing",
    )
    service_name: str = Field(
        default="markup-conventions",
        description="Service name reported with spans",
    )
    endpoint: str = Field(
        default="",
        description="OTLP gRPC endpoint (console export only when empty)",
    )

    model_config = {"env_prefix": "MARKUP_CONVENTIONS_OTEL_"}


class Settings(BaseSettings):
    """Main application settings."""

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".markup-conventions",
        description="Directory holding the custom convention store",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug output",
    )
    keyword_color: str = Field(
        default=DEFAULT_KEYWORD_COLOR,
        description="Colour used for keyword conventions when none is given",
    )
    store_failure_policy: StoreFailurePolicy = Field(
        default="fallback",
        description="What to do when the custom convention store cannot be read",
    )
    otel: OpenTelemetrySettings = Field(
        default_factory=OpenTelemetrySettings,
        description="Tracing settings",
    )

    model_config = {"env_prefix": "MARKUP_CONVENTIONS_"}

    def ensure_data_dir(self) -> Path:
        """Ensure data directory exists and return it."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    def store_path(self) -> Path:
        """Get the path of the JSON file backing the convention store."""
        return self.ensure_data_dir() / "conventions.json"


def get_settings() -> Settings:
    """Get application settings, loading from environment."""
    return Settings()
