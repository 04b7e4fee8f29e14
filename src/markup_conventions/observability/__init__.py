"""
observability/__init__.py

PURPOSE: Optional OpenTelemetry tracing for parse and authoring calls.
DEPENDENCIES: opentelemetry-api, opentelemetry-sdk (optional)

ARCHITECTURE NOTES:
Tracing is opt-in:
- Without the otel packages every span is a no-op
- Console export when enabled
- OTLP export when an endpoint is configured
"""

from markup_conventions.observability.telemetry import (
    get_tracer,
    init_telemetry,
    shutdown_telemetry,
)

__all__ = ["get_tracer", "init_telemetry", "shutdown_telemetry"]
