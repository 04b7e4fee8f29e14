"""
TEST DOC: Tracing

WHAT: Tests for the lazy tracer and telemetry initialization
WHY: Parsing must work with tracing disabled and the otel packages absent
HOW: Use the tracer without a provider and initialize with tracing off
"""

import pytest

from markup_conventions.config import OpenTelemetrySettings
from markup_conventions.observability import get_tracer, init_telemetry, shutdown_telemetry
from markup_conventions.observability.telemetry import NoOpSpan


@pytest.fixture(autouse=True)
def reset_telemetry():
    shutdown_telemetry()
    yield
    shutdown_telemetry()


class TestTracing:
    """Tests for tracing without a provider."""

    def test_noop_span(self):
        with get_tracer(__name__).start_as_current_span("markup.parse") as span:
            assert isinstance(span, NoOpSpan)
            span.set_attribute("markup.span_count", 1)

    def test_disabled(self):
        assert init_telemetry(OpenTelemetrySettings(enabled=False)) is False

    def test_repeat_init_keeps_result(self):
        init_telemetry(OpenTelemetrySettings(enabled=False))
        assert init_telemetry(OpenTelemetrySettings(enabled=True)) is False
