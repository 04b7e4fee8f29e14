"""
telemetry.py

PURPOSE: OpenTelemetry initialization and tracer lookup.
DEPENDENCIES: opentelemetry-api, opentelemetry-sdk, opentelemetry-exporter-otlp (all optional)

ARCHITECTURE NOTES:
Modules grab a tracer at import time with get_tracer(__name__). The tracer
is lazy: it resolves to the real otel tracer only once init_telemetry() has
installed a provider, and to a no-op tracer otherwise. That keeps parse()
free of any tracing cost in the default configuration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from markup_conventions.config import OpenTelemetrySettings

logger = logging.getLogger(__name__)

_provider: object | None = None
_initialized = False


class Span(Protocol):
    """The part of the otel span interface this package uses."""

    def __enter__(self) -> Span: ...
    def __exit__(self, *args: object) -> None: ...
    def set_attribute(self, key: str, value: object) -> None: ...
    def record_exception(self, exception: BaseException) -> None: ...


class Tracer(Protocol):
    """The part of the otel tracer interface this package uses."""

    def start_as_current_span(self, name: str, **kwargs: object) -> Span: ...


class NoOpSpan:
    """Span used when tracing is off."""

    def __enter__(self) -> NoOpSpan:
        return self

    def __exit__(self, *args: object) -> None:
        pass

    def set_attribute(self, key: str, value: object) -> None:  # noqa: ARG002
        pass

    def record_exception(self, exception: BaseException) -> None:  # noqa: ARG002
        pass


_NOOP_SPAN = NoOpSpan()


class LazyTracer:
    """Tracer that looks up the real otel tracer each time a span starts."""

    def __init__(self, name: str) -> None:
        self._name = name

    def start_as_current_span(self, name: str, **kwargs: object) -> Span:
        if _provider is None:
            return _NOOP_SPAN
        try:
            from opentelemetry import trace
        except ImportError:
            return _NOOP_SPAN
        return trace.get_tracer(self._name).start_as_current_span(name, **kwargs)  # type: ignore[return-value]


def init_telemetry(settings: OpenTelemetrySettings) -> bool:
    """
    Install a tracer provider if tracing is enabled.

    Safe to call repeatedly and without the otel packages installed.

    Args:
        settings: Tracing configuration

    Returns:
        True if real spans will be recorded
    """
    global _initialized, _provider

    if _initialized:
        return _provider is not None
    _initialized = True

    if not settings.enabled:
        logger.debug("Tracing disabled")
        return False

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
    except ImportError:
        logger.warning(
            "OpenTelemetry packages not installed. "
            "Install with: pip install markup-conventions[observability]"
        )
        return False

    provider = TracerProvider(resource=Resource.create({"service.name": settings.service_name}))

    if settings.endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        except ImportError:
            logger.warning("OTLP exporter not available, exporting spans to the console")
            provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        else:
            provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint)))
            logger.info(f"Exporting spans to {settings.endpoint}")
    else:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _provider = provider
    logger.info(f"Tracing enabled: service={settings.service_name}")
    return True


def get_tracer(name: str) -> Tracer:
    """
    Get a tracer for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        A LazyTracer, no-op until init_telemetry() enables tracing
    """
    return LazyTracer(name)


def shutdown_telemetry() -> None:
    """Flush pending spans and forget the provider."""
    global _initialized, _provider

    shutdown = getattr(_provider, "shutdown", None)
    if callable(shutdown):
        shutdown()
        logger.debug("Tracing shut down")

    _provider = None
    _initialized = False
