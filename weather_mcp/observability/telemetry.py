"""OpenTelemetry integration for tracing tool calls.

Telemetry is optional (``pip install weather-mcp[otel]``) and disabled by
default; every helper here is a no-op until ``setup_telemetry`` succeeds.

Usage:
    from weather_mcp.observability import setup_telemetry, traced_operation

    setup_telemetry(enabled=settings.otel_enabled)

    with traced_operation("tool.call", {"tool.name": name}):
        result = await handler(arguments)
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI
    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

# Module state
_initialized = False
_tracer: Tracer | None = None


def setup_telemetry(
    service_name: str = "weather-mcp",
    endpoint: str | None = None,
    protocol: str = "grpc",
    enabled: bool = False,
) -> Tracer | None:
    """Configure OpenTelemetry tracing.

    Safe to call multiple times - subsequent calls are no-ops.

    Args:
        service_name: Name for this service in traces.
        endpoint: OTLP collector endpoint. None uses console exporter.
        protocol: OTLP protocol - 'grpc' or 'http'.
        enabled: Whether to enable telemetry. False returns immediately.

    Returns:
        Configured tracer, or None if disabled or dependencies missing.
    """
    global _initialized, _tracer

    if not enabled:
        logger.debug("Telemetry disabled")
        return None

    if _initialized:
        return _tracer

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import SERVICE_NAME, Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )
    except ImportError:
        logger.warning(
            "OpenTelemetry not installed. Install with: pip install 'weather-mcp[otel]'"
        )
        return None

    resource = Resource.create({SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)

    if endpoint:
        try:
            if protocol == "http":
                from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
                    OTLPSpanExporter,
                )
            else:
                from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                    OTLPSpanExporter,
                )

            provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint))
            )
            logger.info(f"OTLP exporter configured: {endpoint} ({protocol})")
        except ImportError:
            logger.warning(
                f"OTLP {protocol} exporter not installed, falling back to console"
            )
            provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    else:
        # ConsoleSpanExporter writes to stdout, never combine it with stdio
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("Console span exporter configured (no endpoint specified)")

    trace.set_tracer_provider(provider)

    _tracer = trace.get_tracer(__name__)
    _initialized = True

    logger.info(f"OpenTelemetry initialized for service: {service_name}")
    return _tracer


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument a FastAPI app for request tracing.

    Args:
        app: FastAPI application instance.
    """
    if not _initialized:
        return

    try:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor.instrument_app(app)
        logger.debug(f"FastAPI instrumentation enabled for: {app.title}")
    except ImportError:
        logger.warning("FastAPI instrumentation not available")


def get_tracer() -> Tracer | None:
    """Get the configured tracer, or None if telemetry is disabled."""
    return _tracer


@contextmanager
def traced_operation(
    name: str,
    attributes: dict[str, str] | None = None,
) -> Generator[Span | None, None, None]:
    """Context manager for tracing an operation.

    Creates a new span for the duration of the context. Safe to use
    even when telemetry is disabled (yields None).

    Args:
        name: Name for this operation/span.
        attributes: Optional key-value attributes to attach to the span.

    Yields:
        The active span, or None if telemetry is disabled.
    """
    if not _tracer:
        yield None
        return

    with _tracer.start_as_current_span(name) as span:
        if attributes:
            for k, v in attributes.items():
                span.set_attribute(k, v)
        yield span


def add_span_attribute(key: str, value: str) -> None:
    """Add an attribute to the current span (no-op when disabled)."""
    if not _initialized:
        return

    from opentelemetry import trace

    trace.get_current_span().set_attribute(key, value)


def record_exception(exception: BaseException) -> None:
    """Record an exception on the current span (no-op when disabled)."""
    if not _initialized:
        return

    from opentelemetry import trace

    trace.get_current_span().record_exception(exception)


def shutdown_telemetry() -> None:
    """Shutdown telemetry and flush pending spans."""
    global _initialized, _tracer

    if not _initialized:
        return

    from opentelemetry import trace

    provider = trace.get_tracer_provider()
    shutdown_fn = getattr(provider, "shutdown", None)
    if shutdown_fn is not None:
        shutdown_fn()
        logger.info("Telemetry shutdown complete")

    _initialized = False
    _tracer = None
