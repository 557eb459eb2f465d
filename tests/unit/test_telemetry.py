"""Tests for telemetry module in weather_mcp/observability/telemetry.py.

Tests cover:
- setup_telemetry function
- instrument_fastapi function
- traced_operation context manager
- Span attribute and exception recording
- Shutdown
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from weather_mcp.observability import telemetry


class TelemetryStateMixin:
    def teardown_method(self) -> None:
        """Reset telemetry state after each test."""
        telemetry._initialized = False
        telemetry._tracer = None


class TestSetupTelemetry(TelemetryStateMixin):
    """Test setup_telemetry function."""

    def test_disabled_returns_none(self) -> None:
        """When disabled, returns None immediately."""
        assert telemetry.setup_telemetry(enabled=False) is None
        assert telemetry._initialized is False

    def test_idempotent_returns_same_tracer(self) -> None:
        """Multiple calls return the same tracer when already initialized."""
        mock_tracer = MagicMock()
        telemetry._initialized = True
        telemetry._tracer = mock_tracer

        assert telemetry.setup_telemetry(enabled=True) == mock_tracer


class TestGetTracer(TelemetryStateMixin):
    """Test get_tracer function."""

    def test_returns_none_when_not_initialized(self) -> None:
        assert telemetry.get_tracer() is None

    def test_returns_tracer_when_initialized(self) -> None:
        mock_tracer = MagicMock()
        telemetry._tracer = mock_tracer

        assert telemetry.get_tracer() == mock_tracer


class TestTracedOperation(TelemetryStateMixin):
    """Test traced_operation context manager."""

    def test_yields_none_when_disabled(self) -> None:
        with telemetry.traced_operation("tool.call") as span:
            assert span is None

    def test_creates_span_with_attributes(self) -> None:
        mock_span = MagicMock()
        mock_tracer = MagicMock()
        mock_tracer.start_as_current_span.return_value.__enter__.return_value = mock_span
        telemetry._tracer = mock_tracer

        with telemetry.traced_operation("tool.call", {"tool.name": "get_weather_stats"}) as span:
            assert span is mock_span

        mock_tracer.start_as_current_span.assert_called_once_with("tool.call")
        mock_span.set_attribute.assert_called_once_with("tool.name", "get_weather_stats")


class TestSpanHelpers(TelemetryStateMixin):
    """Test add_span_attribute and record_exception."""

    def test_add_span_attribute_noop_when_disabled(self) -> None:
        telemetry.add_span_attribute("key", "value")

    def test_record_exception_noop_when_disabled(self) -> None:
        telemetry.record_exception(ValueError("test"))


class TestInstrumentFastAPI(TelemetryStateMixin):
    """Test instrument_fastapi function."""

    def test_noop_when_not_initialized(self) -> None:
        app = FastAPI()
        telemetry.instrument_fastapi(app)
        assert not getattr(app, "_is_instrumented_by_opentelemetry", False)


class TestShutdown(TelemetryStateMixin):
    """Test shutdown_telemetry function."""

    def test_noop_when_not_initialized(self) -> None:
        telemetry.shutdown_telemetry()
        assert telemetry._initialized is False

    def test_resets_state(self) -> None:
        pytest.importorskip("opentelemetry")
        mock_provider = MagicMock()
        telemetry._initialized = True
        telemetry._tracer = MagicMock()

        with patch("opentelemetry.trace.get_tracer_provider", return_value=mock_provider):
            telemetry.shutdown_telemetry()

        mock_provider.shutdown.assert_called_once()
        assert telemetry._initialized is False
        assert telemetry._tracer is None
