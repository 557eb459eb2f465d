"""Observability: logging and telemetry."""

from .logging import LoggerAdapter, setup_logging
from .telemetry import (
    add_span_attribute,
    instrument_fastapi,
    record_exception,
    setup_telemetry,
    shutdown_telemetry,
    traced_operation,
)

__all__ = [
    # Logging
    "LoggerAdapter",
    "setup_logging",
    # Telemetry
    "add_span_attribute",
    "instrument_fastapi",
    "record_exception",
    "setup_telemetry",
    "shutdown_telemetry",
    "traced_operation",
]
