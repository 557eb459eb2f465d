"""Core types, exceptions, and utilities."""

from .container import Container, container
from .exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    JsonRpcParseError,
    MissingArgumentError,
    NoActiveChannelError,
    UnknownToolError,
    WeatherMCPError,
)
from .types import (
    DailyForecast,
    LocationSummary,
    TextContent,
    ToolDescriptor,
    ToolResult,
    WeatherAlert,
    WeatherData,
    WeatherForecast,
    WeatherStats,
)

__all__ = [
    # Container
    "Container",
    "container",
    # Types
    "DailyForecast",
    "LocationSummary",
    "TextContent",
    "ToolDescriptor",
    "ToolResult",
    "WeatherAlert",
    "WeatherData",
    "WeatherForecast",
    "WeatherStats",
    # Exceptions
    "ConfigurationError",
    "InvalidArgumentError",
    "JsonRpcParseError",
    "MissingArgumentError",
    "NoActiveChannelError",
    "UnknownToolError",
    "WeatherMCPError",
]
