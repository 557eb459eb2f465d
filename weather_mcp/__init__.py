"""Weather lookup tools served over stdio, HTTP and SSE bindings."""

from .config import ServerSettings, settings
from .core import (
    ConfigurationError,
    InvalidArgumentError,
    JsonRpcParseError,
    MissingArgumentError,
    NoActiveChannelError,
    ToolDescriptor,
    ToolResult,
    UnknownToolError,
    WeatherMCPError,
)
from .data import WeatherProvider, WeatherService
from .tools import TOOL_CATALOG, ToolProvider, ToolRouter

__version__ = "1.0.0"

__all__ = [
    # Tool router
    "TOOL_CATALOG",
    "ToolDescriptor",
    "ToolProvider",
    "ToolResult",
    "ToolRouter",
    # Data provider
    "WeatherProvider",
    "WeatherService",
    # Configuration
    "ServerSettings",
    "settings",
    # Exceptions
    "ConfigurationError",
    "InvalidArgumentError",
    "JsonRpcParseError",
    "MissingArgumentError",
    "NoActiveChannelError",
    "UnknownToolError",
    "WeatherMCPError",
]
