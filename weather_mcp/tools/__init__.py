"""Tool catalog and router."""

from .catalog import DEFAULT_FORECAST_DAYS, TOOL_CATALOG, TOOLS_BY_NAME
from .router import ToolProvider, ToolRouter, serialize_result

__all__ = [
    "DEFAULT_FORECAST_DAYS",
    "TOOL_CATALOG",
    "TOOLS_BY_NAME",
    "ToolProvider",
    "ToolRouter",
    "serialize_result",
]
