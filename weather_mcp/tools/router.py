"""Tool router: the transport-neutral list/call contract.

Every binding (stdio, HTTP, SSE) talks to a ``ToolProvider``; ``ToolRouter``
is the implementation backed by a ``WeatherProvider``.

Invariant: ``call_tool`` always returns exactly one ``ToolResult`` and
never raises. Unknown tools, missing arguments and handler faults all
become ``isError`` results.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic_core import to_jsonable_python

from ..core.exceptions import (
    InvalidArgumentError,
    MissingArgumentError,
    UnknownToolError,
    WeatherMCPError,
)
from ..core.types import ToolDescriptor, ToolResult
from ..data import WeatherProvider
from ..observability import add_span_attribute, record_exception, traced_operation
from .catalog import (
    DEFAULT_FORECAST_DAYS,
    GET_CURRENT_WEATHER,
    GET_WEATHER_ALERTS,
    GET_WEATHER_FORECAST,
    GET_WEATHER_STATS,
    SEARCH_LOCATIONS,
    TOOL_CATALOG,
    TOOLS_BY_NAME,
)

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[Any]]


@runtime_checkable
class ToolProvider(Protocol):
    """What a binding needs: list the catalog and call a tool by name."""

    def list_tools(self) -> Sequence[ToolDescriptor]: ...

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ToolResult: ...


def serialize_result(value: Any) -> str:
    """Pretty-print a handler return value as JSON text (camelCase keys)."""
    return json.dumps(to_jsonable_python(value, by_alias=True), indent=2, ensure_ascii=False)


class ToolRouter:
    """Dispatches tool calls to the weather data provider.

    Args:
        provider: The data provider answering the five lookups.
    """

    def __init__(self, provider: WeatherProvider) -> None:
        self.provider = provider
        self._handlers: dict[str, Handler] = {
            GET_CURRENT_WEATHER: self._current_weather,
            GET_WEATHER_FORECAST: self._weather_forecast,
            GET_WEATHER_ALERTS: self._weather_alerts,
            SEARCH_LOCATIONS: self._search_locations,
            GET_WEATHER_STATS: self._weather_stats,
        }

    def list_tools(self) -> list[ToolDescriptor]:
        """Return the catalog in declaration order."""
        return list(TOOL_CATALOG)

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ToolResult:
        """Invoke a tool and wrap the outcome in a ``ToolResult``.

        Args:
            name: Tool name from the catalog.
            arguments: Tool arguments; ``None`` is treated as empty.

        Returns:
            Success result with pretty-printed JSON text, or an error result
            whose text is ``"Error: <message>"``.
        """
        arguments = arguments or {}

        with traced_operation("tool.call", {"tool.name": str(name)}):
            try:
                descriptor = TOOLS_BY_NAME.get(name)
                if descriptor is None:
                    raise UnknownToolError(name)

                for required in descriptor.required_arguments:
                    if arguments.get(required) is None:
                        raise MissingArgumentError(name, required)

                value = await self._handlers[name](arguments)
                text = serialize_result(value)

            except WeatherMCPError as e:
                logger.warning(
                    f"Tool call {name!r} rejected: {e}",
                    extra={"extra": e.to_dict()},
                )
                record_exception(e)
                add_span_attribute("tool.error", e.code)
                return ToolResult.error(e.message)

            except Exception as e:
                logger.error(f"Tool call {name!r} failed: {e}", exc_info=True)
                record_exception(e)
                add_span_attribute("tool.error", type(e).__name__)
                return ToolResult.error(str(e))

        logger.debug(f"Tool call {name!r} succeeded ({len(text)} chars)")
        return ToolResult.ok(text)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _current_weather(self, arguments: dict[str, Any]) -> Any:
        return await self.provider.get_current_weather(arguments["location"])

    async def _weather_forecast(self, arguments: dict[str, Any]) -> Any:
        days = arguments.get("days")
        if days is None:
            days = DEFAULT_FORECAST_DAYS
        elif isinstance(days, float) and math.isfinite(days):
            # Fractional days truncate toward zero
            days = int(days)
        elif isinstance(days, bool) or not isinstance(days, int):
            raise InvalidArgumentError(
                GET_WEATHER_FORECAST,
                "days",
                f"Argument 'days' must be a finite number, got {days!r}",
            )

        return await self.provider.get_weather_forecast(arguments["location"], days)

    async def _weather_alerts(self, arguments: dict[str, Any]) -> Any:
        return await self.provider.get_weather_alerts(arguments.get("location"))

    async def _search_locations(self, arguments: dict[str, Any]) -> Any:
        return await self.provider.search_locations(arguments["query"])

    async def _weather_stats(self, arguments: dict[str, Any]) -> Any:
        return await self.provider.get_weather_stats()
