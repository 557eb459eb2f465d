"""Dependency injection container for the weather MCP server.

Provides centralized management of dependencies with lazy instantiation.

Usage:
    from weather_mcp.core.container import container

    # Get settings
    settings = container.settings()

    # Get the shared tool router (backed by the weather service)
    router = container.tool_router()

    # For testing, override dependencies
    container.override("weather_service", fake_provider)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..config import ServerSettings, settings

if TYPE_CHECKING:
    from ..data import WeatherProvider
    from ..tools import ToolRouter

logger = logging.getLogger(__name__)


class Container:
    """Simple dependency injection container.

    Provides factory methods and singletons for key components.
    Supports overriding for testing.
    """

    def __init__(self) -> None:
        """Initialize the container."""
        self._overrides: dict[str, Any] = {}
        self._singletons: dict[str, Any] = {}

    def override(self, name: str, value: Any) -> None:
        """Override a dependency for testing.

        Args:
            name: Name of the dependency to override.
            value: Value to use instead.
        """
        self._overrides[name] = value

    def reset_overrides(self) -> None:
        """Reset all overrides."""
        self._overrides.clear()

    def reset_singletons(self) -> None:
        """Reset all cached singletons."""
        self._singletons.clear()

    def settings(self) -> ServerSettings:
        """Get server settings.

        Returns:
            ServerSettings instance.
        """
        if "settings" in self._overrides:
            return self._overrides["settings"]
        return settings

    def weather_service(self) -> WeatherProvider:
        """Get the weather data provider singleton.

        Returns:
            WeatherProvider instance (the in-memory WeatherService by default).
        """
        if "weather_service" in self._overrides:
            return self._overrides["weather_service"]

        if "weather_service" not in self._singletons:
            from ..data import WeatherService

            self._singletons["weather_service"] = WeatherService()
            logger.debug("Created WeatherService singleton")

        return self._singletons["weather_service"]

    def tool_router(self) -> ToolRouter:
        """Get the tool router singleton.

        Returns:
            ToolRouter dispatching to weather_service().
        """
        if "tool_router" in self._overrides:
            return self._overrides["tool_router"]

        if "tool_router" not in self._singletons:
            from ..tools import ToolRouter

            self._singletons["tool_router"] = ToolRouter(self.weather_service())
            logger.debug("Created ToolRouter singleton")

        return self._singletons["tool_router"]


# Global container instance
container = Container()
