"""The fixed tool catalog shared by every binding."""

from ..core.types import ToolDescriptor

GET_CURRENT_WEATHER = "get_current_weather"
GET_WEATHER_FORECAST = "get_weather_forecast"
GET_WEATHER_ALERTS = "get_weather_alerts"
SEARCH_LOCATIONS = "search_locations"
GET_WEATHER_STATS = "get_weather_stats"

DEFAULT_FORECAST_DAYS = 3

# Declaration order is the listing order
TOOL_CATALOG: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=GET_CURRENT_WEATHER,
        description="Get current weather information for a specified location",
        input_schema={
            "type": "object",
            "properties": {
                "location": {
                    "type": "string",
                    "description": "Location name (e.g., Hong Kong, Tokyo, London)",
                },
            },
            "required": ["location"],
        },
    ),
    ToolDescriptor(
        name=GET_WEATHER_FORECAST,
        description="Get weather forecast for a specified location",
        input_schema={
            "type": "object",
            "properties": {
                "location": {
                    "type": "string",
                    "description": "Location name",
                },
                "days": {
                    "type": "number",
                    "description": "Forecast days (1-7 days, default 3 days)",
                    "minimum": 1,
                    "maximum": 7,
                },
            },
            "required": ["location"],
        },
    ),
    ToolDescriptor(
        name=GET_WEATHER_ALERTS,
        description="Get weather alert information",
        input_schema={
            "type": "object",
            "properties": {
                "location": {
                    "type": "string",
                    "description": "Location name (optional, if not provided will get all alerts)",
                },
            },
        },
    ),
    ToolDescriptor(
        name=SEARCH_LOCATIONS,
        description="Search supported locations",
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search keyword",
                },
            },
            "required": ["query"],
        },
    ),
    ToolDescriptor(
        name=GET_WEATHER_STATS,
        description="Get weather statistics information",
        input_schema={
            "type": "object",
            "properties": {},
        },
    ),
)

TOOLS_BY_NAME: dict[str, ToolDescriptor] = {tool.name: tool for tool in TOOL_CATALOG}
