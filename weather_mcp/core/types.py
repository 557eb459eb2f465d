"""Pydantic models for weather entities and the tool envelope.

Attributes are snake_case in Python; the JSON form handed to clients uses
camelCase aliases (``windSpeed``, ``inputSchema``, ``isError``, ...).
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict using wire (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)


# ============================================================================
# Weather Entities
# ============================================================================


class WeatherData(CamelModel):
    """Current conditions for one location."""

    location: str
    temperature: int
    humidity: int
    wind_speed: int
    wind_direction: str
    condition: str
    description: str
    pressure: int
    visibility: int
    uv_index: int
    timestamp: str


class DailyForecast(CamelModel):
    """One day of a forecast."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    high_temp: int
    low_temp: int
    condition: str
    description: str
    chance_of_rain: int
    humidity: int


class WeatherForecast(CamelModel):
    """Multi-day forecast for one location."""

    location: str
    forecast: list[DailyForecast] = Field(default_factory=list)


class WeatherAlert(CamelModel):
    """Active or upcoming weather alert."""

    id: str
    type: str
    severity: Literal["minor", "moderate", "severe", "extreme"]
    title: str
    description: str
    areas: list[str]
    start_time: str
    end_time: str


class LocationSummary(CamelModel):
    """Per-location row of the statistics breakdown."""

    location: str
    temperature: int
    condition: str


class WeatherStats(CamelModel):
    """Aggregate statistics over the known locations."""

    total_locations: int
    average_temperature: float
    most_common_condition: str
    location_breakdown: list[LocationSummary]


# ============================================================================
# Tool Envelope
# ============================================================================


class ToolDescriptor(CamelModel):
    """Catalog entry for a tool: name, description and input schema."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: str
    description: str
    input_schema: dict[str, Any]

    @property
    def required_arguments(self) -> list[str]:
        return list(self.input_schema.get("required", []))


class TextContent(CamelModel):
    """Content block within a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(CamelModel):
    """Uniform success/failure envelope produced by every tool call."""

    content: list[TextContent]
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)

    @property
    def text(self) -> str:
        """Text of the first content block (empty when there is none)."""
        return self.content[0].text if self.content else ""
