"""Weather data provider: static tables, normalization and synthetic fallback."""

from .mock_data import (
    FORECAST_DATA,
    LOCATION_ALIASES,
    WEATHER_ALERTS,
    WEATHER_DATA,
    normalize_location,
    search_locations_by_query,
)
from .service import WeatherProvider, WeatherService, iso_timestamp, utc_now
from .synthetic import CONDITIONS, SyntheticWeather

__all__ = [
    "CONDITIONS",
    "FORECAST_DATA",
    "LOCATION_ALIASES",
    "WEATHER_ALERTS",
    "WEATHER_DATA",
    "SyntheticWeather",
    "WeatherProvider",
    "WeatherService",
    "iso_timestamp",
    "normalize_location",
    "search_locations_by_query",
    "utc_now",
]
