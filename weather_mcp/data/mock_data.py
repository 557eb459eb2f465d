"""Static weather tables served by the in-memory data provider.

Dates and timestamps are stored as offsets from "now" and rendered at
lookup time, so a long-running server never serves stale dates.
"""

import re
from typing import Any

# Current conditions, keyed by canonical location key (insertion order matters
# for statistics and search results)
WEATHER_DATA: dict[str, dict[str, Any]] = {
    "hong-kong": {
        "location": "Hong Kong",
        "temperature": 28,
        "humidity": 75,
        "wind_speed": 15,
        "wind_direction": "SE",
        "condition": "Partly Cloudy",
        "description": "Partly cloudy with occasional sunshine and high humidity",
        "pressure": 1013,
        "visibility": 10,
        "uv_index": 7,
    },
    "tokyo": {
        "location": "Tokyo",
        "temperature": 22,
        "humidity": 60,
        "wind_speed": 8,
        "wind_direction": "NE",
        "condition": "Sunny",
        "description": "Clear skies with bright sunshine, perfect spring weather",
        "pressure": 1020,
        "visibility": 15,
        "uv_index": 5,
    },
    "osaka": {
        "location": "Osaka",
        "temperature": 24,
        "humidity": 65,
        "wind_speed": 6,
        "wind_direction": "SW",
        "condition": "Partly Cloudy",
        "description": "Mild temperature with scattered clouds, comfortable for outdoor activities",
        "pressure": 1018,
        "visibility": 12,
        "uv_index": 6,
    },
    "kyoto": {
        "location": "Kyoto",
        "temperature": 20,
        "humidity": 70,
        "wind_speed": 4,
        "wind_direction": "N",
        "condition": "Overcast",
        "description": "Cloudy skies with cool temperatures, typical spring weather in ancient capital",
        "pressure": 1016,
        "visibility": 10,
        "uv_index": 3,
    },
    "hiroshima": {
        "location": "Hiroshima",
        "temperature": 23,
        "humidity": 68,
        "wind_speed": 7,
        "wind_direction": "SE",
        "condition": "Light Rain",
        "description": "Light drizzle with mild temperatures, umbrella recommended",
        "pressure": 1012,
        "visibility": 8,
        "uv_index": 2,
    },
    "sapporo": {
        "location": "Sapporo",
        "temperature": 16,
        "humidity": 55,
        "wind_speed": 12,
        "wind_direction": "NW",
        "condition": "Sunny",
        "description": "Cool and crisp northern weather with clear skies",
        "pressure": 1022,
        "visibility": 18,
        "uv_index": 4,
    },
    "fukuoka": {
        "location": "Fukuoka",
        "temperature": 26,
        "humidity": 72,
        "wind_speed": 9,
        "wind_direction": "SW",
        "condition": "Thunderstorms",
        "description": "Afternoon thunderstorms with warm temperatures, typical for southern Japan",
        "pressure": 1008,
        "visibility": 6,
        "uv_index": 8,
    },
    "london": {
        "location": "London",
        "temperature": 15,
        "humidity": 80,
        "wind_speed": 12,
        "wind_direction": "W",
        "condition": "Rainy",
        "description": "Light rain with overcast skies, typical British weather",
        "pressure": 998,
        "visibility": 8,
        "uv_index": 2,
    },
    "new-york": {
        "location": "New York",
        "temperature": 25,
        "humidity": 65,
        "wind_speed": 10,
        "wind_direction": "SW",
        "condition": "Cloudy",
        "description": "Mostly cloudy with mild temperatures, pleasant city weather",
        "pressure": 1015,
        "visibility": 12,
        "uv_index": 4,
    },
    "sydney": {
        "location": "Sydney",
        "temperature": 22,
        "humidity": 58,
        "wind_speed": 14,
        "wind_direction": "SE",
        "condition": "Sunny",
        "description": "Beautiful sunny day with harbor breeze, perfect for outdoor activities",
        "pressure": 1019,
        "visibility": 20,
        "uv_index": 9,
    },
}

# Forecast rows: (day offset, high, low, condition, description, chance of rain, humidity)
FORECAST_DATA: dict[str, list[tuple[int, int, int, str, str, int, int]]] = {
    "hong-kong": [
        (1, 30, 25, "Thunderstorms", "Afternoon thunderstorms with heavy rain", 80, 85),
        (2, 29, 24, "Partly Cloudy", "Mix of sun and clouds, more comfortable", 30, 70),
        (3, 31, 26, "Sunny", "Bright and sunny, hot weather returns", 10, 65),
        (4, 32, 27, "Hot", "Very hot and humid, stay hydrated", 20, 80),
        (5, 28, 23, "Rainy", "Rainy day with cooler temperatures", 90, 88),
        (6, 29, 24, "Partly Cloudy", "Clearing up with occasional sunshine", 40, 75),
        (7, 30, 25, "Sunny", "Beautiful sunny weather for weekend", 15, 68),
    ],
    "tokyo": [
        (1, 24, 18, "Partly Cloudy", "Pleasant spring weather with mild temperatures", 20, 55),
        (2, 26, 19, "Sunny", "Clear skies and warming temperatures", 10, 50),
        (3, 21, 16, "Rainy", "Spring rain showers, cooler temperatures", 85, 78),
        (4, 23, 17, "Overcast", "Cloudy skies with mild spring weather", 35, 65),
        (5, 25, 19, "Sunny", "Beautiful clear day, perfect for cherry blossom viewing", 5, 48),
        (6, 27, 20, "Partly Cloudy", "Warm spring day with scattered clouds", 25, 58),
        (7, 28, 21, "Sunny", "Excellent weather for outdoor activities", 10, 52),
    ],
    "osaka": [
        (1, 26, 20, "Sunny", "Bright sunny day in the commercial heart of Japan", 15, 60),
        (2, 24, 18, "Light Rain", "Light spring showers with cooler temperatures", 70, 75),
        (3, 27, 21, "Partly Cloudy", "Mix of sun and clouds, pleasant weather", 30, 62),
    ],
    "sapporo": [
        (1, 18, 12, "Partly Cloudy", "Cool northern weather with scattered clouds", 25, 50),
        (2, 15, 9, "Snow Showers", "Late spring snow possible in northern Japan", 60, 70),
        (3, 20, 14, "Sunny", "Clear and crisp, beautiful mountain views", 10, 45),
    ],
}

# Alerts: start/end are hour offsets from now
WEATHER_ALERTS: list[dict[str, Any]] = [
    {
        "id": "hk-typhoon-001",
        "type": "Typhoon",
        "severity": "severe",
        "title": "Typhoon Warning Signal No. 8",
        "description": "Strong winds and heavy rain expected. Stay indoors and avoid unnecessary travel. Public transport may be suspended.",
        "areas": ["Hong Kong Island", "Kowloon", "New Territories"],
        "start_hours": 0,
        "end_hours": 12,
    },
    {
        "id": "tokyo-heatwave-001",
        "type": "Heat Wave",
        "severity": "moderate",
        "title": "High Temperature Advisory",
        "description": "Temperatures may exceed 35°C. Stay hydrated and avoid prolonged outdoor activities during peak hours.",
        "areas": ["Tokyo Metropolitan Area", "Chiba", "Saitama"],
        "start_hours": 0,
        "end_hours": 24,
    },
    {
        "id": "osaka-thunderstorm-001",
        "type": "Thunderstorm",
        "severity": "moderate",
        "title": "Severe Thunderstorm Warning",
        "description": "Heavy rain, lightning, and strong winds expected. Avoid outdoor activities and seek shelter.",
        "areas": ["Osaka Prefecture", "Kyoto", "Nara"],
        "start_hours": 2,
        "end_hours": 8,
    },
    {
        "id": "sapporo-snow-001",
        "type": "Snow",
        "severity": "minor",
        "title": "Late Season Snow Advisory",
        "description": "Unexpected late spring snowfall possible. Roads may become slippery, drive with caution.",
        "areas": ["Sapporo City", "Hokkaido Central"],
        "start_hours": 6,
        "end_hours": 18,
    },
    {
        "id": "london-flood-001",
        "type": "Flood",
        "severity": "moderate",
        "title": "Flood Warning",
        "description": "Heavy rainfall may cause flooding in low-lying areas. Avoid driving through flooded roads.",
        "areas": ["Thames Valley", "South London", "Surrey"],
        "start_hours": 0,
        "end_hours": 6,
    },
    {
        "id": "fukuoka-typhoon-001",
        "type": "Typhoon",
        "severity": "severe",
        "title": "Typhoon Approach Warning",
        "description": "Typhoon approaching southern Japan. Prepare for strong winds, heavy rain, and possible power outages.",
        "areas": ["Fukuoka Prefecture", "Kumamoto", "Kagoshima"],
        "start_hours": 4,
        "end_hours": 20,
    },
]

# Alias -> canonical key
LOCATION_ALIASES: dict[str, str] = {
    "hong kong": "hong-kong",
    "hongkong": "hong-kong",
    "hk": "hong-kong",
    "tokyo": "tokyo",
    "tokyo japan": "tokyo",
    "osaka": "osaka",
    "osaka japan": "osaka",
    "kyoto": "kyoto",
    "kyoto japan": "kyoto",
    "hiroshima": "hiroshima",
    "hiroshima japan": "hiroshima",
    "sapporo": "sapporo",
    "sapporo japan": "sapporo",
    "fukuoka": "fukuoka",
    "fukuoka japan": "fukuoka",
    "london": "london",
    "london uk": "london",
    "new york": "new-york",
    "newyork": "new-york",
    "nyc": "new-york",
    "sydney": "sydney",
    "sydney australia": "sydney",
}

_WHITESPACE = re.compile(r"\s+")
_NON_KEY_CHARS = re.compile(r"[^a-z0-9-]")


def normalize_location(location: str) -> str:
    """Resolve free-form location text to a canonical location key.

    Aliases win; anything else is slugified (whitespace to '-', other
    characters outside [a-z0-9-] dropped). Unknown places produce a key
    that simply matches nothing in the tables.
    """
    lowered = location.lower().strip()

    if lowered in LOCATION_ALIASES:
        return LOCATION_ALIASES[lowered]

    return _NON_KEY_CHARS.sub("", _WHITESPACE.sub("-", lowered))


def search_locations_by_query(query: str) -> list[str]:
    """Case-insensitive substring search over aliases, then canonical names.

    Returns canonical display names, deduplicated in first-seen order.
    """
    needle = query.lower()
    matches: list[str] = []

    for alias, key in LOCATION_ALIASES.items():
        if needle in alias:
            record = WEATHER_DATA.get(key)
            if record and record["location"] not in matches:
                matches.append(record["location"])

    for record in WEATHER_DATA.values():
        name = record["location"]
        if needle in name.lower() and name not in matches:
            matches.append(name)

    return matches
