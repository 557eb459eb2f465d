"""Synthetic weather for locations missing from the static tables.

Kept separate from the lookup path so tests can inject a seeded
``random.Random`` and assert on ranges and field presence.
"""

import random
from datetime import datetime, timedelta

from ..core.types import DailyForecast, WeatherData, WeatherForecast
from .mock_data import WEATHER_DATA

CONDITIONS = [
    "Sunny",
    "Partly Cloudy",
    "Cloudy",
    "Rainy",
    "Thunderstorms",
    "Overcast",
    "Light Rain",
]

CONDITION_DESCRIPTIONS = {
    "Sunny": "Clear skies with bright sunshine",
    "Partly Cloudy": "Mix of sun and clouds",
    "Cloudy": "Overcast skies with mild temperatures",
    "Rainy": "Rain showers expected",
    "Thunderstorms": "Thunderstorms with heavy rain",
    "Overcast": "Cloudy skies throughout the day",
    "Light Rain": "Light rain showers",
}


def _is_wet(condition: str) -> bool:
    return "Rain" in condition or "Thunder" in condition


class SyntheticWeather:
    """Random weather generator.

    Args:
        rng: Random source; a fresh unseeded ``random.Random`` by default.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def random_current(self, location: str, timestamp: str) -> WeatherData:
        """Borrow a random table record and relabel it as ``location``."""
        record = WEATHER_DATA[self.rng.choice(list(WEATHER_DATA))]
        return WeatherData(**{**record, "location": location, "timestamp": timestamp})

    def forecast(self, location: str, days: int, now: datetime) -> WeatherForecast:
        """Generate ``days`` daily entries starting tomorrow.

        No entries are produced for ``days <= 0``.
        """
        rng = self.rng
        base_temp = 20 + rng.random() * 15
        entries = []

        for offset in range(1, days + 1):
            variation = (rng.random() - 0.5) * 10
            condition = rng.choice(CONDITIONS)
            if _is_wet(condition):
                chance_of_rain = 70 + rng.random() * 30
            else:
                chance_of_rain = rng.random() * 40

            entries.append(
                DailyForecast(
                    date=(now + timedelta(days=offset)).date().isoformat(),
                    high_temp=round(base_temp + variation + 5),
                    low_temp=round(base_temp + variation - 5),
                    condition=condition,
                    description=CONDITION_DESCRIPTIONS.get(
                        condition, f"{condition} conditions expected"
                    ),
                    chance_of_rain=round(chance_of_rain),
                    humidity=round(50 + rng.random() * 40),
                )
            )

        return WeatherForecast(location=location, forecast=entries)
