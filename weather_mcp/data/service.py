"""In-memory weather data provider.

``WeatherService`` answers the five lookups exposed as tools. It only reads
the static tables in ``mock_data``; unknown locations fall through to the
synthetic generator.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable

from ..core.types import (
    DailyForecast,
    LocationSummary,
    WeatherAlert,
    WeatherData,
    WeatherForecast,
    WeatherStats,
)
from .mock_data import (
    FORECAST_DATA,
    WEATHER_ALERTS,
    WEATHER_DATA,
    normalize_location,
    search_locations_by_query,
)
from .synthetic import SyntheticWeather

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def iso_timestamp(moment: datetime) -> str:
    """Render an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@runtime_checkable
class WeatherProvider(Protocol):
    """The five lookups the tool router depends on."""

    async def get_current_weather(self, location: str) -> WeatherData: ...

    async def get_weather_forecast(
        self, location: str, days: int = 3
    ) -> WeatherForecast: ...

    async def get_weather_alerts(
        self, location: str | None = None
    ) -> list[WeatherAlert]: ...

    async def search_locations(self, query: str) -> list[str]: ...

    async def get_weather_stats(self) -> WeatherStats: ...


class WeatherService:
    """Weather lookups over the static tables.

    Args:
        rng: Random source for the synthetic fallback path.
        clock: Returns the current aware datetime; used for timestamps and
            forecast dates.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.synthetic = SyntheticWeather(rng)
        self.clock = clock or utc_now

    async def get_current_weather(self, location: str) -> WeatherData:
        """Get current weather for a location.

        Unknown locations get a random table record relabelled with the
        caller's text.
        """
        key = normalize_location(location)
        timestamp = iso_timestamp(self.clock())

        record = WEATHER_DATA.get(key)
        if record:
            return WeatherData(**record, timestamp=timestamp)

        logger.debug(f"No weather record for '{location}', using synthetic data")
        return self.synthetic.random_current(location, timestamp)

    async def get_weather_forecast(self, location: str, days: int = 3) -> WeatherForecast:
        """Get up to ``days`` forecast entries for a location.

        ``days`` is not clamped: table forecasts use slice semantics and
        synthetic forecasts produce exactly ``days`` entries.
        """
        key = normalize_location(location)
        now = self.clock()

        rows = FORECAST_DATA.get(key)
        if rows:
            entries = [
                DailyForecast(
                    date=(now + timedelta(days=offset)).date().isoformat(),
                    high_temp=high,
                    low_temp=low,
                    condition=condition,
                    description=description,
                    chance_of_rain=chance_of_rain,
                    humidity=humidity,
                )
                for offset, high, low, condition, description, chance_of_rain, humidity in rows
            ]
            return WeatherForecast(
                location=WEATHER_DATA[key]["location"],
                forecast=entries[:days],
            )

        logger.debug(f"No forecast table for '{location}', generating {days} days")
        return self.synthetic.forecast(location, days, now)

    async def get_weather_alerts(self, location: str | None = None) -> list[WeatherAlert]:
        """Get alerts, optionally filtered to those covering ``location``.

        An area matches when it contains, or is contained in, either the
        canonical location name or the normalized key (case-insensitive).
        """
        now = self.clock()
        alerts = [self._render_alert(alert, now) for alert in WEATHER_ALERTS]

        if not location:
            return alerts

        key = normalize_location(location)
        record = WEATHER_DATA.get(key)
        name = (record["location"] if record else location).lower()

        def covers(area: str) -> bool:
            area = area.lower()
            return area in name or name in area or area in key or key in area

        return [alert for alert in alerts if any(covers(a) for a in alert.areas)]

    async def search_locations(self, query: str) -> list[str]:
        return search_locations_by_query(query)

    async def get_weather_stats(self) -> WeatherStats:
        """Aggregate temperature and condition statistics over all locations."""
        records = list(WEATHER_DATA.values())
        average = sum(r["temperature"] for r in records) / len(records)

        counts: dict[str, int] = {}
        for record in records:
            counts[record["condition"]] = counts.get(record["condition"], 0) + 1

        # Ties go to the condition counted last
        most_common = ""
        best = 0
        for condition, count in counts.items():
            if count >= best:
                most_common, best = condition, count

        return WeatherStats(
            total_locations=len(records),
            average_temperature=round(average, 1),
            most_common_condition=most_common,
            location_breakdown=[
                LocationSummary(
                    location=r["location"],
                    temperature=r["temperature"],
                    condition=r["condition"],
                )
                for r in records
            ],
        )

    @staticmethod
    def _render_alert(alert: dict, now: datetime) -> WeatherAlert:
        fields = {k: v for k, v in alert.items() if k not in ("start_hours", "end_hours")}
        return WeatherAlert(
            **fields,
            start_time=iso_timestamp(now + timedelta(hours=alert["start_hours"])),
            end_time=iso_timestamp(now + timedelta(hours=alert["end_hours"])),
        )
