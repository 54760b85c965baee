"""Client for the Open-Meteo historical weather service."""

from __future__ import annotations

import json
from datetime import date, timedelta
from typing import Protocol
from urllib.error import HTTPError, URLError
from urllib.request import urlopen

from .models import WeatherStats


class WeatherAPIError(Exception):
    """Raised when weather statistics cannot be fetched or decoded."""


class WeatherAPI(Protocol):
    """Something that returns hourly weather series for a location."""

    def get_weather(self, latitude: str, longitude: str, weather_tag: str) -> WeatherStats: ...


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by ``months``; a day past the month's end rolls into the next month."""
    year, month_index = divmod(day.year * 12 + day.month - 1 + months, 12)
    return date(year, month_index + 1, 1) + timedelta(days=day.day - 1)


class OpenMeteo:
    """Queries the archive endpoint for a period ending today."""

    def __init__(
        self,
        api_url: str,
        analysis_duration_in_months: int,
        today: date | None = None,
    ) -> None:
        today = today or date.today()
        self.api_url = api_url
        self.start_date = add_months(today, -analysis_duration_in_months).isoformat()
        self.end_date = today.isoformat()

    def url(self, latitude: str, longitude: str, weather_tag: str) -> str:
        """The request URL for one location and one hourly series."""
        return (
            f"{self.api_url}?latitude={latitude}&longitude={longitude}"
            f"&start_date={self.start_date}&end_date={self.end_date}&hourly={weather_tag}"
        )

    def get_weather(self, latitude: str, longitude: str, weather_tag: str) -> WeatherStats:
        """Fetch and decode one hourly series; the HTTP status is not checked."""
        url = self.url(latitude, longitude, weather_tag)
        try:
            with urlopen(url) as response:
                body = response.read()
        except HTTPError as exc:
            try:
                body = exc.read()
            except OSError as read_exc:
                raise WeatherAPIError(
                    f"error while reading weather response body: {read_exc}"
                ) from read_exc
            finally:
                exc.close()
        except (URLError, OSError) as exc:
            raise WeatherAPIError(f"error while getting weather stats: {exc}") from exc

        try:
            data = json.loads(body)
            if data is None:
                return WeatherStats()
            return WeatherStats.from_dict(data)
        except ValueError as exc:
            raise WeatherAPIError(f"error while unmarshaling weather stats: {exc}") from exc