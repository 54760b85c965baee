"""Reduce a city's hourly weather series to summary figures."""

from __future__ import annotations

from typing import Protocol

from .models import WeatherMsg


class WeatherAggregator(Protocol):
    """Computes summary figures from a weather message."""

    def average_temperature(self, msg: WeatherMsg) -> float: ...

    def count_weather_code(self, msg: WeatherMsg, weather_code: int) -> int: ...


class Aggregator:
    """Straightforward in-memory aggregator."""

    def count_weather_code(self, msg: WeatherMsg, weather_code: int) -> int:
        """Number of hours whose weather code equals ``weather_code``."""
        return sum(1 for code in msg.weather_codes if code == weather_code)

    def average_temperature(self, msg: WeatherMsg) -> float:
        """Mean of the hourly temperatures, or 0 when there are none."""
        temperatures = msg.temperatures
        if not temperatures:
            return 0.0
        return sum(temperatures) / len(temperatures)