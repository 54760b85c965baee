"""Record keepers that track which city holds each weather record."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from .models import CityResult, Result


class PreSaver(ABC):
    """Tracks one record across the city results it is shown."""

    name: str

    @abstractmethod
    def save(self, city_result: CityResult) -> None:
        """Take one city's result into account."""

    @abstractmethod
    def result(self) -> Result:
        """The city holding the record and its value."""


class HighestAverageTemperature(PreSaver):
    """The city with the highest average temperature."""

    name = "highest_avg_temp"

    def __init__(self) -> None:
        self.highest_avg_temp: float | None = None
        self.city_name = ""

    def save(self, city_result: CityResult) -> None:
        if self.highest_avg_temp is None or city_result.temp_average > self.highest_avg_temp:
            self.highest_avg_temp = city_result.temp_average
            self.city_name = city_result.name

    def result(self) -> Result:
        if self.highest_avg_temp is None:
            raise ValueError("no city result has been saved")
        return Result(city_name=self.city_name, value=self.highest_avg_temp)


class _MostHours(PreSaver):
    """The city with the largest hour count; ties keep the first city."""

    def __init__(self) -> None:
        self.hours = 0
        self.city_name = ""

    def _record(self, city_name: str, hours: int) -> None:
        if hours > self.hours:
            self.hours = hours
            self.city_name = city_name

    def _current(self) -> Result:
        return Result(city_name=self.city_name, value=self.hours)


class MostFoggyHours(_MostHours):
    """The city with the most hours of fog."""

    name = "hours_with_fog"

    def save(self, city_result: CityResult) -> None:
        self._record(city_result.name, city_result.foggy_hours_count)

    def result(self) -> Result:
        return self._current()


class MostSunnyHours(_MostHours):
    """The city with the most hours of full sun."""

    name = "hours_with_full_sun"

    def save(self, city_result: CityResult) -> None:
        self._record(city_result.name, city_result.sunny_hours_count)

    def result(self) -> Result:
        return self._current()


class LockedPreSaver(PreSaver):
    """Wraps a pre-saver so that saves from several threads are serialised."""

    def __init__(self, pre_saver: PreSaver) -> None:
        self._pre_saver = pre_saver
        self._lock = threading.Lock()

    @property
    def name(self) -> str:  # type: ignore[override]
        return self._pre_saver.name

    def save(self, city_result: CityResult) -> None:
        with self._lock:
            self._pre_saver.save(city_result)

    def result(self) -> Result:
        return self._pre_saver.result()