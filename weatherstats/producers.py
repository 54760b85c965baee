"""Producers turn a city into a weather message."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from .models import ShortCityInfo, WeatherMsg, WeatherStats
from .openmeteo import WeatherAPI

logger = logging.getLogger(__name__)

WEATHER_CODE_TAG = "weathercode"
TEMPERATURE_TAG = "temperature_2m"


class ProduceError(Exception):
    """Raised when a weather message cannot be produced."""


class Producer(Protocol):
    """Builds a weather message for a city."""

    def produce(self, city: ShortCityInfo) -> WeatherMsg: ...


class ApiProducer:
    """Fetches weather codes and temperatures for a city from a weather API."""

    def __init__(self, api: WeatherAPI) -> None:
        self._api = api

    def _fetch(self, city: ShortCityInfo, tag: str) -> WeatherStats:
        try:
            return self._api.get_weather(city.latitude, city.longitude, tag)
        except Exception as exc:
            raise ProduceError(f"error while getting weather: {exc}") from exc

    def produce(self, city: ShortCityInfo) -> WeatherMsg:
        codes = self._fetch(city, WEATHER_CODE_TAG).weather_codes
        temperatures = self._fetch(city, TEMPERATURE_TAG).temperature_2m
        return WeatherMsg(city_name=city.name, weather_codes=codes, temperatures=temperatures)


class LoggingProducer:
    """Passes cities to another producer and logs each message produced."""

    def __init__(self, producer: Producer) -> None:
        self._producer = producer

    def produce(self, city: ShortCityInfo) -> WeatherMsg:
        try:
            msg = self._producer.produce(city)
        except Exception as exc:
            raise ProduceError(f"failed to produce weather msg: {exc}") from exc
        logger.info("produced msg: cityName=%s", msg.city_name)
        return msg


class SemaphoreProducer:
    """Limits how many calls to the wrapped producer run at once."""

    def __init__(self, producer: Producer, semaphore: threading.Semaphore) -> None:
        self._producer = producer
        self._semaphore = semaphore

    def produce(self, city: ShortCityInfo) -> WeatherMsg:
        with self._semaphore:
            try:
                return self._producer.produce(city)
            except Exception as exc:
                raise ProduceError(f"error while producing weather msg: {exc}") from exc