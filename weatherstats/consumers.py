"""Consumers turn weather messages into saved city results."""

from __future__ import annotations

import logging
from typing import Protocol

from .aggregator import WeatherAggregator
from .models import CityResult, WeatherMsg
from .saver import MemorySaver

logger = logging.getLogger(__name__)

FOG_WEATHER_CODE = 45
SUNNY_WEATHER_CODE = 0


class Consumer(Protocol):
    """Accepts weather messages."""

    def consume(self, msg: WeatherMsg) -> None: ...


class MemoryConsumer:
    """Aggregates each message and hands the result to a saver."""

    def __init__(self, aggregator: WeatherAggregator, saver: MemorySaver) -> None:
        self._aggregator = aggregator
        self._saver = saver

    def consume(self, msg: WeatherMsg) -> None:
        self._saver.save(
            CityResult(
                name=msg.city_name,
                foggy_hours_count=self._aggregator.count_weather_code(msg, FOG_WEATHER_CODE),
                temp_average=self._aggregator.average_temperature(msg),
                sunny_hours_count=self._aggregator.count_weather_code(msg, SUNNY_WEATHER_CODE),
            )
        )


class LoggingConsumer:
    """Passes messages on to another consumer and logs each one."""

    def __init__(self, consumer: Consumer) -> None:
        self._consumer = consumer

    def consume(self, msg: WeatherMsg) -> None:
        self._consumer.consume(msg)
        logger.info("consumed msg: cityName=%s", msg.city_name)