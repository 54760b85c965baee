"""Strategies for moving cities through producers and consumers."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Protocol

from .consumers import Consumer
from .models import ShortCityInfo, WeatherMsg
from .producers import Producer

logger = logging.getLogger(__name__)

_DONE = object()


class Runner(Protocol):
    """Processes every configured city once."""

    def run(self) -> None: ...


def _produce_each(producer: Producer, cities: Iterable[ShortCityInfo]) -> Iterator[WeatherMsg]:
    """Yield a message per city; cities whose production fails are logged and skipped."""
    for city in cities:
        try:
            yield producer.produce(city)
        except Exception as exc:
            logger.error("error during producing msg: %s", exc)


def _consume_queue(consumer: Consumer, messages: queue.Queue) -> None:
    while (msg := messages.get()) is not _DONE:
        consumer.consume(msg)


class _Workers:
    """Threads whose first failure is raised again once all have finished."""

    def __init__(self) -> None:
        self._threads: list[threading.Thread] = []
        self._errors: list[BaseException] = []
        self._lock = threading.Lock()

    def start(self, target: Callable[..., Any], *args: Any) -> None:
        def guarded() -> None:
            try:
                target(*args)
            except BaseException as exc:
                with self._lock:
                    self._errors.append(exc)

        thread = threading.Thread(target=guarded, daemon=True)
        self._threads.append(thread)
        thread.start()

    def join(self) -> None:
        for thread in self._threads:
            thread.join()
        self._threads.clear()

    def raise_first(self) -> None:
        if self._errors:
            raise self._errors[0]


def _check_count(name: str, value: int) -> int:
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


class SequentialRunner:
    """Produces and consumes each city in turn on the calling thread."""

    def __init__(
        self, producer: Producer, consumer: Consumer, cities: Sequence[ShortCityInfo]
    ) -> None:
        self._producer = producer
        self._consumer = consumer
        self._cities = tuple(cities)

    def run(self) -> None:
        for msg in _produce_each(self._producer, self._cities):
            self._consumer.consume(msg)


class MultiConsumerRunner:
    """One producer thread feeding a number of consumer threads."""

    def __init__(
        self,
        producer: Producer,
        consumer: Consumer,
        cities: Sequence[ShortCityInfo],
        consumer_number: int,
    ) -> None:
        self._producer = producer
        self._consumer = consumer
        self._cities = tuple(cities)
        self._consumer_number = _check_count("consumer_number", consumer_number)

    def _produce(self, messages: queue.Queue) -> None:
        try:
            for msg in _produce_each(self._producer, self._cities):
                messages.put(msg)
        finally:
            for _ in range(self._consumer_number):
                messages.put(_DONE)

    def run(self) -> None:
        messages: queue.Queue = queue.Queue()
        workers = _Workers()
        for _ in range(self._consumer_number):
            workers.start(_consume_queue, self._consumer, messages)
        workers.start(self._produce, messages)
        workers.join()
        workers.raise_first()


class SingleConsumerRunner(MultiConsumerRunner):
    """One producer thread feeding one consumer thread; order is kept."""

    def __init__(
        self, producer: Producer, consumer: Consumer, cities: Sequence[ShortCityInfo]
    ) -> None:
        super().__init__(producer, consumer, cities, 1)

    def run(self) -> None:
        super().run()


class WorkerPoolRunner:
    """A pool of producer threads taking cities and a pool of consumer threads."""

    def __init__(
        self,
        producer: Producer,
        consumer: Consumer,
        cities: Sequence[ShortCityInfo],
        consumer_number: int,
        producer_number: int,
    ) -> None:
        self._producer = producer
        self._consumer = consumer
        self._cities = tuple(cities)
        self._consumer_number = _check_count("consumer_number", consumer_number)
        self._producer_number = _check_count("producer_number", producer_number)

    def _cities_from(self, cities: queue.Queue) -> Iterator[ShortCityInfo]:
        while (city := cities.get()) is not _DONE:
            yield city

    def _produce(self, cities: queue.Queue, messages: queue.Queue) -> None:
        for msg in _produce_each(self._producer, self._cities_from(cities)):
            messages.put(msg)

    def run(self) -> None:
        cities: queue.Queue = queue.Queue()
        messages: queue.Queue = queue.Queue()
        for city in self._cities:
            cities.put(city)
        for _ in range(self._producer_number):
            cities.put(_DONE)

        consumers = _Workers()
        for _ in range(self._consumer_number):
            consumers.start(_consume_queue, self._consumer, messages)

        producers = _Workers()
        for _ in range(self._producer_number):
            producers.start(self._produce, cities, messages)
        producers.join()

        for _ in range(self._consumer_number):
            messages.put(_DONE)
        consumers.join()

        producers.raise_first()
        consumers.raise_first()