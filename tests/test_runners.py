import logging
import threading

import pytest

from weatherstats.models import ShortCityInfo, WeatherMsg
from weatherstats.producers import ProduceError
from weatherstats.runners import (
    MultiConsumerRunner,
    SequentialRunner,
    SingleConsumerRunner,
    WorkerPoolRunner,
)

NAMES = [f"city{i}" for i in range(20)]
CITIES = [ShortCityInfo(name=n, latitude="1.0", longitude="2.0") for n in NAMES]


class FakeProducer:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.lock = threading.Lock()
        self.calls = []

    def produce(self, city):
        with self.lock:
            self.calls.append(city.name)
        if city.name in self.failing:
            raise ProduceError(f"cannot produce {city.name}")
        return WeatherMsg(city_name=city.name, weather_codes=[0], temperatures=[1.0])


class RecordingConsumer:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.lock = threading.Lock()
        self.names = []

    def consume(self, msg):
        if msg.city_name in self.failing:
            raise RuntimeError(f"cannot consume {msg.city_name}")
        with self.lock:
            self.names.append(msg.city_name)


def make_runners(producer, consumer, cities=CITIES):
    return [
        SequentialRunner(producer, consumer, cities),
        SingleConsumerRunner(producer, consumer, cities),
        MultiConsumerRunner(producer, consumer, cities, 3),
        WorkerPoolRunner(producer, consumer, cities, 3, 4),
    ]


@pytest.mark.parametrize("index", range(4))
def test_every_city_is_consumed_once(index):
    producer = FakeProducer()
    consumer = RecordingConsumer()
    make_runners(producer, consumer)[index].run()
    assert sorted(consumer.names) == sorted(NAMES)
    assert sorted(producer.calls) == sorted(NAMES)


@pytest.mark.parametrize("index", range(4))
def test_failed_productions_are_skipped(index, caplog):
    producer = FakeProducer(failing={"city3", "city7"})
    consumer = RecordingConsumer()
    with caplog.at_level(logging.ERROR, logger="weatherstats.runners"):
        make_runners(producer, consumer)[index].run()
    expected = sorted(n for n in NAMES if n not in {"city3", "city7"})
    assert sorted(consumer.names) == expected
    assert sum("error during producing msg" in r.getMessage() for r in caplog.records) == 2


@pytest.mark.parametrize("index", range(4))
def test_empty_city_list(index):
    consumer = RecordingConsumer()
    make_runners(FakeProducer(), consumer, cities=[])[index].run()
    assert consumer.names == []


def test_sequential_keeps_order():
    consumer = RecordingConsumer()
    SequentialRunner(FakeProducer(), consumer, CITIES).run()
    assert consumer.names == NAMES


def test_single_consumer_keeps_order():
    consumer = RecordingConsumer()
    SingleConsumerRunner(FakeProducer(), consumer, CITIES).run()
    assert consumer.names == NAMES


def test_runner_can_run_twice():
    consumer = RecordingConsumer()
    runner = WorkerPoolRunner(FakeProducer(), consumer, CITIES, 2, 2)
    runner.run()
    runner.run()
    assert sorted(consumer.names) == sorted(NAMES * 2)


@pytest.mark.parametrize("index", range(4))
def test_consumer_error_is_raised(index):
    consumer = RecordingConsumer(failing={"city5"})
    runner = make_runners(FakeProducer(), consumer)[index]
    with pytest.raises(RuntimeError, match="cannot consume city5"):
        runner.run()


def test_invalid_consumer_number():
    with pytest.raises(ValueError):
        MultiConsumerRunner(FakeProducer(), RecordingConsumer(), CITIES, 0)


def test_invalid_producer_number():
    with pytest.raises(ValueError):
        WorkerPoolRunner(FakeProducer(), RecordingConsumer(), CITIES, 1, 0)