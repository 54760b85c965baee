"""Command that gathers weather records for a list of cities."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from collections.abc import Sequence
from pathlib import Path

from .aggregator import Aggregator
from .benchmark import Benchmark
from .configuration import Configuration, load_config
from .consumers import Consumer, LoggingConsumer, MemoryConsumer
from .files import FileCreator
from .models import Result, ShortCityInfo, short_city_info
from .openmeteo import OpenMeteo, WeatherAPI
from .presavers import (
    HighestAverageTemperature,
    LockedPreSaver,
    MostFoggyHours,
    MostSunnyHours,
    PreSaver,
)
from .producers import ApiProducer, LoggingProducer, Producer, SemaphoreProducer
from .reader import SourceFileError, read_cities
from .runners import (
    MultiConsumerRunner,
    Runner,
    SequentialRunner,
    SingleConsumerRunner,
    WorkerPoolRunner,
)
from .writers import DurationWriter, LoggingResultWriter, ResultWriter, ResultsWriter

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = "./config"
_SINGLE_CONSUMER_MODES = ("mode_1", "mode_2")


class UnknownModeError(ValueError):
    """Raised when the configured execution mode is not recognised."""


def _pre_savers(mode: str) -> list[PreSaver]:
    savers: list[PreSaver] = [HighestAverageTemperature(), MostSunnyHours(), MostFoggyHours()]
    if mode in _SINGLE_CONSUMER_MODES:
        return savers
    return [LockedPreSaver(saver) for saver in savers]


def _build_runner(
    cfg: Configuration,
    producer: Producer,
    consumer: Consumer,
    cities: list[ShortCityInfo],
) -> Runner:
    mode = cfg.mode
    if mode == "mode_1":
        return SequentialRunner(producer, consumer, cities)
    if mode == "mode_2":
        return SingleConsumerRunner(producer, consumer, cities)
    if mode == "mode_3":
        return MultiConsumerRunner(producer, consumer, cities, cfg.consumer_number)
    if mode in ("mode_4", "mode_5"):
        if mode == "mode_5":
            if cfg.max_working_producers < 1:
                raise ValueError(
                    "max_working_producers must be at least 1, "
                    f"got {cfg.max_working_producers}"
                )
            producer = SemaphoreProducer(
                producer, threading.Semaphore(cfg.max_working_producers)
            )
        return WorkerPoolRunner(
            producer, consumer, cities, cfg.consumer_number, cfg.producer_number
        )
    raise UnknownModeError(f"unknown execution: {mode}")


def run(cfg: Configuration, api: WeatherAPI | None = None) -> dict[str, Result] | None:
    """Process every city as configured.

    Returns the records written to the result file, or ``None`` for a
    performance test, whose durations go to the test file instead.
    """
    if api is None:
        if cfg.mock_api:
            raise ValueError("a mock weather API was requested but none was supplied")
        api = OpenMeteo(cfg.api_url, cfg.analysis_duration_in_months)

    producer: Producer = ApiProducer(api)
    if cfg.log_produced_msg:
        producer = LoggingProducer(producer)

    # Imported lazily to keep the saver module free of CLI concerns.
    from .saver import MemorySaver

    saver = MemorySaver(_pre_savers(cfg.mode))
    consumer: Consumer = MemoryConsumer(Aggregator(), saver)
    if cfg.log_consumed_msg:
        consumer = LoggingConsumer(consumer)

    source = Path(cfg.files_dir_name) / cfg.source_file_name
    try:
        cities = [short_city_info(city) for city in read_cities(source)]
    except SourceFileError as exc:
        raise SourceFileError(
            f"error during reading source file {cfg.source_file_name}: {exc}"
        ) from exc

    creator = FileCreator.for_tests(cfg) if cfg.performance_test else FileCreator.for_results(cfg)
    with creator.create() as out:
        runner = _build_runner(cfg, producer, consumer, cities)

        if cfg.performance_test:
            Benchmark(cfg.mode, DurationWriter(out)).run(runner, cfg.execution_repeat_count)
            return None

        runner.run()
        results = saver.results()

        writer: ResultsWriter = ResultWriter(out)
        if cfg.log_results:
            writer = LoggingResultWriter(writer)
        writer.write(results)
        return results


def main(argv: Sequence[str] | None = None) -> int:
    """Load the configuration profile and run; return the exit status."""
    parser = argparse.ArgumentParser(prog="weatherstats")
    parser.add_argument("-profile", "--profile", default="", help="config name to load from")
    parser.add_argument(
        "-config-dir",
        "--config-dir",
        default=DEFAULT_CONFIG_DIR,
        help="directory holding the JSON config profiles",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    cfg = load_config(args.config_dir, args.profile or None)
    print(cfg.pretty(), file=sys.stderr)

    try:
        run(cfg)
    except Exception as exc:
        logger.error("error running app: %s", exc)
        return 1
    return 0