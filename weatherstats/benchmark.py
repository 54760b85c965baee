"""Repeated timed runs and their summary statistics."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence

from .runners import Runner
from .writers import DurationWriter

logger = logging.getLogger(__name__)


def average_duration(durations: Sequence[int]) -> int:
    """Mean of durations in nanoseconds, truncated towards zero; 0 when empty."""
    if not durations:
        return 0
    total = sum(durations)
    quotient = abs(total) // len(durations)
    return quotient if total >= 0 else -quotient


def standard_deviation(durations: Sequence[int]) -> int:
    """Population standard deviation in nanoseconds, truncated; 0 when empty."""
    if not durations:
        return 0
    avg = float(average_duration(durations))
    variance = sum((float(d) - avg) ** 2 for d in durations) / len(durations)
    return int(math.sqrt(variance))


def _with_fraction(value: int, unit: int) -> str:
    whole, rest = divmod(value, unit)
    if not rest:
        return str(whole)
    digits = str(rest).rjust(len(str(unit)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(nanoseconds: int) -> str:
    """Human form of a duration, such as ``1.5ms`` or ``1h2m3.5s``."""
    ns = int(nanoseconds)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < 1_000:
        return f"{sign}{u}ns"
    if u < 1_000_000:
        return f"{sign}{_with_fraction(u, 1_000)}\u00b5s"
    if u < 1_000_000_000:
        return f"{sign}{_with_fraction(u, 1_000_000)}ms"

    minute = 60 * 1_000_000_000
    text = f"{_with_fraction(u % minute, 1_000_000_000)}s"
    total_minutes = u // minute
    if total_minutes:
        hours, minutes = divmod(total_minutes, 60)
        text = f"{minutes}m{text}"
        if hours:
            text = f"{hours}h{text}"
    return sign + text


class Benchmark:
    """Times a runner several times and writes each duration and the summary."""

    def __init__(self, mode: str, writer: DurationWriter) -> None:
        self.mode = mode
        self.writer = writer

    def _write(self, text: str) -> None:
        try:
            self.writer.write(text)
        except Exception as exc:
            raise RuntimeError(f"failed to write execution duration: {exc}") from exc

    def run(self, runner: Runner, times: int) -> list[int]:
        """Run ``times`` times; return the durations in nanoseconds."""
        durations: list[int] = []
        for number in range(1, times + 1):
            logger.info("Processing... execution_number=%d mode=%s", number, self.mode)
            start = time.perf_counter_ns()
            try:
                runner.run()
            except Exception as exc:
                raise RuntimeError(
                    f"failed to run program with execution {self.mode}: {exc}"
                ) from exc
            duration = time.perf_counter_ns() - start
            durations.append(duration)
            self._write(f"execution_{number}: {format_duration(duration)}\n")
            logger.info(
                "execution finished: execution_number=%d mode=%s duration=%s",
                number,
                self.mode,
                format_duration(duration),
            )

        self._write(f"average_execution: {format_duration(average_duration(durations))}\n")
        self._write(f"standard_deviation: {format_duration(standard_deviation(durations))}\n")
        logger.info("performance test done")
        return durations