"""Feeds city results to a set of pre-savers and collects their records."""

from __future__ import annotations

from collections.abc import Iterable

from .models import CityResult, Result
from .presavers import PreSaver


class MemorySaver:
    """Holds the records in memory, one per pre-saver."""

    def __init__(self, pre_savers: Iterable[PreSaver]) -> None:
        self._pre_savers = tuple(pre_savers)

    def save(self, city_result: CityResult) -> None:
        """Pass one city's result to every pre-saver."""
        for pre_saver in self._pre_savers:
            pre_saver.save(city_result)

    def results(self) -> dict[str, Result]:
        """Each pre-saver's record, keyed by its name."""
        return {pre_saver.name: pre_saver.result() for pre_saver in self._pre_savers}