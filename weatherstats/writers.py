"""Writers for the result records and for benchmark durations."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol, TextIO

from .models import Result

logger = logging.getLogger(__name__)

_HTML_ESCAPES = (("&", "\\u0026"), ("<", "\\u003c"), (">", "\\u003e"))


class ResultsWriter(Protocol):
    """Stores the records found by the run."""

    def write(self, results: Mapping[str, Result]) -> None: ...


def _number(value: Any) -> Any:
    # Whole floats are written without a fractional part.
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def _encodable(result: Result) -> dict[str, Any]:
    return {key: _number(value) for key, value in result.to_dict().items()}


class ResultWriter:
    """Writes the records as one compact JSON object with sorted keys."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, results: Mapping[str, Result]) -> None:
        payload = {name: _encodable(result) for name, result in results.items()}
        try:
            text = json.dumps(
                payload,
                sort_keys=True,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"failed marshaling result: {exc}") from exc
        for char, escape in _HTML_ESCAPES:
            text = text.replace(char, escape)
        self._stream.write(text)


class LoggingResultWriter:
    """Passes records to another writer and logs them once written."""

    def __init__(self, writer: ResultsWriter) -> None:
        self._writer = writer

    def write(self, results: Mapping[str, Result]) -> None:
        self._writer.write(results)
        logger.info("result successfully written: %s", dict(results))


class DurationWriter:
    """Appends benchmark lines to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, text: str) -> None:
        self._stream.write(text)