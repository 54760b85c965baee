"""Application settings and how they are loaded from JSON profiles."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "dev"
CONFIG_EXTENSION = ".json"


def _key(name: str) -> Any:
    return field(metadata={"key": name})


@dataclass
class Configuration:
    """Settings for one run; JSON keys use the names given in metadata."""

    source_file_name: str = field(default="", metadata={"key": "SourceFileName"})
    api_url: str = field(default="", metadata={"key": "APIURL"})
    log_produced_msg: bool = field(default=False, metadata={"key": "LogProducedMsg"})
    log_consumed_msg: bool = field(default=False, metadata={"key": "LogConsumedMsg"})
    log_results: bool = field(default=False, metadata={"key": "LogResults"})
    analysis_duration_in_months: int = field(
        default=0, metadata={"key": "AnalysisDurationInMonths"}
    )
    mode: str = field(default="", metadata={"key": "Mode"})
    mock_api: bool = field(default=False, metadata={"key": "MockAPI"})
    execution_repeat_count: int = field(default=0, metadata={"key": "ExecutionRepeatCount"})
    performance_test: bool = field(default=False, metadata={"key": "PerformanceTest"})
    files_dir_name: str = field(default="", metadata={"key": "FilesDirName"})
    consumer_number: int = field(default=0, metadata={"key": "ConsumerNumber"})
    producer_number: int = field(default=0, metadata={"key": "ProducerNumber"})
    max_working_producers: int = field(default=0, metadata={"key": "MaxWorkingProducers"})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Configuration:
        """Build from a decoded JSON object; keys match case-insensitively."""
        if not isinstance(data, Mapping):
            raise ValueError(f"configuration must be a JSON object, got {type(data).__name__}")
        lowered = {k.lower(): v for k, v in data.items() if isinstance(k, str)}
        values: dict[str, Any] = {}
        for f in fields(cls):
            key = f.metadata["key"]
            value = data[key] if key in data else lowered.get(key.lower())
            if value is None:
                continue
            expected = type(f.default)
            if expected is bool:
                valid = isinstance(value, bool)
            elif expected is int:
                valid = isinstance(value, int) and not isinstance(value, bool)
            else:
                valid = isinstance(value, str)
            if not valid:
                raise ValueError(
                    f"{key} must be of type {expected.__name__}, got {type(value).__name__}"
                )
            values[f.name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Settings keyed by their JSON names, in declaration order."""
        return {f.metadata["key"]: getattr(self, f.name) for f in fields(self)}

    def pretty(self) -> str:
        """Indented JSON form of the settings."""
        text = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        for char, escape in (
            ("&", "\\u0026"),
            ("<", "\\u003c"),
            (">", "\\u003e"),
            ("\u2028", "\\u2028"),
            ("\u2029", "\\u2029"),
        ):
            text = text.replace(char, escape)
        return text


def load_config(base_path: str | Path, profile: str | None = None) -> Configuration:
    """Load ``<base_path>/<profile>.json``; on failure log it and return defaults."""
    name = profile or DEFAULT_PROFILE
    path = Path(base_path) / f"{name}{CONFIG_EXTENSION}"
    try:
        with path.open(encoding="utf-8") as fh:
            return Configuration.from_dict(json.load(fh))
    except (OSError, ValueError) as exc:
        logger.error("could not get config file: %s", exc)
        return Configuration()