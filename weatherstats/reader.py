"""Reads the list of cities to analyse from a JSON file."""

from __future__ import annotations

import json
from pathlib import Path

from .models import CityInfo


class SourceFileError(Exception):
    """Raised when the city source file cannot be read or decoded."""


def read_cities(path: str | Path) -> list[CityInfo]:
    """Decode a JSON array of city records."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise SourceFileError(f"failed to open file: {exc}") from exc

    try:
        data = json.loads(raw)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        return [CityInfo() if item is None else CityInfo.from_dict(item) for item in data]
    except ValueError as exc:
        raise SourceFileError(f"failed to unmarshal file: {exc}") from exc