"""Data types shared across the weather statistics pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Return ``data[key]``, falling back to a case-insensitive match."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if isinstance(name, str) and name.lower() == lowered:
            return value
    return None


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class CityInfo:
    """A city record as found in the source file."""

    city: str = ""
    lat: str = ""
    lng: str = ""
    country: str = ""
    iso2: str = ""
    admin_name: str = ""
    capital: str = ""
    population: str = ""
    population_proper: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CityInfo:
        """Build a record from a decoded JSON object; every value must be a string."""
        data = _require_mapping(data, "city record")
        values: dict[str, str] = {}
        for f in fields(cls):
            value = _lookup(data, f.name)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(
                    f"field {f.name!r} must be a string, got {type(value).__name__}"
                )
            values[f.name] = value
        return cls(**values)


@dataclass(frozen=True)
class ShortCityInfo:
    """The part of a city record needed to query the weather."""

    name: str
    latitude: str
    longitude: str


@dataclass(frozen=True)
class CityResult:
    """Aggregated weather figures for one city."""

    name: str
    foggy_hours_count: int = 0
    temp_average: float = 0.0
    sunny_hours_count: int = 0


@dataclass
class WeatherStats:
    """Hourly series returned by the weather service."""

    weather_codes: list[int] = field(default_factory=list)
    temperature_2m: list[float] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WeatherStats:
        """Build from a decoded response holding an ``hourly`` object."""
        data = _require_mapping(data, "weather response")
        hourly = _lookup(data, "hourly")
        if hourly is None:
            return cls()
        hourly = _require_mapping(hourly, "hourly")

        codes = _lookup(hourly, "weathercode") or []
        temps = _lookup(hourly, "temperature_2m") or []
        if not isinstance(codes, list) or not isinstance(temps, list):
            raise ValueError("hourly series must be JSON arrays")
        for code in codes:
            if isinstance(code, bool) or not isinstance(code, int):
                raise ValueError(f"weather code must be an integer, got {code!r}")
        for temp in temps:
            if isinstance(temp, bool) or not isinstance(temp, (int, float)):
                raise ValueError(f"temperature must be a number, got {temp!r}")
        return cls(weather_codes=list(codes), temperature_2m=[float(t) for t in temps])


@dataclass
class WeatherMsg:
    """Weather series for one city, passed from producers to consumers."""

    city_name: str = ""
    weather_codes: list[int] = field(default_factory=list)
    temperatures: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class Result:
    """The city that holds a record and the record's value."""

    city_name: str = ""
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        """JSON form; an empty city name or a missing value is left out."""
        out: dict[str, Any] = {}
        if self.city_name:
            out["city_name"] = self.city_name
        if self.value is not None:
            out["value"] = self.value
        return out


def short_city_info(city: CityInfo) -> ShortCityInfo:
    """Reduce a full city record to its name and coordinates."""
    return ShortCityInfo(name=city.city, latitude=city.lat, longitude=city.lng)