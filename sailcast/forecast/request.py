"""
Query parameter parsing for forecast requests.

Coordinates are validated strictly: a value that is present but malformed,
non-finite or out of range is rejected, never swapped for the default
location. Only absent or blank parameters fall back to the defaults.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from sailcast.errors import InvalidCoordinate, InvalidForecastDays

# St Kilda, Port Phillip Bay
DEFAULT_LATITUDE = -37.8676
DEFAULT_LONGITUDE = 144.9741

DEFAULT_FORECAST_DAYS = 7
MAX_FORECAST_DAYS = 16  # Open-Meteo forecast horizon


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"lat": self.latitude, "lon": self.longitude}


def _is_blank(value: Union[str, float, None]) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_component(
    name: str,
    value: Union[str, float, None],
    default: float,
    limit: float,
) -> float:
    if _is_blank(value):
        return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"{name} must be a number, got {value!r}")
    if not math.isfinite(parsed):
        raise InvalidCoordinate(f"{name} must be finite, got {value!r}")
    if abs(parsed) > limit:
        raise InvalidCoordinate(f"{name} must be between -{limit:g} and {limit:g}, got {parsed:g}")
    return parsed


def parse_coordinate(
    lat: Union[str, float, None] = None,
    lon: Union[str, float, None] = None,
    default_lat: float = DEFAULT_LATITUDE,
    default_lon: float = DEFAULT_LONGITUDE,
) -> Coordinate:
    """
    Build a Coordinate from raw ``lat``/``lon`` query values.

    Raises:
        InvalidCoordinate: A supplied value is not a finite, in-range number.
    """
    return Coordinate(
        latitude=_parse_component("lat", lat, default_lat, 90.0),
        longitude=_parse_component("lon", lon, default_lon, 180.0),
    )


def parse_forecast_days(
    days: Union[str, int, None] = None,
    default: int = DEFAULT_FORECAST_DAYS,
    maximum: int = MAX_FORECAST_DAYS,
) -> int:
    """
    Parse the forecast horizon, clamping it to what Open-Meteo serves.

    Raises:
        InvalidForecastDays: The value is not a positive integer.
    """
    if _is_blank(days):
        return min(default, maximum)
    try:
        parsed = int(str(days).strip())
    except ValueError:
        raise InvalidForecastDays(f"days must be a positive integer, got {days!r}")
    if parsed < 1:
        raise InvalidForecastDays(f"days must be a positive integer, got {parsed}")
    return min(parsed, maximum)


def resolve_request(
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    days: Optional[str] = None,
    default_lat: float = DEFAULT_LATITUDE,
    default_lon: float = DEFAULT_LONGITUDE,
    default_days: int = DEFAULT_FORECAST_DAYS,
    max_days: int = MAX_FORECAST_DAYS,
) -> tuple:
    """Parse all query parameters at once. Returns ``(Coordinate, days)``."""
    coordinate = parse_coordinate(lat, lon, default_lat, default_lon)
    return coordinate, parse_forecast_days(days, default_days, max_days)
