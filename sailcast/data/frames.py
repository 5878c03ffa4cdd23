"""
Raw Open-Meteo response frames.

Open-Meteo returns columnar JSON: one ``time`` array plus one array per
requested variable, all indexed by the same position. These dataclasses pull
the arrays we use out of the response and check that they line up.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional


class FrameError(ValueError):
    """Raised when a response block is missing or its arrays do not line up."""
    pass


def _block(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    block = payload.get(key) if isinstance(payload, dict) else None
    if not isinstance(block, dict):
        raise FrameError(f"Response has no '{key}' block")
    times = block.get("time")
    if not isinstance(times, list) or not times:
        raise FrameError(f"Response '{key}' block has no time series")
    if not all(isinstance(t, str) for t in times):
        raise FrameError(f"Response '{key}' time series is not ISO-8601 strings")
    return block


def _series(
    block: Dict[str, Any],
    names: tuple,
    length: int,
    required: bool = True,
) -> Optional[List[Optional[float]]]:
    """
    Return the first array found under any of ``names``.

    Open-Meteo renamed some variables over time (``weathercode`` became
    ``weather_code``), so a variable may be listed under several names.
    """
    for name in names:
        values = block.get(name)
        if values is None:
            continue
        if not isinstance(values, list) or len(values) != length:
            raise FrameError(
                f"Series '{name}' has {len(values) if isinstance(values, list) else 'no'} "
                f"values, expected {length}"
            )
        return values
    if required:
        raise FrameError(f"Series '{names[0]}' missing from response")
    return None


@dataclass(frozen=True)
class HourlyFrame:
    """Primary provider hourly arrays, all the same length as ``time``."""
    time: List[str]
    temperature: List[Optional[float]]
    wind_speed: List[Optional[float]]
    wind_direction: List[Optional[float]]
    wind_gusts: List[Optional[float]]
    precipitation: List[Optional[float]]
    cloud_cover: List[Optional[float]]
    weather_code: Optional[List[Optional[float]]] = None

    def __len__(self) -> int:
        return len(self.time)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "HourlyFrame":
        block = _block(payload, "hourly")
        n = len(block["time"])
        for stamp in block["time"]:
            if len(stamp) < 13 or not stamp[11:13].isdigit():
                raise FrameError(f"Hourly timestamp {stamp!r} has no hour component")
        return cls(
            time=list(block["time"]),
            temperature=_series(block, ("temperature_2m",), n),
            wind_speed=_series(block, ("wind_speed_10m", "windspeed_10m"), n),
            wind_direction=_series(block, ("wind_direction_10m", "winddirection_10m"), n),
            wind_gusts=_series(block, ("wind_gusts_10m", "windgusts_10m"), n),
            precipitation=_series(block, ("precipitation",), n),
            cloud_cover=_series(block, ("cloud_cover", "cloudcover"), n),
            weather_code=_series(block, ("weather_code", "weathercode"), n, required=False),
        )


@dataclass(frozen=True)
class DailyFrame:
    """Primary provider daily arrays, one entry per forecast date."""
    time: List[str]
    temperature_max: List[Optional[float]]
    temperature_min: List[Optional[float]]
    precipitation_sum: List[Optional[float]]

    def __len__(self) -> int:
        return len(self.time)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "DailyFrame":
        block = _block(payload, "daily")
        n = len(block["time"])
        for stamp in block["time"]:
            try:
                date.fromisoformat(stamp[:10])
            except ValueError:
                raise FrameError(f"Daily date {stamp!r} is not an ISO-8601 date")
        return cls(
            time=list(block["time"]),
            temperature_max=_series(block, ("temperature_2m_max",), n),
            temperature_min=_series(block, ("temperature_2m_min",), n),
            precipitation_sum=_series(block, ("precipitation_sum",), n),
        )


@dataclass(frozen=True)
class MarineFrame:
    """Marine provider hourly wave arrays, aligned to their own ``time``."""
    time: List[str]
    wave_height: Optional[List[Optional[float]]]
    wave_period: Optional[List[Optional[float]]]
    wave_direction: Optional[List[Optional[float]]]

    def __len__(self) -> int:
        return len(self.time)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "MarineFrame":
        block = _block(payload, "hourly")
        n = len(block["time"])
        return cls(
            time=list(block["time"]),
            wave_height=_series(block, ("wave_height",), n, required=False),
            wave_period=_series(block, ("wave_period",), n, required=False),
            wave_direction=_series(block, ("wave_direction",), n, required=False),
        )
