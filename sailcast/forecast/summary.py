"""
Day-grouped forecast summaries.

Hourly records are grouped by calendar date and trimmed to sailing hours
(05:00-22:00). Descriptive fields (wind range, sky, rain) only look at the
daylight window (08:00-18:00).
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from sailcast.data.frames import DailyFrame, HourlyFrame
from sailcast.forecast.waves import kph_to_kts, round_half_up, round_half_up_tenths

logger = logging.getLogger(__name__)

OPERATING_HOURS = (5, 22)
DAYLIGHT_HOURS = (8, 18)

THUNDERSTORM_CODE = 95  # WMO 95-99: thunderstorm, with or without hail

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class HourRecord:
    """One merged hour of forecast, keyed the way the front-end reads it."""
    h: int          # hour of day
    t: int          # temperature (C)
    ws: int         # wind speed (km/h)
    wd: int         # wind direction (deg)
    gs: int         # gust speed (km/h)
    pr: float       # precipitation (mm)
    cl: int         # cloud cover (%)
    wv: float       # wave height (m)
    wp: int         # wave period (s)
    ts: bool        # thunderstorm

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DaySummary:
    date: str
    label: str
    temp_max: Optional[int]
    temp_min: Optional[int]
    precip_sum: float
    wind_desc: str
    summary: str
    hours: List[HourRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "label": self.label,
            "tempMax": self.temp_max,
            "tempMin": self.temp_min,
            "precipSum": self.precip_sum,
            "windDesc": self.wind_desc,
            "summary": self.summary,
            "hours": [h.to_dict() for h in self.hours],
        }


def _in_window(hour: int, window: Tuple[int, int]) -> bool:
    return window[0] <= hour <= window[1]


def _daylight(hours: Sequence[HourRecord]) -> List[HourRecord]:
    return [r for r in hours if _in_window(r.h, DAYLIGHT_HOURS)]


def compass_point(degrees: float) -> str:
    """Map a bearing in degrees to one of 16 compass points (22.5 deg sectors)."""
    return COMPASS_POINTS[round_half_up(degrees / 22.5) % 16]


def is_thunderstorm(weather_code: Optional[float]) -> bool:
    return weather_code is not None and weather_code >= THUNDERSTORM_CODE


def describe_wind(hours: Sequence[HourRecord]) -> str:
    """
    Wind range over daylight hours, e.g. ``"SW 10–15 kts"``.

    The direction is taken from the middle daylight record.
    """
    day = _daylight(hours)
    if not day:
        return ""
    speeds = [r.ws for r in day]
    low = round_half_up(kph_to_kts(min(speeds)))
    high = round_half_up(kph_to_kts(max(speeds)))
    direction = compass_point(day[len(day) // 2].wd)
    return f"{direction} {low}–{high} kts"


def describe_sky(mean_cloud_cover: float) -> str:
    if mean_cloud_cover > 75:
        return "Cloudy"
    if mean_cloud_cover > 50:
        return "Mostly cloudy"
    if mean_cloud_cover > 25:
        return "Partly cloudy"
    return "Sunny"


def describe_rain(precip_sum: Optional[float]) -> str:
    precip = precip_sum or 0
    if precip > 10:
        return " Heavy rain."
    if precip > 5:
        return " Rain likely."
    if precip > 2:
        return " Showers likely."
    if precip > 0.5:
        return " Chance of showers."
    return ""


def summarize_day(hours: Sequence[HourRecord], precip_sum: Optional[float]) -> str:
    """Sky condition from daylight cloud cover plus a rain clause, e.g. ``"Cloudy. Rain likely."``."""
    day = _daylight(hours)
    if not day:
        return ""
    mean_cloud = sum(r.cl for r in day) / len(day)
    return describe_sky(mean_cloud) + "." + describe_rain(precip_sum)


def day_label(date_str: str, index: int) -> str:
    if index == 0:
        return "Today"
    if index == 1:
        return "Tomorrow"
    d = date.fromisoformat(date_str[:10])
    return f"{WEEKDAYS[d.weekday()]} {d.day}/{d.month}"


def _int_or_zero(value: Optional[float]) -> int:
    return round_half_up(value) if value is not None else 0


def _int_or_none(value: Optional[float]) -> Optional[int]:
    return round_half_up(value) if value is not None else None


def build_hour_record(
    hourly: HourlyFrame,
    index: int,
    wave: Tuple[float, int],
) -> HourRecord:
    code = hourly.weather_code[index] if hourly.weather_code is not None else None
    return HourRecord(
        h=int(hourly.time[index][11:13]),
        t=_int_or_zero(hourly.temperature[index]),
        ws=_int_or_zero(hourly.wind_speed[index]),
        wd=_int_or_zero(hourly.wind_direction[index]),
        gs=_int_or_zero(hourly.wind_gusts[index]),
        pr=round_half_up_tenths(hourly.precipitation[index] or 0),
        cl=_int_or_zero(hourly.cloud_cover[index]),
        wv=wave[0],
        wp=wave[1],
        ts=is_thunderstorm(code),
    )


def group_hours(
    hourly: HourlyFrame,
    waves: Sequence[Tuple[float, int]],
) -> Dict[str, List[HourRecord]]:
    """Group operating-hour records by ISO date (``time[:10]``), in time order."""
    days: Dict[str, List[HourRecord]] = {}
    for i, stamp in enumerate(hourly.time):
        records = days.setdefault(stamp[:10], [])
        if _in_window(int(stamp[11:13]), OPERATING_HOURS):
            records.append(build_hour_record(hourly, i, waves[i]))
    return days


def build_day_summaries(
    hourly: HourlyFrame,
    daily: DailyFrame,
    waves: Sequence[Tuple[float, int]],
) -> List[DaySummary]:
    """
    One DaySummary per date in the daily frame, in upstream order.

    Dates without any hourly data get an empty hour list and blank
    descriptions.
    """
    grouped = group_hours(hourly, waves)
    summaries = []

    for i, day in enumerate(daily.time):
        hours = grouped.get(day, [])
        if not hours:
            logger.debug(f"No operating-hour records for {day}")
        precip = daily.precipitation_sum[i]
        summaries.append(DaySummary(
            date=day,
            label=day_label(day, i),
            temp_max=_int_or_none(daily.temperature_max[i]),
            temp_min=_int_or_none(daily.temperature_min[i]),
            precip_sum=round_half_up_tenths(precip or 0),
            wind_desc=describe_wind(hours),
            summary=summarize_day(hours, precip),
            hours=hours,
        ))

    return summaries
