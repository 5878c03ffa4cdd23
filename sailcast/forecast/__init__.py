"""Request parsing, wave merging and day summaries."""

from .request import Coordinate, parse_coordinate, parse_forecast_days, resolve_request
from .waves import estimate_wave_height, estimate_wave_height_kts, merge_waves
from .summary import DaySummary, HourRecord, build_day_summaries, compass_point

__all__ = [
    "Coordinate",
    "parse_coordinate",
    "parse_forecast_days",
    "resolve_request",
    "estimate_wave_height",
    "estimate_wave_height_kts",
    "merge_waves",
    "DaySummary",
    "HourRecord",
    "build_day_summaries",
    "compass_point",
]
