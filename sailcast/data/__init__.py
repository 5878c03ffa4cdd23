"""Upstream Open-Meteo providers and raw frame parsing."""

from .frames import DailyFrame, FrameError, HourlyFrame, MarineFrame
from .open_meteo import (
    ForecastSources,
    UpstreamConfig,
    fetch_marine,
    fetch_sources,
    fetch_weather,
)

__all__ = [
    'DailyFrame',
    'FrameError',
    'HourlyFrame',
    'MarineFrame',
    'ForecastSources',
    'UpstreamConfig',
    'fetch_marine',
    'fetch_sources',
    'fetch_weather',
]
