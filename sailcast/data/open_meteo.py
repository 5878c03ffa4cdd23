"""
Open-Meteo upstream clients.

Two providers are queried for every forecast:

- Forecast API (ECMWF IFS): hourly wind, temperature, rain, cloud and
  weather codes plus daily temperature/precipitation summaries. Required.
- Marine API (ECMWF WAM): hourly wave height, period and direction. Optional;
  coastal or inland points often have no marine coverage.

Both calls run concurrently on one ``httpx.AsyncClient`` and their outcomes
are inspected separately, so a marine failure never cancels or fails the
primary request.

API docs:
  - Forecast: https://open-meteo.com/en/docs
  - Marine: https://open-meteo.com/en/docs/marine-weather-api
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from sailcast.data.frames import DailyFrame, FrameError, HourlyFrame, MarineFrame
from sailcast.errors import UpstreamUnavailable
from sailcast.forecast.request import Coordinate

logger = logging.getLogger(__name__)

OPEN_METEO_FORECAST = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_MARINE = "https://marine-api.open-meteo.com/v1/marine"

HOURLY_VARS = [
    "temperature_2m",
    "precipitation",
    "cloud_cover",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "weather_code",
]

DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
]

MARINE_VARS = [
    "wave_height",
    "wave_direction",
    "wave_period",
]

WEATHER_SOURCE = "ECMWF IFS via Open-Meteo"
MARINE_SOURCE = "ECMWF WAM via Open-Meteo"
ESTIMATED_MARINE_SOURCE = "Estimated from wind speed"


@dataclass(frozen=True)
class UpstreamConfig:
    """Where and how to call the two providers."""
    forecast_url: str = OPEN_METEO_FORECAST
    marine_url: str = OPEN_METEO_MARINE
    timezone: str = "Australia/Melbourne"
    model: Optional[str] = "ecmwf_ifs025"
    timeout: float = 8.0
    user_agent: str = "sailcast/1.0"


@dataclass(frozen=True)
class ForecastSources:
    """Parsed upstream frames for one request. ``marine`` is None when unavailable."""
    hourly: HourlyFrame
    daily: DailyFrame
    marine: Optional[MarineFrame] = None


def _decode(resp: httpx.Response, provider: str) -> Dict[str, Any]:
    """Raise for HTTP or Open-Meteo level errors and return the JSON body."""
    resp.raise_for_status()
    body = resp.json()
    if not isinstance(body, dict):
        raise ValueError(f"{provider} returned a non-object JSON body")
    if body.get("error"):
        raise ValueError(f"{provider} error: {body.get('reason', 'unknown reason')}")
    return body


async def fetch_weather(
    client: httpx.AsyncClient,
    coordinate: Coordinate,
    forecast_days: int,
    config: UpstreamConfig,
) -> Dict[str, Any]:
    """
    Fetch hourly and daily forecast arrays from the Open-Meteo Forecast API.

    Returns:
        Raw API response dict with ``hourly`` and ``daily`` keys.
    """
    params: Dict[str, Any] = {
        "latitude": coordinate.latitude,
        "longitude": coordinate.longitude,
        "hourly": ",".join(HOURLY_VARS),
        "daily": ",".join(DAILY_VARS),
        "timezone": config.timezone,
        "forecast_days": forecast_days,
    }
    if config.model:
        params["models"] = config.model

    resp = await client.get(config.forecast_url, params=params)
    return _decode(resp, "Forecast API")


async def fetch_marine(
    client: httpx.AsyncClient,
    coordinate: Coordinate,
    forecast_days: int,
    config: UpstreamConfig,
) -> Dict[str, Any]:
    """Fetch hourly wave arrays from the Open-Meteo Marine API."""
    params: Dict[str, Any] = {
        "latitude": coordinate.latitude,
        "longitude": coordinate.longitude,
        "hourly": ",".join(MARINE_VARS),
        "timezone": config.timezone,
        "forecast_days": forecast_days,
    }

    resp = await client.get(config.marine_url, params=params)
    return _decode(resp, "Marine API")


def _primary_frames(outcome: Any) -> tuple:
    if isinstance(outcome, BaseException):
        if isinstance(outcome, (httpx.HTTPError, ValueError)):
            logger.error(f"Forecast API request failed: {outcome}")
            raise UpstreamUnavailable(str(outcome) or type(outcome).__name__) from outcome
        raise outcome

    try:
        return HourlyFrame.from_payload(outcome), DailyFrame.from_payload(outcome)
    except FrameError as e:
        logger.error(f"Forecast API returned malformed data: {e}")
        raise UpstreamUnavailable(str(e)) from e


def _marine_frame(outcome: Any) -> Optional[MarineFrame]:
    if isinstance(outcome, BaseException):
        logger.warning(f"Marine API unavailable, falling back to estimates: {outcome!r}")
        return None

    try:
        return MarineFrame.from_payload(outcome)
    except FrameError as e:
        logger.warning(f"Marine API returned unusable data, falling back to estimates: {e}")
        return None


async def fetch_sources(
    coordinate: Coordinate,
    forecast_days: int,
    config: Optional[UpstreamConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ForecastSources:
    """
    Fetch both providers concurrently and parse their frames.

    Args:
        coordinate: Location to forecast.
        forecast_days: Number of days to request from both providers.
        config: Upstream endpoints and options (defaults to Open-Meteo).
        client: Optional shared client; a short-lived one is created otherwise.

    Raises:
        UpstreamUnavailable: The forecast provider failed or returned
            unusable data. Marine failures never raise.
    """
    config = config or UpstreamConfig()

    if client is None:
        async with httpx.AsyncClient(
            timeout=config.timeout,
            headers={"User-Agent": config.user_agent},
        ) as owned:
            return await fetch_sources(coordinate, forecast_days, config, owned)

    weather_outcome, marine_outcome = await asyncio.gather(
        fetch_weather(client, coordinate, forecast_days, config),
        fetch_marine(client, coordinate, forecast_days, config),
        return_exceptions=True,
    )

    hourly, daily = _primary_frames(weather_outcome)
    marine = _marine_frame(marine_outcome)

    logger.info(
        f"Fetched {len(hourly)} hourly / {len(daily)} daily records for "
        f"({coordinate.latitude}, {coordinate.longitude}), "
        f"marine={'yes' if marine is not None else 'no'}"
    )
    return ForecastSources(hourly=hourly, daily=daily, marine=marine)
