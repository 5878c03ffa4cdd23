"""
Forecast pipeline: upstream frames in, response payload out.

``build_forecast`` is pure and works on already-fetched frames, so the same
upstream payloads always produce the same ``forecast`` list.
``build_forecast_payload`` adds the network fetch and response metadata.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from sailcast.data.open_meteo import (
    ESTIMATED_MARINE_SOURCE,
    MARINE_SOURCE,
    WEATHER_SOURCE,
    ForecastSources,
    UpstreamConfig,
    fetch_sources,
)
from sailcast.forecast.request import Coordinate
from sailcast.forecast.summary import DaySummary, build_day_summaries
from sailcast.forecast.waves import marine_is_aligned, merge_waves, uses_marine_values

logger = logging.getLogger(__name__)


def build_forecast(sources: ForecastSources) -> List[DaySummary]:
    waves = merge_waves(sources.hourly, sources.marine)
    return build_day_summaries(sources.hourly, sources.daily, waves)


def marine_source_label(sources: ForecastSources) -> str:
    if uses_marine_values(sources.hourly, sources.marine):
        return MARINE_SOURCE
    if marine_is_aligned(sources.hourly, sources.marine):
        logger.warning("Marine response has no wave heights, using wind-speed estimates")
    elif sources.marine is not None:
        logger.warning(
            f"Marine grid ({len(sources.marine)} hours) does not match forecast grid "
            f"({len(sources.hourly)} hours), using wind-speed estimates"
        )
    return ESTIMATED_MARINE_SOURCE


def assemble_payload(
    sources: ForecastSources,
    coordinate: Coordinate,
    updated: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build the JSON-ready response body from fetched sources."""
    updated = updated or datetime.now(timezone.utc)
    return {
        "forecast": [day.to_dict() for day in build_forecast(sources)],
        "source": WEATHER_SOURCE,
        "marine_source": marine_source_label(sources),
        "updated": updated.isoformat().replace("+00:00", "Z"),
        "location": coordinate.to_dict(),
    }


async def build_forecast_payload(
    coordinate: Coordinate,
    forecast_days: int,
    config: Optional[UpstreamConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """
    Fetch both providers for ``coordinate`` and build the response body.

    Raises:
        UpstreamUnavailable: The forecast provider failed.
    """
    sources = await fetch_sources(coordinate, forecast_days, config, client)
    return assemble_payload(sources, coordinate)
