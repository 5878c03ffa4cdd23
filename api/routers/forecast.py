"""
Forecast API router.

Endpoints:
    GET     /api/forecast   -> day-grouped sailing forecast for lat/lon
    OPTIONS /api/forecast   -> CORS preflight (empty 204)

Both are also served at ``/forecast`` for hosts that route the function
by file name.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query
from starlette.responses import Response

from api.config import settings
from api.schemas import ErrorResponse, ForecastResponse
from sailcast.errors import ForecastError, InternalError
from sailcast.forecast.pipeline import build_forecast_payload
from sailcast.forecast.request import resolve_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Forecast"])

FORECAST_PATHS = ("/api/forecast", "/forecast")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid lat, lon or days"},
    502: {"model": ErrorResponse, "description": "Forecast provider failed"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
}


async def get_forecast(
    lat: Optional[str] = Query(None, description="Latitude (default: St Kilda)"),
    lon: Optional[str] = Query(None, description="Longitude"),
    days: Optional[str] = Query(None, description="Forecast days, 1-16 (default 7)"),
):
    """
    Day-grouped sailing forecast merged from Open-Meteo weather and marine feeds.

    Marine data is optional: when the marine feed is unavailable, wave heights
    are estimated from wind speed and ``marine_source`` says so.
    """
    coordinate, forecast_days = resolve_request(
        lat,
        lon,
        days,
        default_lat=settings.default_latitude,
        default_lon=settings.default_longitude,
        default_days=settings.default_forecast_days,
        max_days=settings.max_forecast_days,
    )

    try:
        return await build_forecast_payload(
            coordinate,
            forecast_days,
            config=settings.upstream_config(),
        )
    except ForecastError:
        raise
    except Exception as e:
        logger.error(f"Forecast build failed: {e}", exc_info=True)
        raise InternalError(str(e)) from e


async def forecast_preflight():
    """CORS preflight."""
    return Response(status_code=204)


for _path in FORECAST_PATHS:
    router.add_api_route(
        _path,
        get_forecast,
        methods=["GET"],
        response_model=ForecastResponse,
        responses=_ERROR_RESPONSES,
        include_in_schema=_path == FORECAST_PATHS[0],
    )
    router.add_api_route(
        _path,
        forecast_preflight,
        methods=["OPTIONS"],
        status_code=204,
        include_in_schema=False,
    )
