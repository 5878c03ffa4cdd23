"""
Shared pytest fixtures for SAILCAST tests.

Environment variables must be set before any api.* import so the cached
Settings instance picks them up.
"""

import os

import pytest
import respx
from fastapi.testclient import TestClient

# ---------------------------------------------------------------------------
# Section 1: Environment setup (before ANY api.* imports)
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "warning")
os.environ.setdefault("TIMEZONE", "Australia/Melbourne")
os.environ.setdefault("WEATHER_MODEL", "ecmwf_ifs025")

FORECAST_HOST = "api.open-meteo.com"
FORECAST_PATH = "/v1/forecast"
MARINE_HOST = "marine-api.open-meteo.com"
MARINE_PATH = "/v1/marine"

DATES = ("2026-02-10", "2026-02-11", "2026-02-12")


# ---------------------------------------------------------------------------
# Section 2: Client fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def client():
    """Create a FastAPI TestClient."""
    from api.main import app

    with TestClient(app) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Section 3: Upstream payload builders
# ---------------------------------------------------------------------------


def _column(value, n):
    """Expand a scalar to ``n`` copies, or pass a per-hour list through."""
    if isinstance(value, (list, tuple)):
        assert len(value) == n
        return list(value)
    if callable(value):
        return [value(i) for i in range(n)]
    return [value] * n


def hourly_times(dates=DATES, hours=range(24)):
    return [f"{d}T{h:02d}:00" for d in dates for h in hours]


def build_weather_payload(
    times=None,
    daily_dates=None,
    temperature=20.0,
    wind_speed=18.0,
    wind_direction=225.0,
    wind_gusts=28.0,
    precipitation=0.0,
    cloud_cover=40.0,
    weather_code=0,
    temp_max=24.0,
    temp_min=14.0,
    precip_sum=0.0,
):
    """Open-Meteo Forecast API response in its columnar shape."""
    times = list(times) if times is not None else hourly_times()
    daily_dates = list(daily_dates) if daily_dates is not None else sorted({t[:10] for t in times})
    n, nd = len(times), len(daily_dates)

    hourly = {
        "time": times,
        "temperature_2m": _column(temperature, n),
        "precipitation": _column(precipitation, n),
        "cloud_cover": _column(cloud_cover, n),
        "wind_speed_10m": _column(wind_speed, n),
        "wind_direction_10m": _column(wind_direction, n),
        "wind_gusts_10m": _column(wind_gusts, n),
    }
    if weather_code is not None:
        hourly["weather_code"] = _column(weather_code, n)

    return {
        "latitude": -37.875,
        "longitude": 145.0,
        "timezone": "Australia/Melbourne",
        "hourly": hourly,
        "daily": {
            "time": daily_dates,
            "temperature_2m_max": _column(temp_max, nd),
            "temperature_2m_min": _column(temp_min, nd),
            "precipitation_sum": _column(precip_sum, nd),
        },
    }


def build_marine_payload(times=None, wave_height=0.84, wave_period=6.4, wave_direction=200.0):
    """Open-Meteo Marine API response."""
    times = list(times) if times is not None else hourly_times()
    n = len(times)
    return {
        "latitude": -37.875,
        "longitude": 145.0,
        "hourly": {
            "time": times,
            "wave_height": _column(wave_height, n),
            "wave_period": _column(wave_period, n),
            "wave_direction": _column(wave_direction, n),
        },
    }


@pytest.fixture
def weather_payload():
    return build_weather_payload


@pytest.fixture
def marine_payload():
    return build_marine_payload


@pytest.fixture
def upstream():
    """
    respx routes for both providers, yielded as ``(forecast, marine)``.

    Tests set ``.mock(...)`` on each route to choose the upstream behaviour.
    Any other outbound request fails the test.
    """
    with respx.mock(assert_all_called=False) as router:
        forecast_route = router.get(host=FORECAST_HOST, path=FORECAST_PATH)
        marine_route = router.get(host=MARINE_HOST, path=MARINE_PATH)
        yield forecast_route, marine_route
