"""
SAILCAST API Pydantic schemas.

Re-exports all schema classes:
    from api.schemas import ForecastResponse, ErrorResponse, ...
"""

# Common
from .common import Position, ErrorResponse  # noqa: F401

# Forecast
from .forecast import HourRecordModel, DaySummaryModel, ForecastResponse  # noqa: F401
