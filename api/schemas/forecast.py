"""Forecast API schemas.

Field names follow the front-end contract: compact keys for hourly records
and camelCase keys for day summaries.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import Position


class HourRecordModel(BaseModel):
    """One forecast hour within the 05:00-22:00 operating window."""
    h: int = Field(..., ge=0, le=23, description="Hour of day")
    t: int = Field(..., description="Temperature (C)")
    ws: int = Field(..., description="Wind speed (km/h)")
    wd: int = Field(..., description="Wind direction (deg)")
    gs: int = Field(..., description="Gust speed (km/h)")
    pr: float = Field(..., description="Precipitation (mm)")
    cl: int = Field(..., description="Cloud cover (%)")
    wv: float = Field(..., description="Wave height (m)")
    wp: int = Field(..., description="Wave period (s)")
    ts: bool = Field(..., description="Thunderstorm expected")


class DaySummaryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    label: str
    temp_max: Optional[int] = Field(None, alias="tempMax")
    temp_min: Optional[int] = Field(None, alias="tempMin")
    precip_sum: float = Field(..., alias="precipSum")
    wind_desc: str = Field(..., alias="windDesc")
    summary: str
    hours: List[HourRecordModel]


class ForecastResponse(BaseModel):
    forecast: List[DaySummaryModel]
    source: str
    marine_source: str
    updated: str
    location: Position
