"""Common shared schemas used across multiple endpoints."""

from pydantic import BaseModel, Field


class Position(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    error: str
    message: str
