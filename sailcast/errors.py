"""
Error taxonomy for the forecast pipeline.

Every failure that reaches a caller is a ForecastError carrying the HTTP
status it maps to, a short error code and a human readable message.
Marine provider failures are absorbed by the fetcher and never appear here.
"""
from typing import Any, Dict


class ForecastError(Exception):
    """Base class for failures reported to the client."""

    status_code: int = 500
    error: str = "Forecast failed"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class InvalidRequest(ForecastError):
    """Client supplied query parameters that cannot be used."""
    status_code = 400
    error = "Invalid request"


class InvalidCoordinate(InvalidRequest):
    """Latitude or longitude is malformed, non-finite or out of range."""
    error = "Invalid coordinate"


class InvalidForecastDays(InvalidRequest):
    """Forecast horizon is not a positive integer."""
    error = "Invalid forecast days"


class UpstreamUnavailable(ForecastError):
    """Primary weather provider failed or returned an unusable payload."""
    status_code = 502
    error = "Failed to fetch forecast"


class InternalError(ForecastError):
    """Unexpected failure while building the forecast."""
    status_code = 500
    error = "Internal error"
