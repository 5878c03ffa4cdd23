"""
System API router.

Handles the root endpoint and the liveness health check.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from api.config import settings
from api.middleware import get_request_id
from sailcast import __version__

router = APIRouter(tags=["System"])

logger = logging.getLogger(__name__)


@router.get("/")
async def root():
    """
    API root endpoint.

    Returns basic API information and available endpoints.
    """
    return {
        "name": "SAILCAST API",
        "version": __version__,
        "status": "operational",
        "docs": "/api/docs",
        "endpoints": {
            "health": "/api/health",
            "forecast": "/api/forecast?lat=&lon=&days=",
        }
    }


@router.get("/api/health")
async def health_check():
    """
    Liveness check for load balancers and hosting platforms.

    Upstream providers are not called; a forecast request reports their
    state directly.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "environment": settings.environment,
        "request_id": get_request_id(),
    }
