"""
FastAPI Backend for SAILCAST Sailing Forecast.

Provides REST API endpoints for:
- Day-grouped sailing forecast (wind, sky, rain, waves) for a coordinate
- Health checks

Version: 1.0.0
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from api.config import settings
from api.middleware import setup_middleware, structured_logger
from api.routers import forecast, system
from sailcast import __version__
from sailcast.errors import ForecastError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(message)s',  # JSON logs are self-contained
)
logger = logging.getLogger(__name__)


# =============================================================================
# Application Factory
# =============================================================================

def create_app() -> FastAPI:
    """
    Application factory for SAILCAST API.

    Creates and configures the FastAPI application with middleware,
    routers and the forecast error handler.

    Returns:
        FastAPI: Configured application instance
    """
    application = FastAPI(
        title="SAILCAST API",
        description="""
## Sailing Forecast API

Merges the Open-Meteo ECMWF IFS weather forecast with the ECMWF WAM marine
forecast into a day-by-day view for small-boat sailing.

### Features
- Hourly wind, gust, temperature, rain, cloud and waves for 05:00-22:00
- Daily wind range, sky and rain summary over daylight hours
- Wave heights estimated from wind when marine data is unavailable

### Errors
Failures return `{"error": ..., "message": ...}` with 400 (bad input),
502 (forecast provider failed) or 500.
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    setup_middleware(
        application,
        debug=settings.debug or settings.is_development,
        allow_origin=settings.cors_allow_origin,
        allow_methods=settings.cors_methods,
        cache_control=settings.cache_control,
    )

    @application.exception_handler(ForecastError)
    async def forecast_error_handler(request: Request, exc: ForecastError):
        log = structured_logger.warning if exc.status_code < 500 else structured_logger.error
        log(
            "Forecast request failed",
            path=request.url.path,
            status_code=exc.status_code,
            error=exc.error,
            detail=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @application.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Routing failures (404, 405) use the same body as forecast errors
        try:
            error = HTTPStatus(exc.status_code).phrase
        except ValueError:
            error = "HTTP error"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": error, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    application.include_router(system.router)
    application.include_router(forecast.router)

    return application


# Create the application
app = create_app()


# ============================================================================
# Run Server
# ============================================================================

if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level,
    )
