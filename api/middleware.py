"""HTTP middleware: response headers, request IDs, JSON request logs and a last-resort 500 body."""
import time
import uuid
import logging
import json
from typing import Callable, Optional
from contextvars import ContextVar
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response, JSONResponse
from fastapi import FastAPI

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    return request_id_ctx.get()


class StructuredLogger:
    """Writes one JSON object per log line, tagged with the current request ID."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log(self, level: int, message: str, **fields):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": logging.getLevelName(level),
            "message": message,
            "service": "sailcast-api",
            "request_id": get_request_id(),
            **fields,
        }
        self.logger.log(level, json.dumps({k: v for k, v in entry.items() if v is not None}))

    def info(self, message: str, **fields):
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields):
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields):
        self._log(logging.ERROR, message, **fields)


structured_logger = StructuredLogger("sailcast")


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds the same CORS and cache headers to every response.

    Headers added:
    - Access-Control-Allow-Origin: any origin may read the forecast
    - Access-Control-Allow-Methods: GET and preflight only
    - Cache-Control: shared cache lifetime with stale-while-revalidate

    Error responses carry the same policy so edge caches treat them alike.
    """

    def __init__(
        self,
        app,
        allow_origin: str = "*",
        allow_methods: str = "GET, OPTIONS",
        cache_control: Optional[str] = None,
    ):
        super().__init__(app)
        self.allow_origin = allow_origin
        self.allow_methods = allow_methods
        self.cache_control = cache_control

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["Access-Control-Allow-Origin"] = self.allow_origin
        response.headers["Access-Control-Allow-Methods"] = self.allow_methods

        if self.cache_control:
            response.headers["Cache-Control"] = self.cache_control

        return response


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Echoes or assigns X-Request-ID and exposes it through ``get_request_id``."""

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
            response.headers[self.HEADER_NAME] = request_id
            return response
        finally:
            request_id_ctx.reset(token)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request with status and duration. Health checks are skipped."""

    EXCLUDED_PATHS = {"/api/health"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            structured_logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        structured_logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            query=str(request.query_params) or None,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling for exceptions that escape the routers.

    Renders the same ``{error, message}`` body as forecast errors. The
    exception text is only exposed in debug mode.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            request_id = get_request_id()

            structured_logger.error(
                "Unhandled exception",
                error=str(e),
                error_type=type(e).__name__,
                path=request.url.path,
                method=request.method,
            )

            if self.debug:
                message = str(e)
            else:
                message = "An internal error occurred. Please retry later."

            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal error",
                    "message": message,
                },
                headers={"X-Request-ID": request_id} if request_id else {},
            )


def setup_middleware(
    app: FastAPI,
    debug: bool = False,
    allow_origin: str = "*",
    allow_methods: str = "GET, OPTIONS",
    cache_control: Optional[str] = None,
):
    # Added last runs first, so response headers also land on the 500 fallback
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(ErrorHandlingMiddleware, debug=debug)
    app.add_middleware(
        ResponseHeadersMiddleware,
        allow_origin=allow_origin,
        allow_methods=allow_methods,
        cache_control=cache_control,
    )
