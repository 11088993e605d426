"""Request tracking and error rendering.

Every response carries ``X-Request-ID`` (echoed or generated) and
``X-Process-Time``. The request id is bound into the structlog context, so
log lines emitted while analysing a request can be traced back to it.
Errors are rendered as ``{"detail", "request_id", ...}``.
"""

import time
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import get_settings
from core.exceptions import AtlasException
from core.logging_config import bind_request_context

logger = structlog.get_logger(__name__)

UNLOGGED_PATHS = frozenset({"/api/health", "/api/v1/health"})


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 2)


def _error_response(request: Request, status_code: int, detail: str, **extra) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "request_id": request_id, **extra},
        headers={"X-Request-ID": request_id} if request_id else None,
    )


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """Tag, time and log each request; turn crashes into a 500 body."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        bind_request_context(request_id=request_id, method=request.method, path=request.url.path)
        start = time.monotonic()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled exception", duration_ms=_elapsed_ms(start))
            detail = "Internal server error"
            if not get_settings().is_production:
                detail = str(exc) or detail
            return _error_response(request, 500, detail)

        duration_ms = _elapsed_ms(start)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}ms"

        if request.url.path not in UNLOGGED_PATHS:
            log = logger.warning if response.status_code >= 400 else logger.info
            log("Request handled", status_code=response.status_code, duration_ms=duration_ms)

        return response


def setup_exception_handlers(app: FastAPI) -> None:
    """Render analytics errors and bad values as JSON."""

    @app.exception_handler(AtlasException)
    async def atlas_exception_handler(request: Request, exc: AtlasException):
        logger.warning("Request rejected", reason=exc.message, status_code=exc.status_code)
        return _error_response(request, exc.status_code, exc.message, **exc.details)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return _error_response(request, 400, str(exc))
