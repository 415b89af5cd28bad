"""
Request tracing for the transactions API.

Every request is tagged with an X-Request-ID (the caller's, or a fresh one)
that ends up on each log line written while handling it, and the response
carries that ID plus its handling time.
"""
import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.observability import (
    get_logger,
    generate_correlation_id,
    set_correlation_id,
)

logger = get_logger(__name__)

# Polled by load balancers; traced but not logged
QUIET_PATHS = ("/api/health", "/health")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with a correlation ID and logs how it went."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_correlation_id()
        set_correlation_id(request_id)

        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        fields = {"method": request.method, "path": request.url.path}
        quiet = request.url.path in QUIET_PATHS

        if not quiet:
            client = request.client.host if request.client else "unknown"
            logger.info(f"-> {route}", extra={**fields, "client_ip": client})

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"!! {route} raised {type(e).__name__}",
                extra={**fields, "duration_ms": _elapsed_ms(started), "error": str(e)},
            )
            raise

        duration_ms = _elapsed_ms(started)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        if not quiet:
            logger.log(
                logging_level(response.status_code),
                f"<- {route} {response.status_code}",
                extra={**fields, "status_code": response.status_code, "duration_ms": duration_ms},
            )

        return response


def logging_level(status_code: int) -> int:
    """Log level for a finished request with the given status."""
    return logging.INFO if status_code < 400 else logging.WARNING
