"""
FastAPI middleware for observability.

CorrelationMiddleware must wrap RequestLoggingMiddleware (add it last) so
request log records carry the correlation id.

Dependencies: starlette, lockedin.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from lockedin.observability.correlation import clear_correlation_id, set_correlation_id
from lockedin.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
SKIP_PATHS = frozenset({"/api/v1/health"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and timing; liveness probes are skipped."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path in SKIP_PATHS:
            return await call_next(request)

        method = request.method
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{method} {path} failed",
                e,
                method=method,
                path=path,
                duration_ms=_elapsed_ms(started),
            )
            raise

        status_code = response.status_code
        log_with_context(
            logger,
            logging.WARNING if status_code >= 500 else logging.INFO,
            f"{method} {path} {status_code}",
            method=method,
            path=path,
            query=request.url.query or None,
            status_code=status_code,
            duration_ms=_elapsed_ms(started),
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Adopt or mint a correlation id per request and echo it back."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
