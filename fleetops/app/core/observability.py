"""
Request logging and correlation IDs.

Every request gets a correlation id (taken from the caller's
X-Correlation-ID header when present) and one access log line with the
method, path, status and duration.
"""

import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("fleetops.requests")

CORRELATION_HEADER = "X-Correlation-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def log_request(request: Request, status_code: int, duration_ms: float, correlation_id: str) -> None:
    client = request.client.host if request.client else "unknown"
    logger.log(
        level_for_status(status_code),
        "%s %s -> %s (%.2fms) client=%s cid=%s",
        request.method,
        request.url.path,
        status_code,
        duration_ms,
        client,
        correlation_id,
    )


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # rendered as a 500 by the outer error handler
            log_request(request, 500, (time.perf_counter() - started) * 1000, correlation_id)
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers[PROCESS_TIME_HEADER] = f"{duration_ms:.2f}"

        log_request(request, response.status_code, duration_ms, correlation_id)
        return response
