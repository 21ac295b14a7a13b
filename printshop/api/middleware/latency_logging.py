"""Request latency logging middleware."""

import logging
import time
from typing import Callable

from fastapi import Request, Response

logger = logging.getLogger(__name__)

SLOW_REQUEST_THRESHOLD_MS = 1000
VERY_SLOW_REQUEST_THRESHOLD_MS = 3000

HEALTH_CHECK_PATHS = ("/health", "/health/ready")


def _log_level(path: str, status_code: int, latency_ms: float) -> tuple[int, str]:
    """Pick the log level and message prefix for a finished request."""
    if path in HEALTH_CHECK_PATHS:
        return logging.DEBUG, ""
    if status_code >= 500:
        return logging.ERROR, ""
    if latency_ms > VERY_SLOW_REQUEST_THRESHOLD_MS:
        return logging.ERROR, "VERY SLOW REQUEST: "
    if latency_ms > SLOW_REQUEST_THRESHOLD_MS:
        return logging.WARNING, "SLOW REQUEST: "
    if status_code >= 400:
        return logging.WARNING, ""
    return logging.INFO, ""


async def latency_logging_middleware(request: Request, call_next: Callable) -> Response:
    """Log one line per request with its status and latency.

    Order submissions wait for both notification emails, so slow requests
    usually point at the mail provider. The measured latency is also
    returned in the `X-Response-Time` header.

    Args:
        request: The incoming request.
        call_next: The next middleware/handler in the chain.

    Returns:
        Response: The response from the handler.
    """
    start_time = time.perf_counter()
    request_id = request.headers.get("X-Request-ID", "-")
    path = request.url.path

    response = None
    try:
        response = await call_next(request)
        return response
    finally:
        latency_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code if response is not None else 500

        level, prefix = _log_level(path, status_code, latency_ms)
        logger.log(
            level,
            "%s%s %s - %d - %.2fms [request_id=%s]",
            prefix,
            request.method,
            path,
            status_code,
            latency_ms,
            request_id,
        )

        if response is not None:
            response.headers["X-Response-Time"] = f"{latency_ms:.2f}ms"
