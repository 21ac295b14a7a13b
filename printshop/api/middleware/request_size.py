"""Request body size limiting middleware."""

import logging
from typing import Callable

from fastapi import Request, Response, status

from printshop.api.middleware.error_handler import create_error_response
from printshop.core.config import get_settings

logger = logging.getLogger(__name__)


async def request_size_limit_middleware(
    request: Request,
    call_next: Callable[[Request], Response],
) -> Response:
    """Middleware to enforce request body size limits.

    Rejects requests whose declared body is larger than the configured
    maximum before any multipart parsing happens. Only the declared
    `Content-Length` is checked, so chunked bodies without one pass
    through; for those the order route caps how much of each file it
    reads. Per-file limits are enforced separately by order validation.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: Either the successful response or 413 error.
    """
    settings = getattr(request.app.state, "settings", None) or get_settings()
    max_size = settings.max_request_body_size

    content_length = request.headers.get("content-length")
    if content_length:
        try:
            length = int(content_length)
        except ValueError:
            length = 0  # Invalid content-length, let it proceed

        if length > max_size:
            logger.warning(
                "Request body too large: %d bytes (max: %d)",
                length,
                max_size,
            )
            return create_error_response(
                message=f"Размер запроса не должен превышать {max_size // (1024 * 1024)} МБ",
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )

    return await call_next(request)
