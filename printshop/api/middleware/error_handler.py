"""Error types and handlers for consistent error responses."""

import logging
import traceback
from typing import Any, Callable

from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from printshop.schemas.common import ErrorResponse
from printshop.services.order_validation import MISSING_FILE_MESSAGE

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Внутренняя ошибка сервера"
RETRY_LATER_HINT = "Попробуйте повторить заказ позже или обратитесь в поддержку"


class APIError(Exception):
    """Base exception for API errors.

    Raise subclasses from routes to return a specific status code and
    message to the client.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type: str = "api_error",
        field: str | None = None,
        details: list[str] | None = None,
        hint: str | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code to return.
            error_type: Error category, used in logs.
            field: Offending form field, if any.
            details: Optional list of failure reasons.
            hint: Optional guidance returned as `message`.
        """
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.field = field
        self.details = details
        self.hint = hint
        super().__init__(message)


class ValidationError(APIError):
    """A form field failed validation."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            message="Ошибка валидации",
            status_code=status.HTTP_400_BAD_REQUEST,
            error_type="validation_error",
            field=field,
            details=[reason],
        )


class FileConstraintError(APIError):
    """An uploaded file is missing, too large or of a wrong type."""

    def __init__(self, message: str, field: str | None = "designFile") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_type="file_constraint_error",
            field=field,
        )


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(self, message: str = "Заказ не найден") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_type="not_found",
        )


class PersistenceError(APIError):
    """Saving failed. Internals are never returned to the client."""

    def __init__(self) -> None:
        super().__init__(
            message=INTERNAL_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_type="persistence_error",
            hint=RETRY_LATER_HINT,
        )


def create_error_response(
    message: str,
    status_code: int,
    field: str | None = None,
    details: list[str] | None = None,
    hint: str | None = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Create a standardized JSON error response.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code.
        field: Optional offending form field.
        details: Optional failure reasons.
        hint: Optional client guidance.
        request_id: Optional request ID for tracing.

    Returns:
        JSONResponse: Formatted error response.
    """
    error_response = ErrorResponse(
        error=message,
        message=hint,
        details=details,
        field=field,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Exception handler turning APIError into its JSON response."""
    request_id = request.headers.get("X-Request-ID")

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "API error: %s - %s (field=%s)",
        exc.error_type,
        exc.message,
        exc.field,
        extra={"request_id": request_id, "status_code": exc.status_code},
    )
    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        field=exc.field,
        details=exc.details,
        hint=exc.hint,
        request_id=request_id,
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Exception handler turning framework request validation into API errors.

    A path parameter that does not parse (e.g. a non-numeric order id)
    names no existing order, so it is answered with 404. A text part sent
    where the design file belongs counts as a missing file. Any other body
    error becomes a 400 validation error for its field.
    """
    error = exc.errors()[0]
    loc = error.get("loc") or ()
    field = str(loc[-1]) if loc else None

    if loc and loc[0] == "path":
        api_error: APIError = NotFoundError()
    elif field == "designFile":
        api_error = FileConstraintError(MISSING_FILE_MESSAGE, field=field)
    else:
        api_error = ValidationError(field=field, reason=error.get("msg", "Invalid value"))

    return await api_error_handler(request, api_error)


async def error_handler_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    """Middleware to catch and format unexpected exceptions.

    Logs full stack traces for debugging while returning a generic
    message to clients.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: Either the successful response or formatted error response.
    """
    request_id = request.headers.get("X-Request-ID")

    try:
        return await call_next(request)

    except APIError as e:
        return await api_error_handler(request, e)

    except Exception as e:
        logger.error(
            "Unhandled exception: %s\n%s",
            str(e),
            traceback.format_exc(),
            extra={"request_id": request_id},
        )
        return create_error_response(
            message=INTERNAL_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            hint=RETRY_LATER_HINT,
            request_id=request_id,
        )
