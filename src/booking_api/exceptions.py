"""FastAPI exception handlers for booking form errors.

Converts domain errors to HTTP responses with the ErrorResponse JSON body:
- 400 Bad Request: validation failures, including malformed request bodies
- 404 Not Found: missing drafts
- 502 Bad Gateway: booking backend rejected or was unreachable, unless the
  backend reported its own status code

Usage:
    from booking_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_502_BAD_GATEWAY,
)

from booking_form.models import (
    BookingFormError,
    BookingSubmissionError,
    ErrorCode,
    ErrorResponse,
)
from booking_form.utils.logging import get_logger

logger = get_logger(__name__)

# Map ErrorCode to HTTP status codes
ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: HTTP_400_BAD_REQUEST,
    ErrorCode.DRAFT_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.SUBMISSION_FAILED: HTTP_502_BAD_GATEWAY,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """HTTP status for an ErrorCode, defaulting to 400 if not mapped."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def booking_form_error_handler(request: Request, exc: BookingFormError) -> JSONResponse:
    """Convert a BookingFormError to its JSON error response."""
    return JSONResponse(
        status_code=get_http_status_for_error(exc.code),
        content=exc.to_error_response().model_dump(mode="json"),
    )


async def submission_error_handler(
    request: Request, exc: BookingSubmissionError
) -> JSONResponse:
    """Convert a rejected booking to a JSON error response.

    Client errors reported by the backend (4xx) are passed through; anything
    else is reported as a bad gateway.
    """
    status_code = exc.status if exc.status and 400 <= exc.status < 600 else HTTP_502_BAD_GATEWAY
    logger.warning("Booking submission rejected: %s (status=%s)", exc.message, exc.status)

    return JSONResponse(
        status_code=status_code,
        content=exc.to_error_response().model_dump(mode="json"),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert a malformed request body to the validation ErrorResponse.

    Field names come from the error location, e.g. ``body.firstName`` ->
    ``firstName``; errors about the body as a whole are keyed ``body``.
    """
    details: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.setdefault(".".join(loc) or "body", str(error.get("msg", "Invalid value")))

    error_response = ErrorResponse.from_code(ErrorCode.VALIDATION_FAILED, details=details)
    return JSONResponse(
        status_code=get_http_status_for_error(ErrorCode.VALIDATION_FAILED),
        content=error_response.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(BookingFormError, booking_form_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(BookingSubmissionError, submission_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
