"""Standard error codes and exceptions for the booking form.

Field validation problems are returned as data by ``validate_draft``. The
types here cover failures that cross a boundary: a booking client rejecting a
submission, or an API request that cannot be served.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

GENERIC_SUBMISSION_MESSAGE = "Failed to prepare booking. Try again."


class ErrorCode(str, Enum):
    """Error codes returned by the booking API."""

    VALIDATION_FAILED = "ERR_FORM_001"
    SUBMISSION_FAILED = "ERR_FORM_002"
    DRAFT_NOT_FOUND = "ERR_FORM_003"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Some booking details are missing or invalid",
    ErrorCode.SUBMISSION_FAILED: GENERIC_SUBMISSION_MESSAGE,
    ErrorCode.DRAFT_NOT_FOUND: "No saved draft exists for this key",
}

# Recovery suggestions for callers
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Correct the fields listed in details and resubmit",
    ErrorCode.SUBMISSION_FAILED: "Try again in a moment",
    ErrorCode.DRAFT_NOT_FOUND: "Start a new draft",
}


class ErrorResponse(BaseModel):
    """Standard error body for API failures."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
        message: Optional[str] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional field-level context about the error
            message: Overrides the standard message for the code

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=message or ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class BookingFormError(Exception):
    """Exception raised by booking API operations.

    Converted to an ErrorResponse by the API exception handlers.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse body."""
        return ErrorResponse.from_code(self.code, self.details)


class BookingSubmissionError(Exception):
    """A booking client rejected a submission.

    Attributes:
        message: Message suitable for showing to the guest
        status: HTTP-style status code reported by the backend, if any
        field_errors: Field-level messages reported by the backend
    """

    def __init__(
        self,
        message: str | None = None,
        status: int | None = None,
        field_errors: dict[str, str] | None = None,
    ):
        self.message = message or GENERIC_SUBMISSION_MESSAGE
        self.status = status
        self.field_errors = dict(field_errors or {})
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        return ErrorResponse.from_code(
            ErrorCode.SUBMISSION_FAILED,
            details=self.field_errors or None,
            message=self.message,
        )
