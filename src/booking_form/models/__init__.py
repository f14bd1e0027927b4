"""Pydantic models for the booking form."""

from .draft import (
    DEFAULT_COUNTRY,
    DRAFT_FIELDS,
    BookingConfirmation,
    GuestBookingDraft,
)
from .enums import CountryCode, DraftStoreBackend, SubmissionState
from .errors import (
    GENERIC_SUBMISSION_MESSAGE,
    BookingFormError,
    BookingSubmissionError,
    ErrorCode,
    ErrorResponse,
)
from .validation import CountryPhoneRule, PhoneCheck, ValidationResult

__all__ = [
    # Enums
    "CountryCode",
    "DraftStoreBackend",
    "SubmissionState",
    # Draft
    "DEFAULT_COUNTRY",
    "DRAFT_FIELDS",
    "BookingConfirmation",
    "GuestBookingDraft",
    # Validation
    "CountryPhoneRule",
    "PhoneCheck",
    "ValidationResult",
    # Errors
    "GENERIC_SUBMISSION_MESSAGE",
    "BookingFormError",
    "BookingSubmissionError",
    "ErrorCode",
    "ErrorResponse",
]
