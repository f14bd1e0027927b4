"""Guest details booking form: validation, phone normalization and submission."""

from booking_form.models import GuestBookingDraft, SubmissionState, ValidationResult
from booking_form.services import BookingForm, normalize_phone, validate_draft

__all__ = [
    "BookingForm",
    "GuestBookingDraft",
    "SubmissionState",
    "ValidationResult",
    "normalize_phone",
    "validate_draft",
]
