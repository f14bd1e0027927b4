"""Field validation for the guest details form.

Every rule runs on every pass so the guest sees all problems at once. The
result is a fresh error set; nothing is carried over from earlier passes.
"""

import re
from typing import Any

from booking_form.models import GuestBookingDraft, ValidationResult
from booking_form.utils.dates import parse_iso_date

from .phone import normalize_phone

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]{2,}", re.IGNORECASE)


def _text(value: Any) -> str:
    """Trimmed text input; anything that is not a string counts as empty."""
    return value.strip() if isinstance(value, str) else ""


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email.strip()) is not None


def is_positive_integer(value: Any) -> bool:
    """True for whole numbers >= 1, including integral floats like 2.0."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 1
    if isinstance(value, float):
        return value.is_integer() and value >= 1
    return False


def validate_draft(draft: GuestBookingDraft) -> ValidationResult:
    """Validate a draft against the booking rules.

    Args:
        draft: Current form values

    Returns:
        ValidationResult whose errors map field names to messages.
    """
    errors: dict[str, str] = {}

    if not _text(draft.first_name):
        errors["first_name"] = "First name is required."
    if not _text(draft.last_name):
        errors["last_name"] = "Last name is required."

    email = _text(draft.email)
    if not email:
        errors["email"] = "Email is required."
    elif not is_valid_email(email):
        errors["email"] = "Enter a valid email address."

    # Phone is optional but checked when present
    phone_check = normalize_phone(draft.country, draft.phone)
    if not phone_check.ok:
        errors["phone"] = phone_check.message or "Invalid phone number."

    if not draft.arrival_date:
        errors["arrival_date"] = "Arrival date is required."
    if not draft.departure_date:
        errors["departure_date"] = "Departure date is required."

    if draft.arrival_date and draft.departure_date:
        arrival = parse_iso_date(draft.arrival_date)
        departure = parse_iso_date(draft.departure_date)
        if arrival is None or departure is None:
            errors.setdefault("arrival_date", "Invalid date.")
            errors.setdefault("departure_date", "Invalid date.")
        elif departure <= arrival:
            errors["departure_date"] = "Departure must be after arrival."

    if not is_positive_integer(draft.guests):
        errors["guests"] = "Please enter at least 1 guest."
    if not is_positive_integer(draft.rooms):
        errors["rooms"] = "Please enter at least 1 room."

    return ValidationResult(errors=errors)


def normalized_payload(draft: GuestBookingDraft) -> GuestBookingDraft:
    """Copy of the draft with the phone number in +<digits> form."""
    phone_check = normalize_phone(draft.country, draft.phone)
    if phone_check.ok and phone_check.normalized:
        return draft.model_copy(update={"phone": phone_check.normalized})
    return draft.model_copy()
