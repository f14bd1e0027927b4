"""Booking endpoints.

Provides REST endpoints for:
- Validating a guest details draft without submitting it
- Submitting a draft to the configured booking backend

Drafts use the same camelCase fields as the form (firstName, arrivalDate, ...).
"""

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from booking_api.dependencies import get_booking_client
from booking_api.models.bookings import BookingResponse, ValidationResponse
from booking_form.models import BookingFormError, ErrorCode, GuestBookingDraft
from booking_form.services.booking_client import BookingClient
from booking_form.services.phone import normalize_phone
from booking_form.services.validation import normalized_payload, validate_draft
from booking_form.utils.logging import get_logger, log_booking_operation

logger = get_logger(__name__)

router = APIRouter(tags=["bookings"])


@router.post(
    "/bookings/validate",
    summary="Validate booking details",
    description="""
Run every booking rule against a draft and return all problems at once.

**Notes:**
- Returns 200 with the rule results for any JSON object; check `valid`
- Counts are checked as sent (`true` or `""` is not a guest count)
- Returns 400 with `details` only when the body is not a draft at all
  (not an object, or a text field that is not a string)
- Phone is optional; when given it must fit the selected country
""",
    response_model=ValidationResponse,
)
async def validate_booking(body: GuestBookingDraft) -> ValidationResponse:
    """Validate a draft."""
    result = validate_draft(body)
    phone = normalize_phone(body.country, body.phone)

    return ValidationResponse(
        valid=result.is_valid,
        errors=result.errors,
        normalized_phone=phone.normalized if phone.ok else "",
    )


@router.post(
    "/bookings",
    summary="Submit a booking",
    description="""
Validate, normalize and submit a booking to the booking backend.

**Notes:**
- Returns 400 with field messages in `details` when validation fails,
  including bodies whose fields have the wrong JSON type
- The phone number is sent in +<digits> form
- Backend rejections are returned with the backend's message
""",
    status_code=HTTP_201_CREATED,
    response_model=BookingResponse,
    responses={
        400: {"description": "Booking details are invalid"},
        502: {"description": "Booking backend rejected the request or was unreachable"},
    },
)
async def submit_booking(
    body: GuestBookingDraft,
    client: BookingClient = Depends(get_booking_client),
) -> BookingResponse:
    """Submit a booking."""
    result = validate_draft(body)
    if not result.is_valid:
        raise BookingFormError(ErrorCode.VALIDATION_FAILED, details=result.errors)

    payload = normalized_payload(body)
    confirmation = await client.submit(payload)

    log_booking_operation(logger, "api_submit_booking", booking_id=confirmation.booking_id)

    return BookingResponse(booking_id=confirmation.booking_id, booking=payload)
