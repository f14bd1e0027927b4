"""API models for the booking endpoints."""

from booking_api.models.bookings import (
    AvailabilityResponse,
    BookingResponse,
    DraftResponse,
    SuccessMessage,
    ValidationResponse,
)

__all__ = [
    "AvailabilityResponse",
    "BookingResponse",
    "DraftResponse",
    "SuccessMessage",
    "ValidationResponse",
]
