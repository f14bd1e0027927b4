"""Availability endpoint.

A placeholder used by the room pages: every hotel is reported available on
every date until a real inventory service exists.
"""

from fastapi import APIRouter, Query

from booking_api.models.bookings import AvailabilityResponse

router = APIRouter(tags=["availability"])


@router.get(
    "/availability",
    summary="Check hotel availability",
    response_model=AvailabilityResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"hotelId": "lekki-suites", "date": "2025-07-15", "available": True}
                }
            },
        },
    },
)
async def check_availability(
    hotel_id: str | None = Query(None, alias="hotelId", description="Hotel identifier"),
    date: str | None = Query(None, description="Date to check (YYYY-MM-DD)"),
) -> AvailabilityResponse:
    """Echo the query back with available=True."""
    return AvailabilityResponse(hotel_id=hotel_id, date=date, available=True)
