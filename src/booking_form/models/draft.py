"""Guest booking draft and submission result models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import CountryCode

DEFAULT_COUNTRY = CountryCode.NG

# Field names a caller may edit, in form order.
DRAFT_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "country",
    "arrival_date",
    "departure_date",
    "guests",
    "rooms",
    "special_requests",
)


class GuestBookingDraft(BaseModel):
    """Working state of the guest details form.

    Holds raw user input. Text fields accept None and the counts are not
    coerced (``true`` stays a bool, ``""`` stays a string), so anything the
    form engine stores can be loaded back; rule violations are reported by
    ``validate_draft`` instead of being raised here.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    first_name: str | None = Field(default="", description="Guest first name")
    last_name: str | None = Field(default="", description="Guest last name")
    email: str | None = Field(default="", description="Contact email address")
    phone: str | None = Field(default="", description="Phone number, optional")
    country: str | None = Field(
        default=DEFAULT_COUNTRY.value,
        description="Country code used for phone validation (NG, US or GB)",
    )
    arrival_date: str | None = Field(default="", description="Arrival date (YYYY-MM-DD)")
    departure_date: str | None = Field(
        default="", description="Departure date (YYYY-MM-DD)"
    )
    guests: Any = Field(default=1, description="Number of guests, as entered")
    rooms: Any = Field(default=1, description="Number of rooms, as entered")
    special_requests: str | None = Field(
        default="", description="Dietary, accessibility or other notes"
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize with camelCase keys, as sent to booking clients."""
        return self.model_dump(mode="json", by_alias=True)


class BookingConfirmation(BaseModel):
    """Successful response from a booking client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    booking_id: str = Field(..., description="Identifier of the prepared booking")
