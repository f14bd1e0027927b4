"""API request/response models for booking, draft and availability endpoints.

The draft itself is booking_form's GuestBookingDraft; these models only wrap
it with HTTP-layer fields. Field names are camelCase on the wire, matching
the payload the form sends.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from booking_form.models import GuestBookingDraft


class ApiModel(BaseModel):
    """Base for API models serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidationResponse(ApiModel):
    """Outcome of validating a draft without submitting it."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "valid": False,
                    "errors": {"email": "Enter a valid email address."},
                    "normalizedPhone": "+2348123456789",
                }
            ]
        },
    )

    valid: bool = Field(..., description="True when the draft can be submitted")
    errors: dict[str, str] = Field(
        default_factory=dict, description="Messages keyed by draft field name"
    )
    normalized_phone: str = Field(
        default="", description="Phone in +<digits> form, empty when not given or invalid"
    )


class BookingResponse(ApiModel):
    """Successful booking submission."""

    success: bool = True
    booking_id: str = Field(..., description="Identifier of the prepared booking")
    booking: GuestBookingDraft = Field(..., description="Normalized payload that was submitted")


class DraftResponse(ApiModel):
    """A saved draft."""

    key: str
    draft: GuestBookingDraft


class AvailabilityResponse(ApiModel):
    """Availability of a hotel on a date."""

    hotel_id: str | None = None
    date: str | None = None
    available: bool = True


class SuccessMessage(ApiModel):
    """Generic success response for operations without data payload."""

    success: bool = True
    message: str = Field(default="Operation completed successfully")
