"""Services behind the guest details booking form."""

from .booking_client import (
    BookingClient,
    HttpBookingClient,
    MockBookingClient,
    create_booking_client,
)
from .booking_form import BookingForm, Navigator
from .draft_store import (
    DraftStore,
    DynamoDBDraftStore,
    FileDraftStore,
    InMemoryDraftStore,
    create_draft_store,
)
from .dynamodb import DynamoDBService, get_dynamodb_service
from .phone import PHONE_RULES, normalize_phone
from .scheduler import AsyncioScheduler, Scheduler
from .validation import normalized_payload, validate_draft

__all__ = [
    "AsyncioScheduler",
    "BookingClient",
    "BookingForm",
    "DraftStore",
    "DynamoDBDraftStore",
    "DynamoDBService",
    "FileDraftStore",
    "HttpBookingClient",
    "InMemoryDraftStore",
    "MockBookingClient",
    "Navigator",
    "PHONE_RULES",
    "Scheduler",
    "create_booking_client",
    "create_draft_store",
    "get_dynamodb_service",
    "normalize_phone",
    "normalized_payload",
    "validate_draft",
]
