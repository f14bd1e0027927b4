"""Draft endpoints for saving a guest's unfinished booking form."""

import json

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from booking_api.dependencies import get_draft_store
from booking_api.models.bookings import DraftResponse, SuccessMessage
from booking_form.models import BookingFormError, ErrorCode, GuestBookingDraft
from booking_form.services.draft_store import DraftStore
from booking_form.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["drafts"])


@router.get(
    "/drafts/{key}",
    summary="Get a saved draft",
    response_model=DraftResponse,
    responses={404: {"description": "No draft saved under this key"}},
)
async def get_draft(key: str, store: DraftStore = Depends(get_draft_store)) -> DraftResponse:
    """Return the draft saved under key."""
    raw = store.get(key)
    if not raw:
        raise BookingFormError(ErrorCode.DRAFT_NOT_FOUND)

    try:
        draft = GuestBookingDraft.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as e:
        logger.warning("Unreadable draft under %s: %s", key, e)
        raise BookingFormError(ErrorCode.DRAFT_NOT_FOUND) from e

    return DraftResponse(key=key, draft=draft)


@router.put(
    "/drafts/{key}",
    summary="Save a draft",
    response_model=DraftResponse,
)
async def save_draft(
    key: str,
    body: GuestBookingDraft,
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    """Save (or replace) the draft under key."""
    store.set(key, body.model_dump_json(by_alias=True))
    return DraftResponse(key=key, draft=body)


@router.delete(
    "/drafts/{key}",
    summary="Delete a draft",
    response_model=SuccessMessage,
)
async def delete_draft(key: str, store: DraftStore = Depends(get_draft_store)) -> SuccessMessage:
    """Delete the draft under key. Deleting a missing draft succeeds."""
    store.delete(key)
    return SuccessMessage(message="Draft deleted")
