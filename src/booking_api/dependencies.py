"""FastAPI dependency providers for shared services.

Services are built from configuration on first use and cached with
@lru_cache so every request shares them.

Usage in routes:
    from booking_api.dependencies import get_draft_store

    @router.get("/drafts/{key}")
    async def read_draft(key: str, store: DraftStore = Depends(get_draft_store)):
        ...

Testing:
    Override providers with app.dependency_overrides, or call
    reset_services() to rebuild them from fresh configuration.
"""

from functools import lru_cache

from booking_form.config import FormConfig, get_config, reset_config
from booking_form.services.booking_client import BookingClient, create_booking_client
from booking_form.services.draft_store import DraftStore, create_draft_store


def get_form_config() -> FormConfig:
    return get_config()


@lru_cache
def get_draft_store() -> DraftStore:
    """Get cached DraftStore selected by BOOKING_DRAFT_STORE."""
    return create_draft_store(get_config())


@lru_cache
def get_booking_client() -> BookingClient:
    """Get cached BookingClient; the mock unless BOOKING_API_URL is set."""
    return create_booking_client(get_config())


def reset_services() -> None:
    """Clear cached service instances and configuration.

    Also resets the underlying DynamoDB singleton.
    """
    from booking_form.services.dynamodb import reset_dynamodb_service

    get_draft_store.cache_clear()
    get_booking_client.cache_clear()
    reset_config()
    reset_dynamodb_service()
