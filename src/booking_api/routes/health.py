"""Health check endpoint."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends

from booking_api.dependencies import get_form_config
from booking_form.config import FormConfig

router = APIRouter(tags=["health"])


@router.get("/health", summary="Service health")
async def health(config: FormConfig = Depends(get_form_config)) -> dict[str, Any]:
    """Report service status and the configured backends."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": config.environment,
        "draft_store": config.draft_store.value,
        "booking_backend": "http" if config.booking_api_url else "mock",
    }
