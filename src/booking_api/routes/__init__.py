"""API routes package.

Routers are organized by domain:

- health: Health check endpoint
- availability: Hotel availability placeholder
- bookings: Draft validation and booking submission
- drafts: Saved draft storage

All routers are registered in main.py with /api prefix.
"""

from booking_api.routes.availability import router as availability_router
from booking_api.routes.bookings import router as bookings_router
from booking_api.routes.drafts import router as drafts_router
from booking_api.routes.health import router as health_router

__all__ = [
    "availability_router",
    "bookings_router",
    "drafts_router",
    "health_router",
]
