"""FastAPI application hosting the booking form operations.

Provides REST endpoints for:
- Health checks
- Validating and submitting guest bookings
- Saving and restoring form drafts
- Hotel availability
"""

from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from booking_api.exceptions import register_exception_handlers
from booking_api.middleware.correlation import CORRELATION_ID_HEADER, CorrelationIdMiddleware
from booking_api.routes.availability import router as availability_router
from booking_api.routes.bookings import router as bookings_router
from booking_api.routes.drafts import router as drafts_router
from booking_api.routes.health import router as health_router
from booking_form.config import get_config
from booking_form.utils.logging import configure_logging, get_logger

configure_logging(get_config().log_level)
logger = get_logger(__name__)

app = FastAPI(
    title="Guest Booking API",
    description="REST API for guest details validation, drafts and booking submission",
    version="0.1.0",
)

# Configure CORS for the front-end dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[CORRELATION_ID_HEADER],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api")
app.include_router(availability_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(drafts_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Liveness check."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "booking-api",
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run("booking_api.main:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
