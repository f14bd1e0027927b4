"""Booking submission clients.

``MockBookingClient`` stands in for a booking backend: it waits a little and
fails about one time in ten. ``HttpBookingClient`` posts the same payload to a
real booking API. Both satisfy the ``BookingClient`` protocol used by the
form engine, so either can be swapped in without touching the state machine.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

import httpx
from pydantic import ValidationError

from booking_form.models import (
    BookingConfirmation,
    BookingSubmissionError,
    GuestBookingDraft,
)
from booking_form.utils.logging import get_logger

if TYPE_CHECKING:
    from booking_form.config import FormConfig

logger = get_logger(__name__)

NETWORK_ERROR_MESSAGE = "Network error - please try again"
NETWORK_ERROR_STATUS = 502


class BookingClient(Protocol):
    """Submits a normalized booking payload.

    Raises:
        BookingSubmissionError: If the booking is rejected
    """

    async def submit(self, payload: GuestBookingDraft) -> BookingConfirmation: ...


class MockBookingClient:
    """Simulated booking API with latency and random failures."""

    def __init__(
        self,
        latency: float = 1.2,
        failure_rate: float = 0.1,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the mock client.

        Args:
            latency: Seconds to wait before answering
            failure_rate: Probability (0-1) of a simulated network error
            rng: Random source; pass a seeded Random for repeatable runs
            sleep: Coroutine used to wait, replaceable in tests
        """
        self.latency = latency
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._sleep = sleep

    async def submit(self, payload: GuestBookingDraft) -> BookingConfirmation:
        await self._sleep(self.latency)

        if self._rng.random() < self.failure_rate:
            raise BookingSubmissionError(NETWORK_ERROR_MESSAGE, status=NETWORK_ERROR_STATUS)

        return BookingConfirmation(booking_id=f"MOCK-{self._rng.randrange(1_000_000)}")


class HttpBookingClient:
    """Booking client that POSTs the payload to a booking API."""

    BOOKINGS_PATH = "/bookings"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Booking API base URL (e.g. https://example.com/api)
            timeout: Request timeout in seconds
            client: Preconfigured httpx client; one is created when omitted
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def submit(self, payload: GuestBookingDraft) -> BookingConfirmation:
        url = f"{self.base_url}{self.BOOKINGS_PATH}"

        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload.to_payload())
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload.to_payload())
        except httpx.RequestError as e:
            logger.warning("Booking API unreachable: %s", e)
            raise BookingSubmissionError(NETWORK_ERROR_MESSAGE) from e

        if response.is_error:
            raise self._error_from_response(response)

        try:
            return BookingConfirmation.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("Unexpected booking API response: %s", e)
            raise BookingSubmissionError(status=response.status_code) from e

    @staticmethod
    def _error_from_response(response: httpx.Response) -> BookingSubmissionError:
        """Build a submission error from an error response body.

        Understands the ErrorResponse body returned by booking_api; other
        bodies fall back to the generic message.
        """
        message: str | None = None
        field_errors: dict[str, str] = {}

        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            if isinstance(body.get("message"), str):
                message = body["message"]
            details = body.get("details")
            if isinstance(details, dict):
                field_errors = {str(k): str(v) for k, v in details.items()}

        return BookingSubmissionError(
            message, status=response.status_code, field_errors=field_errors
        )


def create_booking_client(config: "FormConfig") -> BookingClient:
    """Use the real booking API when configured, otherwise the mock."""
    if config.booking_api_url:
        return HttpBookingClient(config.booking_api_url, timeout=config.request_timeout)
    return MockBookingClient(
        latency=config.mock_latency,
        failure_rate=config.mock_failure_rate,
    )
