"""Pytest configuration and fixtures for booking form tests.

This module provides reusable fixtures for testing:
- Deterministic collaborators for the form engine (booking client,
  scheduler, navigator, draft store)
- DynamoDB mocking with moto
- Sample guest details
"""

import asyncio
import datetime as dt
import os
from collections.abc import Callable
from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

from booking_form.models import (
    BookingConfirmation,
    BookingSubmissionError,
    GuestBookingDraft,
)
from booking_form.services.draft_store import DynamoDBDraftStore, InMemoryDraftStore
from booking_form.services.dynamodb import DynamoDBService

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-booking-form")

if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

FIXED_TODAY = dt.date(2025, 7, 15)


# === Singleton Reset ===


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Reset cached config, services and the DynamoDB singleton around each test."""
    from booking_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


# === Form Engine Collaborators ===


class FakeBookingClient:
    """Booking client that succeeds or fails on demand and records calls."""

    def __init__(
        self,
        booking_id: str = "MOCK-123456",
        error: BookingSubmissionError | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.booking_id = booking_id
        self.error = error
        self.gate = gate
        self.calls: list[GuestBookingDraft] = []

    async def submit(self, payload: GuestBookingDraft) -> BookingConfirmation:
        self.calls.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return BookingConfirmation(booking_id=self.booking_id)


class ManualScheduler:
    """Scheduler whose timers only fire when the test says so."""

    class Handle:
        def __init__(self, delay: float, callback: Callable[[], None]) -> None:
            self.delay = delay
            self.callback = callback
            self.cancelled = False

        def cancel(self) -> None:
            self.cancelled = True

    def __init__(self) -> None:
        self.handles: list[ManualScheduler.Handle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> "ManualScheduler.Handle":
        handle = self.Handle(delay, callback)
        self.handles.append(handle)
        return handle

    def run_pending(self) -> int:
        """Fire every timer that has not been cancelled. Returns how many ran."""
        pending = [h for h in self.handles if not h.cancelled]
        self.handles = []
        for handle in pending:
            handle.callback()
        return len(pending)


class RecordingNavigator:
    def __init__(self) -> None:
        self.destinations: list[str] = []

    def navigate(self, destination: str) -> None:
        self.destinations.append(destination)


class BrokenDraftStore:
    """Draft store whose every operation fails."""

    def __init__(self) -> None:
        self.attempts = 0

    def get(self, key: str) -> str | None:
        self.attempts += 1
        raise OSError("storage unavailable")

    def set(self, key: str, value: str) -> None:
        self.attempts += 1
        raise OSError("storage unavailable")

    def delete(self, key: str) -> None:
        self.attempts += 1
        raise OSError("storage unavailable")


@pytest.fixture
def booking_client() -> FakeBookingClient:
    return FakeBookingClient()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def draft_store() -> InMemoryDraftStore:
    return InMemoryDraftStore()


@pytest.fixture
def today() -> Callable[[], dt.date]:
    """Fixed 'today' so default stay dates are predictable."""
    return lambda: FIXED_TODAY


# === Sample Data Fixtures ===


@pytest.fixture
def guest_details() -> dict[str, Any]:
    """Complete, valid guest details (snake_case field names)."""
    return {
        "first_name": "Ada",
        "last_name": "Okafor",
        "email": "ada.okafor@example.com",
        "phone": "0812 345 6789",
        "country": "NG",
        "arrival_date": "2025-07-20",
        "departure_date": "2025-07-23",
        "guests": 2,
        "rooms": 1,
        "special_requests": "Late check-in requested",
    }


@pytest.fixture
def valid_draft(guest_details: dict[str, Any]) -> GuestBookingDraft:
    return GuestBookingDraft.model_validate(guest_details)


@pytest.fixture
def booking_payload(guest_details: dict[str, Any]) -> dict[str, Any]:
    """Valid guest details as sent over HTTP (camelCase keys)."""
    return GuestBookingDraft.model_validate(guest_details).to_payload()


# === DynamoDB Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    if not os.environ.get("AWS_PROFILE"):
        os.environ["AWS_ACCESS_KEY_ID"] = "testing"
        os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
        os.environ["AWS_SECURITY_TOKEN"] = "testing"
        os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def mock_drafts_table(aws_credentials: None) -> Generator[Any, None, None]:
    """Create the drafts table inside a moto mock and yield a low-level client."""
    with mock_aws():
        os.environ["DYNAMODB_TABLE_PREFIX"] = "test-booking-form"

        DynamoDBDraftStore(DynamoDBService()).ensure_table()

        yield boto3.client("dynamodb", region_name="eu-west-1")
