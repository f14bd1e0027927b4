"""Contract tests for the booking API.

Exercises every endpoint through TestClient with the booking client and draft
store replaced via dependency overrides.
"""

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from booking_api.dependencies import get_booking_client, get_draft_store
from booking_api.main import app
from booking_form.models import BookingSubmissionError
from booking_form.services.draft_store import InMemoryDraftStore
from tests.conftest import FakeBookingClient


@pytest.fixture
def api_client(
    booking_client: FakeBookingClient, draft_store: InMemoryDraftStore
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_booking_client] = lambda: booking_client
    app.dependency_overrides[get_draft_store] = lambda: draft_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class TestServiceEndpoints:
    """Ping, health and availability."""

    def test_ping(self, api_client: TestClient) -> None:
        response = api_client.get("/api/ping")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "booking-api"
        assert "timestamp" in data

    def test_health_reports_backends(
        self, api_client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("BOOKING_API_URL", raising=False)
        monkeypatch.delenv("BOOKING_DRAFT_STORE", raising=False)

        response = api_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["draft_store"] == "memory"
        assert data["booking_backend"] == "mock"

    def test_availability_echoes_query(self, api_client: TestClient) -> None:
        response = api_client.get(
            "/api/availability", params={"hotelId": "lekki-suites", "date": "2025-07-20"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "hotelId": "lekki-suites",
            "date": "2025-07-20",
            "available": True,
        }

    def test_availability_without_query(self, api_client: TestClient) -> None:
        response = api_client.get("/api/availability")

        assert response.json() == {"hotelId": None, "date": None, "available": True}

    def test_correlation_id_echoed(self, api_client: TestClient) -> None:
        response = api_client.get("/api/ping", headers={"X-Correlation-ID": "req-789"})

        assert response.headers["X-Correlation-ID"] == "req-789"

    def test_correlation_id_generated(self, api_client: TestClient) -> None:
        response = api_client.get("/api/ping")

        assert response.headers["X-Correlation-ID"]


class TestValidateEndpoint:
    """POST /api/bookings/validate."""

    def test_valid_draft(self, api_client: TestClient, booking_payload: dict[str, Any]) -> None:
        response = api_client.post(
            "/api/bookings/validate", json={**booking_payload, "phone": "812 345 6789"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "errors": {},
            "normalizedPhone": "+2348123456789",
        }

    def test_invalid_draft_lists_all_errors(self, api_client: TestClient) -> None:
        response = api_client.post(
            "/api/bookings/validate",
            json={"email": "ada@example", "phone": "123", "country": "GB", "guests": 0},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["normalizedPhone"] == ""
        assert data["errors"] == {
            "first_name": "First name is required.",
            "last_name": "Last name is required.",
            "email": "Enter a valid email address.",
            "phone": "Phone number seems invalid for GB.",
            "arrival_date": "Arrival date is required.",
            "departure_date": "Departure date is required.",
            "guests": "Please enter at least 1 guest.",
        }

    def test_snake_case_fields_accepted(
        self, api_client: TestClient, guest_details: dict[str, Any]
    ) -> None:
        response = api_client.post("/api/bookings/validate", json=guest_details)

        assert response.json()["valid"] is True

    def test_boolean_counts_are_flagged(
        self, api_client: TestClient, booking_payload: dict[str, Any]
    ) -> None:
        response = api_client.post(
            "/api/bookings/validate", json={**booking_payload, "guests": True, "rooms": False}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["errors"] == {
            "guests": "Please enter at least 1 guest.",
            "rooms": "Please enter at least 1 room.",
        }

    def test_null_fields_are_reported_as_missing(
        self, api_client: TestClient, booking_payload: dict[str, Any]
    ) -> None:
        response = api_client.post(
            "/api/bookings/validate", json={**booking_payload, "firstName": None, "guests": None}
        )

        assert response.status_code == 200
        assert response.json()["errors"] == {
            "first_name": "First name is required.",
            "guests": "Please enter at least 1 guest.",
        }


class TestSubmitEndpoint:
    """POST /api/bookings."""

    def test_submit_success(
        self,
        api_client: TestClient,
        booking_client: FakeBookingClient,
        booking_payload: dict[str, Any],
    ) -> None:
        response = api_client.post(
            "/api/bookings", json={**booking_payload, "phone": "+44 20 7946 0958", "country": "GB"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["bookingId"] == "MOCK-123456"
        assert data["booking"]["phone"] == "+442079460958"
        assert data["booking"]["firstName"] == "Ada"
        assert len(booking_client.calls) == 1
        assert booking_client.calls[0].phone == "+442079460958"

    def test_invalid_draft_returns_400(
        self,
        api_client: TestClient,
        booking_client: FakeBookingClient,
        booking_payload: dict[str, Any],
    ) -> None:
        response = api_client.post(
            "/api/bookings", json={**booking_payload, "departureDate": "2025-07-19"}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "ERR_FORM_001"
        assert data["details"] == {"departure_date": "Departure must be after arrival."}
        assert booking_client.calls == []

    def test_backend_failure_returns_502(
        self,
        api_client: TestClient,
        booking_client: FakeBookingClient,
        booking_payload: dict[str, Any],
    ) -> None:
        booking_client.error = BookingSubmissionError("Network error - please try again", status=502)

        response = api_client.post("/api/bookings", json=booking_payload)

        assert response.status_code == 502
        data = response.json()
        assert data["error_code"] == "ERR_FORM_002"
        assert data["message"] == "Network error - please try again"
        assert data["recovery"]

    def test_backend_conflict_passed_through(
        self,
        api_client: TestClient,
        booking_client: FakeBookingClient,
        booking_payload: dict[str, Any],
    ) -> None:
        booking_client.error = BookingSubmissionError(
            "Room no longer available", status=409, field_errors={"rooms": "Only 1 room left."}
        )

        response = api_client.post("/api/bookings", json=booking_payload)

        assert response.status_code == 409
        assert response.json()["details"] == {"rooms": "Only 1 room left."}

    def test_backend_failure_without_status_is_bad_gateway(
        self,
        api_client: TestClient,
        booking_client: FakeBookingClient,
        booking_payload: dict[str, Any],
    ) -> None:
        booking_client.error = BookingSubmissionError()

        response = api_client.post("/api/bookings", json=booking_payload)

        assert response.status_code == 502
        assert response.json()["message"] == "Failed to prepare booking. Try again."

    def test_boolean_guests_not_submitted(
        self,
        api_client: TestClient,
        booking_client: FakeBookingClient,
        booking_payload: dict[str, Any],
    ) -> None:
        response = api_client.post("/api/bookings", json={**booking_payload, "guests": True})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "ERR_FORM_001"
        assert data["details"] == {"guests": "Please enter at least 1 guest."}
        assert booking_client.calls == []

    def test_unparseable_count_returns_400(
        self, api_client: TestClient, booking_payload: dict[str, Any]
    ) -> None:
        response = api_client.post("/api/bookings", json={**booking_payload, "guests": "many"})

        assert response.status_code == 400
        assert response.json()["details"] == {"guests": "Please enter at least 1 guest."}


class TestMalformedBodies:
    """Bodies that are not drafts get the validation error body, never a bare 422."""

    @pytest.mark.parametrize("path", ["/api/bookings/validate", "/api/bookings"])
    def test_non_string_text_field(
        self,
        api_client: TestClient,
        booking_client: FakeBookingClient,
        booking_payload: dict[str, Any],
        path: str,
    ) -> None:
        response = api_client.post(path, json={**booking_payload, "firstName": 42})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "ERR_FORM_001"
        assert list(data["details"]) == ["firstName"]
        assert booking_client.calls == []

    @pytest.mark.parametrize("path", ["/api/bookings/validate", "/api/bookings"])
    def test_body_not_an_object(self, api_client: TestClient, path: str) -> None:
        response = api_client.post(path, json=["Ada", "Okafor"])

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "ERR_FORM_001"
        assert "body" in data["details"]


class TestDraftEndpoints:
    """PUT/GET/DELETE /api/drafts/{key}."""

    def test_save_and_fetch(
        self,
        api_client: TestClient,
        draft_store: InMemoryDraftStore,
        booking_payload: dict[str, Any],
    ) -> None:
        saved = api_client.put("/api/drafts/guestDetails", json=booking_payload)

        assert saved.status_code == 200
        assert saved.json()["key"] == "guestDetails"
        assert "guestDetails" in draft_store

        fetched = api_client.get("/api/drafts/guestDetails")

        assert fetched.status_code == 200
        assert fetched.json()["draft"] == booking_payload

    def test_missing_draft_returns_404(self, api_client: TestClient) -> None:
        response = api_client.get("/api/drafts/unknown")

        assert response.status_code == 404
        assert response.json()["error_code"] == "ERR_FORM_003"

    def test_unreadable_draft_returns_404(
        self, api_client: TestClient, draft_store: InMemoryDraftStore
    ) -> None:
        draft_store.set("guestDetails", "not json")

        response = api_client.get("/api/drafts/guestDetails")

        assert response.status_code == 404

    def test_delete(
        self,
        api_client: TestClient,
        draft_store: InMemoryDraftStore,
        booking_payload: dict[str, Any],
    ) -> None:
        api_client.put("/api/drafts/guestDetails", json=booking_payload)

        response = api_client.delete("/api/drafts/guestDetails")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Draft deleted"}
        assert "guestDetails" not in draft_store
        assert api_client.delete("/api/drafts/guestDetails").status_code == 200


class TestOpenApiSchema:
    """Documented routes."""

    def test_routes_registered(self, api_client: TestClient) -> None:
        paths = api_client.get("/openapi.json").json()["paths"]

        for path in (
            "/api/health",
            "/api/availability",
            "/api/bookings",
            "/api/bookings/validate",
            "/api/drafts/{key}",
        ):
            assert path in paths
