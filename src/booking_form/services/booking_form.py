"""Guest details booking form engine.

Holds the form's draft, validation errors and submission state. A submission
moves through idle, submitting and then success or failed:

- While submitting, and while the success message is on screen, every control
  is disabled. Field updates, resets and extra submits are ignored, so only
  one call ever reaches the booking client at a time.
- On success the saved draft is deleted, the completion callback receives the
  normalized payload, and after a short delay the engine navigates to the
  redirect destination (or shows a saved message when there is none).
- On failure the draft is kept and the client's message is shown so the guest
  can correct and resubmit.

Draft persistence is best effort: store failures are logged and ignored.
"""

import datetime as dt
import inspect
import json
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from booking_form.models import (
    DRAFT_FIELDS,
    GENERIC_SUBMISSION_MESSAGE,
    BookingConfirmation,
    BookingSubmissionError,
    GuestBookingDraft,
    SubmissionState,
)
from booking_form.utils.dates import add_days_iso, count_nights, parse_iso_date
from booking_form.utils.logging import get_logger, log_booking_operation, set_correlation_id

from .booking_client import BookingClient
from .draft_store import DraftStore
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle
from .validation import normalized_payload, validate_draft

logger = get_logger(__name__)

CompletionCallback = Callable[[GuestBookingDraft], Awaitable[None] | None]

# Field that carries submission errors in the form
SUBMISSION_ERROR_FIELD = "email"
SAVED_MESSAGE = "Saved successfully."
DEFAULT_PERSIST_KEY = "guestDetails"
DEFAULT_REDIRECT = "/checkout"
SUCCESS_DISPLAY_DELAY = 0.8


class Navigator(Protocol):
    """Host capability that moves the guest to another page."""

    def navigate(self, destination: str) -> None: ...


class BookingForm:
    """State machine behind the guest details form."""

    def __init__(
        self,
        client: BookingClient,
        *,
        store: DraftStore | None = None,
        persist_key: str | None = DEFAULT_PERSIST_KEY,
        redirect_to: str | None = DEFAULT_REDIRECT,
        navigator: Navigator | None = None,
        on_complete: CompletionCallback | None = None,
        scheduler: Scheduler | None = None,
        initial_values: Mapping[str, Any] | None = None,
        today: Callable[[], dt.date] = dt.date.today,
        success_display_delay: float = SUCCESS_DISPLAY_DELAY,
    ) -> None:
        """Create the form and restore any saved draft.

        Args:
            client: Booking client that receives the normalized payload
            store: Draft store; persistence is off without one
            persist_key: Key the draft is saved under; None disables persistence
            redirect_to: Destination after success; None shows a saved message
            navigator: Performs the redirect
            on_complete: Called once with the payload after a successful booking
            scheduler: Timer for the post-success delay
            initial_values: Field values applied over the defaults
            today: Source of today's date for default stay dates
            success_display_delay: Seconds the success message is shown
        """
        self._client = client
        self._store = store
        self._persist_key = persist_key
        self._redirect_to = redirect_to
        self._navigator = navigator
        self._on_complete = on_complete
        self._scheduler = scheduler or AsyncioScheduler()
        self._today = today
        self._success_display_delay = success_display_delay
        self._initial_values = dict(initial_values or {})

        self._errors: dict[str, str] = {}
        self._success_message: str | None = None
        self._state = SubmissionState.IDLE
        self._history: list[SubmissionState] = [SubmissionState.IDLE]
        self._pending_timer: TimerHandle | None = None
        self._closed = False

        self._draft = self._restore_draft()
        self._save_draft()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def draft(self) -> GuestBookingDraft:
        return self._draft.model_copy()

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def success_message(self) -> str | None:
        return self._success_message

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def history(self) -> list[SubmissionState]:
        """Every state the form has been in, oldest first."""
        return list(self._history)

    @property
    def controls_disabled(self) -> bool:
        """True while submitting, while the success message shows, and after close()."""
        return (
            self._closed
            or self._state == SubmissionState.SUBMITTING
            or self._pending_timer is not None
        )

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def update(self, field: str, value: Any) -> bool:
        """Change one field.

        Clears the field's error and any success message, and saves the
        draft. Ignored while controls are disabled.

        Returns:
            True if the change was applied

        Raises:
            ValueError: If field is not a draft field
        """
        if field not in DRAFT_FIELDS:
            raise ValueError(f"Unknown draft field '{field}'")
        if self.controls_disabled:
            logger.debug("Ignoring update to %s while controls are disabled", field)
            return False

        if isinstance(value, dt.datetime):
            value = value.date().isoformat()
        elif isinstance(value, dt.date):
            value = value.isoformat()
        setattr(self._draft, field, value)

        self._errors.pop(field, None)
        self._success_message = None
        if self._state in (SubmissionState.SUCCESS, SubmissionState.FAILED):
            self._set_state(SubmissionState.IDLE)

        self._save_draft()
        return True

    def set_arrival_date(self, value: str | dt.date) -> bool:
        """Change arrival, moving departure so the stay stays at least one night."""
        if self.controls_disabled:
            return False

        arrival = parse_iso_date(value)
        departure = parse_iso_date(self._draft.departure_date)
        self.update("arrival_date", value)

        if arrival is not None and (departure is None or departure <= arrival):
            self.update("departure_date", add_days_iso(arrival, 1))
        return True

    def quick_set_nights(self, nights: int) -> bool:
        """Set departure to arrival (or today) plus a number of nights."""
        if self.controls_disabled:
            return False
        start = parse_iso_date(self._draft.arrival_date) or self._today()
        return self.update("departure_date", add_days_iso(start, nights))

    def stay_summary(self) -> str:
        """Human-readable stay, e.g. '2025-07-15 → 2025-07-18 (3 nights)'."""
        nights = count_nights(self._draft.arrival_date, self._draft.departure_date)
        if nights is None:
            return "Choose dates"
        return (
            f"{self._draft.arrival_date} → {self._draft.departure_date} "
            f"({max(1, nights)} nights)"
        )

    def reset(self) -> bool:
        """Restore defaults, clear messages and forget the saved draft."""
        if self.controls_disabled:
            return False

        self._draft = self._default_draft()
        self._errors = {}
        self._success_message = None
        if self._state != SubmissionState.IDLE:
            self._set_state(SubmissionState.IDLE)
        self._forget_draft()
        return True

    # ------------------------------------------------------------------
    # Validation and submission
    # ------------------------------------------------------------------

    def validate(self) -> bool:
        """Run every validation rule, replacing the current error set."""
        result = validate_draft(self._draft)
        self._errors = dict(result.errors)
        return result.is_valid

    async def submit(self) -> BookingConfirmation | None:
        """Validate and submit the draft.

        Returns:
            The booking confirmation, or None if the submit was ignored,
            failed validation or was rejected.
        """
        if self.controls_disabled or self._closed:
            logger.debug("Ignoring submit while a submission is in progress")
            return None
        if not self.validate():
            log_booking_operation(
                logger,
                "validate_draft",
                persist_key=self._persist_key,
                invalid_fields=",".join(sorted(self._errors)),
            )
            return None

        # Taken before the first await so a second submit sees it
        self._set_state(SubmissionState.SUBMITTING)
        self._errors = {}
        set_correlation_id()

        payload = normalized_payload(self._draft)

        try:
            confirmation = await self._client.submit(payload)
        except BookingSubmissionError as e:
            self._fail(e.message, e.field_errors, status=e.status)
            return None

        self._forget_draft()

        if self._on_complete is not None:
            try:
                result = self._on_complete(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.exception("Completion callback failed")
                self._fail(str(e))
                return None

        self._success_message = f"Booking prepared ({confirmation.booking_id}). Redirecting..."
        self._set_state(SubmissionState.SUCCESS)
        log_booking_operation(
            logger,
            "submit_booking",
            persist_key=self._persist_key,
            booking_id=confirmation.booking_id,
            state=self._state.value,
        )

        if not self._closed:
            self._pending_timer = self._scheduler.call_later(
                self._success_display_delay, self._finish_success
            )
        return confirmation

    def close(self) -> None:
        """Tear the form down, dropping any pending post-success action."""
        self._closed = True
        if self._pending_timer is not None:
            self._pending_timer.cancel()
            self._pending_timer = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _set_state(self, state: SubmissionState) -> None:
        self._state = state
        self._history.append(state)

    def _fail(
        self,
        message: str | None,
        field_errors: Mapping[str, str] | None = None,
        status: int | None = None,
    ) -> None:
        message = message or GENERIC_SUBMISSION_MESSAGE
        self._errors = {**(field_errors or {}), SUBMISSION_ERROR_FIELD: message}
        self._set_state(SubmissionState.FAILED)
        log_booking_operation(
            logger,
            "submit_booking",
            persist_key=self._persist_key,
            state=self._state.value,
            status=status,
            error=message,
        )

    def _finish_success(self) -> None:
        self._pending_timer = None
        if self._closed:
            return

        if self._redirect_to:
            if self._navigator is None:
                logger.warning("No navigator configured; staying on page")
            else:
                self._navigator.navigate(self._redirect_to)
        else:
            self._success_message = SAVED_MESSAGE

    def _default_draft(self) -> GuestBookingDraft:
        return self._with_default_dates(GuestBookingDraft.model_validate(self._initial_values))

    def _with_default_dates(self, draft: GuestBookingDraft) -> GuestBookingDraft:
        """Arrive today and leave the next day unless dates are already set."""
        if not draft.arrival_date:
            draft.arrival_date = self._today().isoformat()
        if not draft.departure_date:
            start = parse_iso_date(draft.arrival_date) or self._today()
            draft.departure_date = add_days_iso(start, 1)
        return draft

    def _restore_draft(self) -> GuestBookingDraft:
        base = GuestBookingDraft.model_validate(self._initial_values)
        saved = self._read_saved_draft()
        if saved is None:
            return self._default_draft()

        defaults = base.model_dump(by_alias=True)
        try:
            draft = GuestBookingDraft.model_validate({**defaults, **saved})
        except ValidationError as e:
            # Keep what is readable; unreadable fields fall back to defaults
            bad_fields = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
            logger.warning("Dropping unreadable saved fields: %s", ", ".join(sorted(bad_fields)))
            readable = {k: v for k, v in saved.items() if k not in bad_fields}
            draft = GuestBookingDraft.model_validate({**defaults, **readable})

        log_booking_operation(logger, "restore_draft", persist_key=self._persist_key)
        return self._with_default_dates(draft)

    def _read_saved_draft(self) -> dict[str, Any] | None:
        if not self._persist_key or self._store is None:
            return None
        try:
            raw = self._store.get(self._persist_key)
            if not raw:
                return None
            saved = json.loads(raw)
        except Exception as e:
            logger.warning("Could not read saved draft: %s", e)
            return None
        return saved if isinstance(saved, dict) else None

    def _save_draft(self) -> None:
        if not self._persist_key or self._store is None:
            return
        try:
            self._store.set(self._persist_key, self._draft.model_dump_json(by_alias=True))
        except Exception as e:
            logger.warning("Could not save draft: %s", e)

    def _forget_draft(self) -> None:
        if not self._persist_key or self._store is None:
            return
        try:
            self._store.delete(self._persist_key)
        except Exception as e:
            logger.warning("Could not delete saved draft: %s", e)
