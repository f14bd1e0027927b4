"""Enumeration types for booking form data models."""

from enum import Enum


class CountryCode(str, Enum):
    """Countries offered in the guest details country selector."""

    NG = "NG"
    US = "US"
    GB = "GB"


class SubmissionState(str, Enum):
    """State of a booking form's submission lifecycle."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class DraftStoreBackend(str, Enum):
    """Storage backends available for saved drafts."""

    MEMORY = "memory"
    FILE = "file"
    DYNAMODB = "dynamodb"
