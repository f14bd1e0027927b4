"""Runtime configuration for the booking form and API.

Values come from environment variables (or a local .env file) so the same
code runs locally, in tests and on Lambda:

    ENVIRONMENT                 dev/prod, used for DynamoDB table names
    BOOKING_PERSIST_KEY         draft key (empty string disables persistence)
    BOOKING_REDIRECT_TO         destination after success (empty disables)
    BOOKING_SUCCESS_DELAY       seconds the success message stays visible
    BOOKING_MOCK_LATENCY        simulated latency of the mock booking API
    BOOKING_MOCK_FAILURE_RATE   probability the mock booking API fails
    BOOKING_API_URL             real booking API; unset means use the mock
    BOOKING_REQUEST_TIMEOUT     HTTP timeout for the real booking API
    BOOKING_DRAFT_STORE         memory, file or dynamodb
    BOOKING_DRAFT_DIR           directory for the file draft store
    BOOKING_DRAFT_TTL_SECONDS   lifetime of drafts saved in DynamoDB
    LOG_LEVEL                   root log level
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.enums import DraftStoreBackend


class FormConfig(BaseSettings):
    """Configuration shared by the form engine and the booking API."""

    environment: str = Field(default="dev", validation_alias="ENVIRONMENT")
    persist_key: str | None = Field(default="guestDetails", validation_alias="BOOKING_PERSIST_KEY")
    redirect_to: str | None = Field(default="/checkout", validation_alias="BOOKING_REDIRECT_TO")
    success_display_delay: float = Field(
        default=0.8, ge=0, validation_alias="BOOKING_SUCCESS_DELAY"
    )
    mock_latency: float = Field(default=1.2, ge=0, validation_alias="BOOKING_MOCK_LATENCY")
    mock_failure_rate: float = Field(
        default=0.1, ge=0, le=1, validation_alias="BOOKING_MOCK_FAILURE_RATE"
    )
    booking_api_url: str | None = Field(default=None, validation_alias="BOOKING_API_URL")
    request_timeout: float = Field(default=10.0, gt=0, validation_alias="BOOKING_REQUEST_TIMEOUT")
    draft_store: DraftStoreBackend = Field(
        default=DraftStoreBackend.MEMORY, validation_alias="BOOKING_DRAFT_STORE"
    )
    draft_dir: str = Field(default=".drafts", validation_alias="BOOKING_DRAFT_DIR")
    draft_ttl_seconds: int = Field(
        default=7 * 24 * 3600, ge=60, validation_alias="BOOKING_DRAFT_TTL_SECONDS"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("persist_key", "redirect_to", "booking_api_url", mode="before")
    @classmethod
    def empty_means_disabled(cls, value: object) -> object:
        return value or None

    @classmethod
    def from_env(cls) -> "FormConfig":
        """Build configuration from the environment."""
        return cls()


@lru_cache(maxsize=1)
def get_config() -> FormConfig:
    """Load and cache configuration so every module shares the same values."""
    return FormConfig.from_env()


def reset_config() -> None:
    """Clear the cached configuration (for testing only)."""
    get_config.cache_clear()
