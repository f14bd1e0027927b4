"""Validation result models for the guest details form."""

from pydantic import BaseModel, ConfigDict, Field


class CountryPhoneRule(BaseModel):
    """Accepted phone digit counts and calling code for one country."""

    model_config = ConfigDict(frozen=True)

    min_digits: int = Field(..., ge=1)
    max_digits: int = Field(..., ge=1)
    calling_code: str = Field(..., pattern=r"^\d+$")


class PhoneCheck(BaseModel):
    """Outcome of checking a phone number against a country rule."""

    ok: bool
    normalized: str = ""
    message: str | None = None


class ValidationResult(BaseModel):
    """Errors found in one validation pass, keyed by draft field name."""

    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors
