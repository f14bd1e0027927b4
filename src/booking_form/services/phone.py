"""Country-aware phone number checks.

Checks digit counts and calling codes for the countries the form offers. This
is not a full numbering-plan validator.
"""

import re

from booking_form.models import DEFAULT_COUNTRY, CountryCode, CountryPhoneRule, PhoneCheck

# Minimum/maximum digit counts per country (local form or with calling code)
PHONE_RULES: dict[str, CountryPhoneRule] = {
    CountryCode.NG.value: CountryPhoneRule(min_digits=10, max_digits=13, calling_code="234"),
    CountryCode.US.value: CountryPhoneRule(min_digits=10, max_digits=11, calling_code="1"),
    CountryCode.GB.value: CountryPhoneRule(min_digits=10, max_digits=12, calling_code="44"),
}

_NON_DIGITS = re.compile(r"\D+", re.ASCII)


def get_phone_rule(country: str | None) -> CountryPhoneRule:
    """Rule for a country code, falling back to the default country."""
    return PHONE_RULES.get(country or DEFAULT_COUNTRY.value, PHONE_RULES[DEFAULT_COUNTRY.value])


def normalize_phone(country: str | None, raw_phone: str | None) -> PhoneCheck:
    """Check a phone number and normalize it to +<digits>.

    Args:
        country: Country code (NG, US, GB); unknown or missing codes use NG
        raw_phone: Phone number as typed by the guest

    Returns:
        PhoneCheck with ok=False and a message when the digit count does not
        fit the country. A blank number is valid and normalizes to "".
    """
    if not isinstance(raw_phone, str) or not raw_phone.strip():
        return PhoneCheck(ok=True, normalized="")

    digits = _NON_DIGITS.sub("", raw_phone)
    rule = get_phone_rule(country)

    if not rule.min_digits <= len(digits) <= rule.max_digits:
        return PhoneCheck(
            ok=False,
            message=f"Phone number seems invalid for {country or 'selected country'}.",
        )

    has_code = digits.startswith(rule.calling_code)
    if has_code or len(digits) == rule.min_digits:
        return PhoneCheck(
            ok=True,
            normalized="+" + (digits if has_code else rule.calling_code + digits),
        )
    return PhoneCheck(ok=True, normalized="+" + digits)
