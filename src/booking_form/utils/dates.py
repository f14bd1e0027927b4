"""Date helpers for ISO (YYYY-MM-DD) stay dates."""

import datetime as dt


def parse_iso_date(value: str | dt.date | None) -> dt.date | None:
    """Parse a YYYY-MM-DD string, returning None when it is not a real date."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return dt.datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def add_days_iso(value: str | dt.date, days: int) -> str:
    """Shift an ISO date by a number of days.

    Raises:
        ValueError: If value is not a valid date
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        raise ValueError(f"Invalid date '{value}'")
    return (parsed + dt.timedelta(days=days)).isoformat()


def count_nights(arrival: str | dt.date, departure: str | dt.date) -> int | None:
    """Nights between two dates, or None if either date is invalid."""
    start = parse_iso_date(arrival)
    end = parse_iso_date(departure)
    if start is None or end is None:
        return None
    return (end - start).days
