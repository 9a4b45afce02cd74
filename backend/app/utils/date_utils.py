"""
Calendar date utilities.

Every date entering the scheduling core goes through ``to_canonical_date``.
A literal "YYYY-MM-DD" string is always taken at face value: it is never
interpreted as UTC midnight, so the calendar day cannot shift in timezones
behind UTC.
"""

import re
from datetime import date, datetime, timedelta
from typing import Union

from app.core.exceptions import ValidationError

CANONICAL_DATE_FORMAT = "%Y-%m-%d"

_CANONICAL_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)

DateInput = Union[str, date, datetime]


def parse_canonical_date(value: str) -> date:
    """
    Parse a strict "YYYY-MM-DD" string into a calendar date.

    Args:
        value: Date string in canonical form

    Returns:
        date: Calendar date built from the literal year/month/day fields

    Raises:
        ValidationError: If the string is not canonical or not a real date
    """
    match = _CANONICAL_DATE_RE.match(value.strip())
    if not match:
        raise ValidationError(f"Invalid date format: {value!r} (expected YYYY-MM-DD)")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}") from e


def to_canonical_date(value: DateInput) -> date:
    """
    Convert a date representation to a local calendar date.

    Handles:
    - Strict "YYYY-MM-DD" strings (fields taken literally)
    - ISO datetime strings, with or without offset ("2025-03-10T08:00:00Z")
    - date objects (returned unchanged)
    - datetime objects (aware ones are converted to local time first)

    Raises:
        ValidationError: If the value is empty or cannot be parsed
    """
    if value is None:
        raise ValidationError("Date is required")

    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return _datetime_to_local_date(value)
    if isinstance(value, date):
        return value

    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Date is required")

    text = value.strip()
    if _CANONICAL_DATE_RE.match(text):
        return parse_canonical_date(text)

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}") from e
    return _datetime_to_local_date(parsed)


def format_canonical_date(value: date) -> str:
    """Format a calendar date as "YYYY-MM-DD" from its own fields."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def add_days(value: date, days: int) -> date:
    """Shift a calendar date by a number of days."""
    return value + timedelta(days=days)


def _datetime_to_local_date(value: datetime) -> date:
    if value.tzinfo is not None:
        # astimezone() with no argument converts to the process's local zone
        value = value.astimezone()
    return value.date()
