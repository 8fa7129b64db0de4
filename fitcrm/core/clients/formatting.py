"""
Date and timestamp helpers.

Timestamps are stored the way browsers serialize them
(``2025-09-01T08:30:00.000Z``) so records stay readable by anything
that already consumes the stored collection.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

DISPLAY_PLACEHOLDER = "N/A"

# strftime("%B") follows the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

DateLike = Union[date, datetime, str, None]


def format_timestamp(value: datetime) -> str:
    """Serialize as UTC ISO-8601 with millisecond precision and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_date(value: str) -> date:
    """
    Parse a calendar date.

    Accepts plain ``YYYY-MM-DD`` as well as full timestamps, in which case
    the date part is kept.
    """
    text = value.strip()
    if len(text) > 10:
        return parse_timestamp(text).date()
    return date.fromisoformat(text)


def _as_date(value: DateLike) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value.strip():
        return None
    return parse_date(value)


def format_date(value: DateLike) -> str:
    """Long display form, e.g. ``January 5, 2025``; ``N/A`` when missing."""
    day = _as_date(value)
    if day is None:
        return DISPLAY_PLACEHOLDER
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def format_date_for_input(value: DateLike) -> str:
    """``YYYY-MM-DD`` for date inputs; empty string when missing."""
    day = _as_date(value)
    if day is None:
        return ""
    return day.isoformat()
