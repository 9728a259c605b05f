# utils/time_utils.py
"""
Datetime helpers shared by the scheduler, the forms and the CLI.
Every instant is stored as a naive UTC datetime.
"""

from datetime import datetime, date, time, timedelta, timezone


def to_utc_naive(value):
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_iso_datetime(value):
    """
    Parse an ISO-8601 timestamp into a naive UTC datetime.

    Accepts datetime objects, 'YYYY-MM-DDTHH:MM[:SS[.ffffff]]' with an optional
    offset or trailing 'Z'.

    Raises:
        ValueError: if the value cannot be parsed
    """
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError('Not a valid ISO 8601 datetime')

    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f'Not a valid ISO 8601 datetime: {value}')

    return to_utc_naive(parsed)


def parse_iso_date(value):
    """Parse 'YYYY-MM-DD', or a full timestamp whose UTC date is used."""
    if isinstance(value, datetime):
        return to_utc_naive(value).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f'Not a valid date: {value}')
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        pass
    try:
        return parse_iso_datetime(value).date()
    except ValueError:
        raise ValueError(f'Not a valid date: {value}')


def day_bounds(day):
    """Return the half-open [start, end) range covering one calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def intervals_overlap(a_start, a_end, b_start, b_end):
    """
    Half-open interval overlap test for [a_start, a_end) and [b_start, b_end).

    Symmetric in its two intervals; intervals that only touch (one ends
    exactly when the other starts) do not overlap.
    """
    return a_start < b_end and b_start < a_end


def minutes_between(start, end):
    """Whole minutes from start to end, rounded to the nearest minute."""
    return round((end - start).total_seconds() / 60)
