# services/validation.py
"""Input checks shared by the services that accept raw payload values."""

from gym_scheduler.utils.time_utils import parse_iso_datetime
from .errors import InvalidArgumentError, SchedulingErrorCode


def positive_int(value, label, error_code=SchedulingErrorCode.INVALID_ARGUMENT):
    """Accept an int or a string of digits that is at least 1."""
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        number = None

    if number is None or number < 1:
        raise InvalidArgumentError(f'{label} must be a positive whole number', error_code)
    return number


def required_text(value, label):
    text = value.strip() if isinstance(value, str) else ''
    if not text:
        raise InvalidArgumentError(f'{label} is required')
    return text


def instant(value, label):
    """Parse a datetime or ISO-8601 string into naive UTC."""
    if value is None or value == '':
        raise InvalidArgumentError(f'{label} is required')
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise InvalidArgumentError(f'{label} is not a valid ISO 8601 datetime')
