"""
Calendar Primitives Module

Date helpers used by the calendar-accurate simulation. Everything works on
datetime.date values, so a normalized date is always a whole UTC day with no
time-of-day or DST component.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Union
import calendar
import math
import re

from .exceptions import InvalidDateError, InvalidDayCountError

DateLike = Union[date, datetime, str, int, float]

_ISO_DATE_ONLY = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def normalize_date(value: DateLike) -> date:
    """
    Normalize a date-like input to a calendar day (UTC)

    Args:
        value: date, datetime, ISO-8601 string or POSIX timestamp in seconds
            (millisecond epochs, such as JavaScript Date.now(), must be
            divided by 1000 first)

    Returns:
        The corresponding date

    Raises:
        InvalidDateError: If the input cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        try:
            if _ISO_DATE_ONLY.match(text):
                return date.fromisoformat(text)
            return normalize_date(datetime.fromisoformat(text))
        except ValueError:
            raise InvalidDateError(f"Invalid date value: '{value}'") from None

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidDateError("Timestamp must be finite")
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            raise InvalidDateError(f"Timestamp out of range: {value}") from None

    raise InvalidDateError("Date input must be a date, ISO string, or timestamp")


def add_days(value: DateLike, days: int) -> date:
    """Return the date `days` days after value (negative moves backwards)"""
    if isinstance(days, bool) or not isinstance(days, int):
        raise InvalidDayCountError("Days must be an integer")
    return normalize_date(value) + timedelta(days=days)


def days_between(start: DateLike, end: DateLike) -> int:
    """Signed day count from start (inclusive) to end (exclusive)"""
    return (normalize_date(end) - normalize_date(start)).days


def is_same_day(left: DateLike, right: DateLike) -> bool:
    return normalize_date(left) == normalize_date(right)


def last_day_of_month(value: DateLike) -> date:
    normalized = normalize_date(value)
    last = calendar.monthrange(normalized.year, normalized.month)[1]
    return normalized.replace(day=last)


def is_last_day_of_month(value: DateLike) -> bool:
    normalized = normalize_date(value)
    return normalized.day == calendar.monthrange(normalized.year, normalized.month)[1]


def add_months_preserve_day(value: DateLike, months: int) -> date:
    """
    Add calendar months keeping the day of month, clamped to month end

    Jan 31 + 1 month is Feb 29 in a leap year and Feb 28 otherwise.
    """
    if isinstance(months, bool) or not isinstance(months, int):
        raise InvalidDateError("Months to add must be an integer")

    normalized = normalize_date(value)
    month_index = normalized.year * 12 + (normalized.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    if not date.min.year <= year <= date.max.year:
        raise InvalidDateError("Resulting date is out of range")

    day = min(normalized.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
