"""Time calculation utilities for TimePulse.

This module provides low-level utilities for clock-time handling:
- Parsing "HH:MM" strings into dt.time objects
- Converting time to minutes since midnight
- Normalizing 12-hour ("9am", "2:30pm") inputs to 24-hour "HH:MM"
- Converting minutes and timedeltas to decimal hours

These utilities are timezone-agnostic and treat both ends of a range as
times on the same day.
"""

import datetime as dt
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

HOURS_QUANTUM = Decimal("0.01")

_TWELVE_HOUR_PATTERN = re.compile(r"^(\d{1,2})(?::(\d{1,2}))?\s*(am|pm)?$")


def parse_clock_time(value: Optional[str]) -> Optional[dt.time]:
    """Parse an "HH:MM" 24-hour string.

    Args:
        value: The string to parse

    Returns:
        The parsed time, or None if the value is missing or malformed

    Example:
        >>> parse_clock_time("09:30")
        datetime.time(9, 30)
        >>> parse_clock_time("25:00") is None
        True
    """
    if not value:
        return None
    try:
        return dt.datetime.strptime(value.strip(), "%H:%M").time()
    except (ValueError, AttributeError):
        return None


def convert_time_to_minutes(time: dt.time) -> int:
    """Convert a dt.time object to minutes since midnight.

    Example:
        >>> convert_time_to_minutes(dt.time(9, 30))
        570
    """
    return time.hour * 60 + time.minute


def calculate_duration_minutes(start_time: dt.time, end_time: dt.time) -> int:
    """Calculate minutes between two same-day times (negative if end < start).

    Example:
        >>> calculate_duration_minutes(dt.time(9, 0), dt.time(11, 30))
        150
    """
    return convert_time_to_minutes(end_time) - convert_time_to_minutes(start_time)


def minutes_to_decimal_hours(minutes: int) -> Decimal:
    """Convert minutes to decimal hours with 2 decimal precision.

    Example:
        >>> minutes_to_decimal_hours(150)
        Decimal('2.50')
        >>> minutes_to_decimal_hours(10)
        Decimal('0.17')
    """
    hours = Decimal(minutes) / Decimal("60")
    return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def timedelta_to_decimal_hours(td: dt.timedelta) -> Decimal:
    """Convert a timedelta to decimal hours with 2 decimal precision.

    Example:
        >>> timedelta_to_decimal_hours(dt.timedelta(hours=7, minutes=30))
        Decimal('7.50')
    """
    hours = Decimal(str(td.total_seconds())) / Decimal("3600")
    return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def round_hours(value: Decimal) -> Decimal:
    """Round an hours value to 2 decimal places."""
    return Decimal(value).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def normalize_time(time_str: str) -> Optional[str]:
    """Normalize a loosely written time to 24-hour "HH:MM".

    Rules:
    - No suffix: hour and minute are taken as written ("9" -> "09:00")
    - "am": taken as written, "12am" is not special-cased
    - "pm": 12 is added to any hour below 12

    Args:
        time_str: A time like "9", "9:30", "10am" or "2:15pm"

    Returns:
        The normalized time, or None if it is not a valid clock time

    Example:
        >>> normalize_time("2:30pm")
        '14:30'
        >>> normalize_time("9")
        '09:00'
        >>> normalize_time("12pm")
        '12:00'
    """
    match = _TWELVE_HOUR_PATTERN.match(time_str.strip().lower())
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    if match.group(3) == "pm" and hour < 12:
        hour += 12

    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"
