"""Calendar helpers for weekly timesheet views.

Weeks start on Monday and the timesheet shows the five working days.
"""

import datetime as dt
from typing import List, Union

WORK_DAYS_PER_WEEK = 5


def to_date_key(value: Union[dt.date, dt.datetime, str]) -> str:
    """Return the ISO yyyy-MM-dd key for a date, datetime or ISO string.

    Any time-of-day or timezone suffix is dropped.

    Example:
        >>> to_date_key("2023-06-15T08:30:00.000Z")
        '2023-06-15'
        >>> to_date_key(dt.datetime(2023, 6, 15, 23, 59))
        '2023-06-15'
    """
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value).split("T", 1)[0][:10]


def get_week_start(day: dt.date) -> dt.date:
    """Return the Monday of the week containing day."""
    return day - dt.timedelta(days=day.weekday())


def get_week_dates(day: dt.date) -> List[dt.date]:
    """Return Monday to Friday of the week containing day.

    Example:
        >>> [d.day for d in get_week_dates(dt.date(2026, 10, 16))]
        [12, 13, 14, 15, 16]
    """
    start = get_week_start(day)
    return [start + dt.timedelta(days=i) for i in range(WORK_DAYS_PER_WEEK)]


def get_week_date_keys(day: dt.date) -> List[str]:
    """Return the ISO keys of Monday to Friday of the week containing day."""
    return [d.isoformat() for d in get_week_dates(day)]


def get_week_end(day: dt.date) -> dt.date:
    """Return the Friday of the week containing day."""
    return get_week_dates(day)[-1]


def get_calendar_week_end(day: dt.date) -> dt.date:
    """Return the Sunday of the week containing day.

    Reports cover the whole calendar week, weekends included.
    """
    return get_week_start(day) + dt.timedelta(days=6)


def format_date_range(start: dt.date, end: dt.date) -> str:
    """Format a span of days as "October 12 - October 18, 2026"."""
    return f"{start:%B} {start.day} - {end:%B} {end.day}, {end.year}"


def format_week_range(day: dt.date) -> str:
    """Format the working week as "October 12 - October 16, 2026"."""
    dates = get_week_dates(day)
    return format_date_range(dates[0], dates[-1])


def format_long_date(day: dt.date) -> str:
    """Format a date as "Friday, October 16"."""
    return f"{day:%A}, {day:%B} {day.day}"


def format_day(day: dt.date) -> str:
    """Format a date as its abbreviated weekday, e.g. "Fri"."""
    return f"{day:%a}"
