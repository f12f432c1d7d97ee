"""Hours calculation engine for TimePulse.

This module implements the business rules for:
- Elapsed hours between two clock times (End - Start, never negative)
- Deriving an entry's hours from its time range
- Daily totals with the automatic break deduction

Break policy: once a working day reaches 4.5 hours and no entry on that day
records a break, a 30-minute break is deducted from the displayed total.
The deduction is a derived value; stored entries are never changed.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from timepulse.calculators.time_utils import (
    calculate_duration_minutes,
    minutes_to_decimal_hours,
    parse_clock_time,
    round_hours,
)
from timepulse.models.timesheet import TimesheetEntry

logger = logging.getLogger(__name__)

AUTO_BREAK_THRESHOLD_HOURS = Decimal("4.5")
AUTO_BREAK_HOURS = Decimal("0.5")
ZERO_HOURS = Decimal("0")


@dataclass
class DailyTotalResult:
    """Result of a daily total calculation.

    Attributes:
        raw_hours: Plain sum of the entries' hours
        total_hours: Hours after the automatic break deduction
        break_taken: Whether any entry recorded an explicit break
        auto_break_applied: Whether the automatic break was deducted
    """

    raw_hours: Decimal
    total_hours: Decimal
    break_taken: bool
    auto_break_applied: bool


def hours_between(start: Optional[str], end: Optional[str]) -> Decimal:
    """Calculate elapsed hours between two "HH:MM" clock times.

    Both times are treated as the same day. A range that ends before it
    starts yields 0, and so does any unparseable input (logged, not raised).

    Args:
        start: Start time ("HH:MM")
        end: End time ("HH:MM")

    Returns:
        Hours rounded to 2 decimal places, never negative

    Example:
        >>> hours_between("09:00", "11:30")
        Decimal('2.50')
        >>> hours_between("17:00", "09:00")
        Decimal('0.00')
    """
    start_time = parse_clock_time(start)
    end_time = parse_clock_time(end)

    if start_time is None or end_time is None:
        logger.warning(
            f"Could not parse time range {start!r} - {end!r}, using 0 hours"
        )
        return minutes_to_decimal_hours(0)

    minutes = calculate_duration_minutes(start_time, end_time)
    return minutes_to_decimal_hours(max(0, minutes))


def derive_entry_hours(
    hours: Optional[Decimal],
    start_time: Optional[str],
    end_time: Optional[str],
) -> Optional[Decimal]:
    """Pick the hours for an entry.

    Explicitly entered hours win; otherwise the hours are derived from the
    time range when both ends are present.

    Returns:
        The hours, or None when neither hours nor a full time range is given
    """
    if hours is not None:
        return round_hours(hours)
    if start_time and end_time:
        return hours_between(start_time, end_time)
    return None


def was_break_taken(entries: Iterable[TimesheetEntry]) -> bool:
    """Check whether any of the entries records an explicit break."""
    return any(entry.break_taken for entry in entries)


def calculate_daily_total(
    entries: Iterable[TimesheetEntry],
    threshold: Decimal = AUTO_BREAK_THRESHOLD_HOURS,
    auto_break: Decimal = AUTO_BREAK_HOURS,
) -> DailyTotalResult:
    """Calculate the total hours for one calendar date's entries.

    Args:
        entries: Entries for a single date
        threshold: Raw hours at which a break becomes mandatory
        auto_break: Hours deducted when no break was recorded

    Returns:
        DailyTotalResult with the raw sum and the adjusted total

    Example:
        >>> result = calculate_daily_total([])
        >>> result.total_hours
        Decimal('0')
    """
    entries = list(entries)
    raw_hours = sum((Decimal(entry.hours) for entry in entries), ZERO_HOURS)
    break_taken = was_break_taken(entries)

    auto_break_applied = not break_taken and raw_hours >= threshold
    total_hours = raw_hours
    if auto_break_applied:
        total_hours = max(ZERO_HOURS, raw_hours - auto_break)
        logger.debug(
            f"No break recorded for {raw_hours} hours, deducting {auto_break} hours"
        )

    return DailyTotalResult(
        raw_hours=raw_hours,
        total_hours=total_hours,
        break_taken=break_taken,
        auto_break_applied=auto_break_applied,
    )


def daily_total(
    entries: Iterable[TimesheetEntry],
    threshold: Decimal = AUTO_BREAK_THRESHOLD_HOURS,
    auto_break: Decimal = AUTO_BREAK_HOURS,
) -> Decimal:
    """Total worked hours for one date, after the automatic break deduction.

    Example:
        >>> daily_total([])
        Decimal('0')
    """
    return calculate_daily_total(entries, threshold, auto_break).total_hours
