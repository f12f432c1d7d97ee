"""Calculator modules for TimePulse."""

from timepulse.calculators.hours_calculator import (
    AUTO_BREAK_HOURS,
    AUTO_BREAK_THRESHOLD_HOURS,
    DailyTotalResult,
    calculate_daily_total,
    daily_total,
    derive_entry_hours,
    hours_between,
    was_break_taken,
)
from timepulse.calculators.time_utils import (
    calculate_duration_minutes,
    convert_time_to_minutes,
    minutes_to_decimal_hours,
    normalize_time,
    parse_clock_time,
    round_hours,
    timedelta_to_decimal_hours,
)

__all__ = [
    # hours_calculator
    "AUTO_BREAK_HOURS",
    "AUTO_BREAK_THRESHOLD_HOURS",
    "DailyTotalResult",
    "calculate_daily_total",
    "daily_total",
    "derive_entry_hours",
    "hours_between",
    "was_break_taken",
    # time_utils
    "calculate_duration_minutes",
    "convert_time_to_minutes",
    "minutes_to_decimal_hours",
    "normalize_time",
    "parse_clock_time",
    "round_hours",
    "timedelta_to_decimal_hours",
]
