"""Unit tests for clock-time utilities."""

import datetime as dt
from decimal import Decimal

import pytest

from timepulse.calculators.time_utils import (
    calculate_duration_minutes,
    convert_time_to_minutes,
    minutes_to_decimal_hours,
    normalize_time,
    parse_clock_time,
    round_hours,
    timedelta_to_decimal_hours,
)


class TestParseClockTime:
    """Test cases for parse_clock_time."""

    def test_parses_24_hour_time(self):
        assert parse_clock_time("13:45") == dt.time(13, 45)

    def test_single_digit_hour(self):
        assert parse_clock_time("9:05") == dt.time(9, 5)

    @pytest.mark.parametrize("value", [None, "", "24:00", "12:60", "9am", "abc"])
    def test_invalid_returns_none(self, value):
        assert parse_clock_time(value) is None


class TestConversions:
    """Test cases for minute and hour conversions."""

    def test_convert_time_to_minutes(self):
        assert convert_time_to_minutes(dt.time(0, 0)) == 0
        assert convert_time_to_minutes(dt.time(23, 59)) == 1439

    def test_duration_can_be_negative(self):
        assert calculate_duration_minutes(dt.time(17, 0), dt.time(9, 0)) == -480

    @pytest.mark.parametrize(
        "minutes,expected",
        [(0, "0.00"), (150, "2.50"), (10, "0.17"), (20, "0.33"), (45, "0.75")],
    )
    def test_minutes_to_decimal_hours(self, minutes, expected):
        assert minutes_to_decimal_hours(minutes) == Decimal(expected)

    def test_timedelta_to_decimal_hours(self):
        assert timedelta_to_decimal_hours(dt.timedelta(minutes=100)) == Decimal("1.67")

    def test_round_hours_half_up(self):
        assert round_hours(Decimal("2.345")) == Decimal("2.35")


class TestNormalizeTime:
    """Test cases for 12/24-hour normalization."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("9", "09:00"),
            ("9:30", "09:30"),
            ("13:15", "13:15"),
            ("10am", "10:00"),
            ("2pm", "14:00"),
            ("2:15pm", "14:15"),
            ("12pm", "12:00"),
            ("12am", "12:00"),
            ("11 PM", "23:00"),
        ],
    )
    def test_normalizes(self, value, expected):
        assert normalize_time(value) == expected

    @pytest.mark.parametrize("value", ["25", "9:75", "noon", ""])
    def test_invalid_returns_none(self, value):
        assert normalize_time(value) is None
