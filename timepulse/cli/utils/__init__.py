"""CLI utility functions."""

from timepulse.cli.utils.formatters import (
    format_error,
    format_hours,
    format_info,
    format_success,
    format_table,
    format_time_range,
    format_warning,
)

__all__ = [
    "format_error",
    "format_hours",
    "format_info",
    "format_success",
    "format_table",
    "format_time_range",
    "format_warning",
]
