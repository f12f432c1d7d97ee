"""TimePulse - timesheet and project tracking."""

__version__ = "1.0.0"
