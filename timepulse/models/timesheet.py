"""Timesheet data models for TimePulse.

This module defines the TimesheetEntry model which represents a block of
hours logged by a user against one work order on one calendar date, the
input shapes used to create and update entries, and the derived
TimesheetSuggestion model.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import Field, field_validator, model_validator

from timepulse.models.base import BaseDataModel, to_decimal, utcnow
from timepulse.models.project import WorkOrderType


class LeaveType(str, Enum):
    """How much of the day a leave entry covers."""

    FULL_DAY = "full-day"
    HALF_DAY = "half-day"
    HOURS = "hours"


def _coerce_date(v: Any) -> Any:
    """Truncate datetimes and ISO timestamps to their date portion."""
    if isinstance(v, dt.datetime):
        return v.date()
    if isinstance(v, str) and "T" in v:
        return v.split("T", 1)[0]
    return v


def _normalize_clock_time(v: Optional[str], field_name: str) -> Optional[str]:
    """Validate an "HH:MM" 24-hour string and zero-pad the hour."""
    if v is None or not str(v).strip():
        return None
    try:
        parsed = dt.datetime.strptime(str(v).strip(), "%H:%M")
    except ValueError:
        raise ValueError(f"{field_name} must be a 24-hour HH:MM time, got {v!r}")
    return parsed.strftime("%H:%M")


def _drop_inapplicable_fields(data: Any, partial: bool = False) -> Any:
    """Clear break/leave details that do not apply to the entry.

    break_duration only means something when a break was taken, leave_type
    only for leave entries, and leave_hours only for hourly leave.
    """
    if not isinstance(data, dict):
        return data
    data = dict(data)
    if (not partial or "break_taken" in data) and not data.get("break_taken"):
        data["break_duration"] = None
    if (not partial or "is_leave" in data) and not data.get("is_leave"):
        data["leave_type"] = None
        data["leave_hours"] = None
    elif "leave_type" in data and data.get("leave_type") not in (
        LeaveType.HOURS,
        LeaveType.HOURS.value,
    ):
        data["leave_hours"] = None
    return data


class _EntryFields(BaseDataModel):
    """Validators shared by the entry models."""

    _partial: ClassVar[bool] = False

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def truncate_date(cls, v: Any) -> Any:
        return _coerce_date(v)

    @field_validator("start_time", "end_time", check_fields=False)
    @classmethod
    def validate_clock_time(cls, v: Optional[str], info) -> Optional[str]:
        return _normalize_clock_time(v, info.field_name)

    @field_validator("hours", "leave_hours", mode="before", check_fields=False)
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Any:
        if v is None:
            return v
        return to_decimal(v)

    @field_validator("description", check_fields=False)
    @classmethod
    def strip_description(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None

    @model_validator(mode="before")
    @classmethod
    def drop_inapplicable_fields(cls, data: Any) -> Any:
        return _drop_inapplicable_fields(data, partial=cls._partial)


class TimesheetEntryCreate(_EntryFields):
    """Input data for a new timesheet entry.

    hours may be omitted when both start_time and end_time are given; the
    timesheet service then derives it from the time range.

    Example:
        >>> data = TimesheetEntryCreate(
        ...     user_id=1,
        ...     work_order_id=1,
        ...     date="2023-06-15T00:00:00.000Z",
        ...     start_time="9:00",
        ...     end_time="11:30",
        ... )
        >>> data.date, data.start_time
        (datetime.date(2023, 6, 15), '09:00')
    """

    user_id: int = Field(..., ge=1, description="User who logged the hours")
    work_order_id: int = Field(..., ge=1, description="Referenced work order")
    date: dt.date = Field(..., description="Calendar date of the work")
    hours: Optional[Decimal] = Field(None, ge=0, description="Hours worked")
    start_time: Optional[str] = Field(None, description="Start time (HH:MM)")
    end_time: Optional[str] = Field(None, description="End time (HH:MM)")
    description: Optional[str] = Field(None, description="What was worked on")
    break_taken: bool = Field(False, description="Whether a break was recorded")
    break_duration: Optional[int] = Field(None, ge=0, description="Break in minutes")
    is_leave: bool = Field(False, description="Whether this is leave time")
    leave_type: Optional[LeaveType] = Field(None, description="Leave type")
    leave_hours: Optional[Decimal] = Field(
        None, ge=0, description="Leave hours (hourly leave only)"
    )


class TimesheetEntryUpdate(_EntryFields):
    """Partial update of a timesheet entry; unset fields are left untouched."""

    _partial: ClassVar[bool] = True

    work_order_id: Optional[int] = Field(None, ge=1)
    date: Optional[dt.date] = None
    hours: Optional[Decimal] = Field(None, ge=0)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    description: Optional[str] = None
    break_taken: Optional[bool] = None
    break_duration: Optional[int] = Field(None, ge=0)
    is_leave: Optional[bool] = None
    leave_type: Optional[LeaveType] = None
    leave_hours: Optional[Decimal] = Field(None, ge=0)


class TimesheetEntry(TimesheetEntryCreate):
    """A stored timesheet entry.

    Attributes:
        id: Identifier assigned by the store, stable for the entry lifetime
        user_id: User who logged the hours
        work_order_id: Referenced work order
        date: Calendar date (compared by date only)
        hours: Non-negative hours worked
        start_time: Optional start time ("HH:MM")
        end_time: Optional end time ("HH:MM")
        description: Optional free text
        break_taken: Whether an explicit break was recorded
        break_duration: Break length in minutes (only when break_taken)
        is_leave: Whether this is leave time
        leave_type: full-day, half-day or hours (only when is_leave)
        leave_hours: Leave hours (only for hourly leave)
        created_at: Creation timestamp
    """

    id: int = Field(..., ge=1, description="Entry identifier")
    hours: Decimal = Field(..., ge=0, description="Hours worked")
    created_at: dt.datetime = Field(default_factory=utcnow)

    @property
    def date_key(self) -> str:
        """ISO yyyy-MM-dd key used to group entries by day."""
        return self.date.isoformat()


class TimesheetSuggestion(BaseDataModel):
    """A quick-fill suggestion derived from recurring past entries.

    Suggestions are built on demand and never stored.
    """

    work_order_id: int
    project_title: str = ""
    project_reference: str = ""
    work_order_type: Optional[WorkOrderType] = None
    work_order_identifier: str = ""
    hours: Decimal
    start_time: str = "09:00"
    end_time: str = "17:00"
    description: Optional[str] = None
    frequency: int = Field(..., ge=1, description="Occurrences in the window")
    last_used: dt.date = Field(..., description="Most recent occurrence")
    break_taken: bool = False
    break_duration: Optional[int] = None
    is_leave: bool = False
    leave_type: Optional[LeaveType] = None
    leave_hours: Optional[Decimal] = None
