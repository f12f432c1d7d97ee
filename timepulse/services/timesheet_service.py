"""Timesheet service: entry CRUD, derived hours and the weekly view.

All mutations go through here so that hours are derived consistently and
failures reach callers as service errors (see timepulse.services.errors).
"""

import datetime as dt
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

import pandas as pd

from timepulse.aggregators.entry_aggregator import build_weekly_matrix, group_by_date
from timepulse.calculators.hours_calculator import (
    AUTO_BREAK_HOURS,
    AUTO_BREAK_THRESHOLD_HOURS,
    ZERO_HOURS,
    DailyTotalResult,
    calculate_daily_total,
    derive_entry_hours,
)
from timepulse.models import (
    AuditAction,
    AuditEntity,
    AuditLog,
    TimesheetEntry,
    TimesheetEntryCreate,
    TimesheetEntryUpdate,
    WorkOrder,
)
from timepulse.services.error_classifier import ErrorClassifier
from timepulse.services.errors import CALLER_ERRORS, InvalidInputError, NotFoundError
from timepulse.storage.base import Storage
from timepulse.utils.date_utils import get_week_date_keys, get_week_end, get_week_start
from timepulse.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

MISSING_HOURS_MESSAGE = "Either hours or both a start and an end time are required."


@dataclass
class WeekTimesheet:
    """One user's Monday to Friday timesheet.

    Attributes:
        week_start: Monday of the week
        date_keys: ISO date keys Monday..Friday
        entries_by_date: Entries grouped under each date key
        daily_totals: Daily total (with automatic break) per date key
        work_orders: Work orders referenced by the entries, by id
    """

    week_start: dt.date
    date_keys: List[str]
    entries_by_date: Dict[str, List[TimesheetEntry]]
    daily_totals: Dict[str, DailyTotalResult]
    work_orders: Dict[int, WorkOrder] = field(default_factory=dict)

    @property
    def total_hours(self) -> Decimal:
        return sum(
            (result.total_hours for result in self.daily_totals.values()), ZERO_HOURS
        )

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.entries_by_date.values())

    def to_matrix(self) -> pd.DataFrame:
        """Hours per work order identifier (rows) and date key (columns)."""
        return build_weekly_matrix(self.entries_by_date, self.work_orders.values())


class TimesheetService:
    """Creates, updates, deletes and reads timesheet entries.

    Example:
        >>> service = TimesheetService(storage)
        >>> entry = service.create_entry(
        ...     TimesheetEntryCreate(
        ...         user_id=1, work_order_id=1, date="2023-06-15",
        ...         start_time="09:00", end_time="11:30",
        ...     )
        ... )
        >>> entry.hours
        Decimal('2.50')
    """

    def __init__(
        self,
        storage: Storage,
        auto_break_threshold: Decimal = AUTO_BREAK_THRESHOLD_HOURS,
        auto_break_hours: Decimal = AUTO_BREAK_HOURS,
        classifier: Optional[ErrorClassifier] = None,
    ):
        self.storage = storage
        self.auto_break_threshold = auto_break_threshold
        self.auto_break_hours = auto_break_hours
        self.classifier = classifier or ErrorClassifier()

    @log_function_call(expected=CALLER_ERRORS)
    def create_entry(self, data: TimesheetEntryCreate) -> TimesheetEntry:
        """Persist a new entry, deriving hours from the time range if needed.

        Raises:
            InvalidInputError: Neither hours nor a full time range, or bad data
            NotFoundError: The work order does not exist
            OperationFailedError: The store failed
        """
        hours = derive_entry_hours(data.hours, data.start_time, data.end_time)
        if hours is None:
            raise InvalidInputError(MISSING_HOURS_MESSAGE)

        try:
            entry = self.storage.create_timesheet_entry(
                data.model_copy(update={"hours": hours})
            )
        except Exception as e:
            raise self.classifier.to_service_error(e, "create timesheet entry") from e

        logger.info(
            f"Created timesheet entry {entry.id}: {entry.hours} hours on "
            f"{entry.date} for work order {entry.work_order_id}"
        )
        return entry

    @log_function_call(expected=CALLER_ERRORS)
    def update_entry(self, entry_id: int, data: TimesheetEntryUpdate) -> TimesheetEntry:
        """Apply a partial update.

        When the time range changes and no hours are given, hours are
        derived again from the resulting range.
        """
        changes = data.model_dump(exclude_unset=True)
        if "hours" not in changes and ({"start_time", "end_time"} & changes.keys()):
            existing = self.get_entry(entry_id)
            start_time = changes.get("start_time", existing.start_time)
            end_time = changes.get("end_time", existing.end_time)
            hours = derive_entry_hours(None, start_time, end_time)
            if hours is not None:
                changes["hours"] = hours

        try:
            entry = self.storage.update_timesheet_entry(
                entry_id, TimesheetEntryUpdate(**changes)
            )
        except Exception as e:
            raise self.classifier.to_service_error(e, "update timesheet entry") from e

        logger.info(f"Updated timesheet entry {entry_id}: {sorted(changes)}")
        return entry

    @log_function_call(include_args=True, level="INFO", expected=CALLER_ERRORS)
    def delete_entry(self, entry_id: int, user_id: int) -> None:
        """Soft delete an entry into the archive."""
        try:
            self.storage.delete_timesheet_entry(entry_id, user_id)
        except Exception as e:
            raise self.classifier.to_service_error(e, "delete timesheet entry") from e

    @log_function_call(include_args=True, level="INFO", expected=CALLER_ERRORS)
    def restore_entry(self, entry_id: int, user_id: int) -> TimesheetEntry:
        """Bring an archived entry back unchanged."""
        try:
            return self.storage.restore_timesheet_entry(entry_id, user_id)
        except Exception as e:
            raise self.classifier.to_service_error(e, "restore timesheet entry") from e

    def get_entry(self, entry_id: int) -> TimesheetEntry:
        try:
            entry = self.storage.get_timesheet_entry(entry_id)
        except Exception as e:
            raise self.classifier.to_service_error(e, "load timesheet entry") from e
        if entry is None:
            raise NotFoundError(f"TimesheetEntry {entry_id} was not found.")
        return entry

    def get_entries(
        self, user_id: int, start_date: dt.date, end_date: dt.date
    ) -> List[TimesheetEntry]:
        try:
            return self.storage.get_timesheet_entries(user_id, start_date, end_date)
        except Exception as e:
            raise self.classifier.to_service_error(e, "load timesheet entries") from e

    def get_deleted_entries(self, user_id: Optional[int] = None) -> List[TimesheetEntry]:
        """Archived entries that can still be restored, optionally one user's."""
        try:
            entries = self.storage.get_deleted_timesheet_entries()
        except Exception as e:
            raise self.classifier.to_service_error(e, "load deleted entries") from e
        if user_id is not None:
            entries = [entry for entry in entries if entry.user_id == user_id]
        return sorted(entries, key=lambda entry: (entry.date, entry.id))

    def get_audit_logs(
        self,
        entity_type: Optional[AuditEntity] = None,
        action: Optional[AuditAction] = None,
        since: Optional[dt.date] = None,
        until: Optional[dt.date] = None,
    ) -> List[AuditLog]:
        """Audit records, newest first.

        Args:
            entity_type: Only records about this kind of entity
            action: Only records of this action
            since: First UTC calendar day to include
            until: Last UTC calendar day to include

        Raises:
            InvalidInputError: since is after until
        """
        if since and until and since > until:
            raise InvalidInputError(
                f"The start day {since} is after the end day {until}."
            )

        start = end = None
        if since:
            start = dt.datetime.combine(since, dt.time.min, tzinfo=dt.timezone.utc)
        if until:
            end = dt.datetime.combine(until, dt.time.max, tzinfo=dt.timezone.utc)
        try:
            return self.storage.get_audit_logs(
                entity_type=entity_type, action=action, start=start, end=end
            )
        except Exception as e:
            raise self.classifier.to_service_error(e, "load audit logs") from e

    def daily_total(self, entries: List[TimesheetEntry]) -> DailyTotalResult:
        """Daily total using this service's break policy."""
        return calculate_daily_total(
            entries, self.auto_break_threshold, self.auto_break_hours
        )

    def get_week(self, user_id: int, day: Optional[dt.date] = None) -> WeekTimesheet:
        """Build the Monday to Friday timesheet of the week containing day.

        Args:
            user_id: Owner of the entries
            day: Any date in the week (defaults to today)

        Returns:
            WeekTimesheet with grouped entries and daily totals
        """
        day = day or dt.date.today()
        week_start = get_week_start(day)
        entries = self.get_entries(user_id, week_start, get_week_end(day))

        date_keys = get_week_date_keys(day)
        entries_by_date = group_by_date(entries, date_keys)
        daily_totals = {
            key: self.daily_total(day_entries)
            for key, day_entries in entries_by_date.items()
        }

        work_orders: Dict[int, WorkOrder] = {}
        for entry in entries:
            if entry.work_order_id not in work_orders:
                work_order = self.storage.get_work_order(entry.work_order_id)
                if work_order is not None:
                    work_orders[work_order.id] = work_order

        logger.debug(
            f"Week of {week_start} for user {user_id}: {len(entries)} entries"
        )
        return WeekTimesheet(
            week_start=week_start,
            date_keys=date_keys,
            entries_by_date=entries_by_date,
            daily_totals=daily_totals,
            work_orders=work_orders,
        )
