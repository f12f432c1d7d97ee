"""Storage interface for TimePulse.

The core components only talk to storage through this interface, so the
in-memory store used by the CLI and the tests can be swapped for a
database-backed one without touching the calculators, parsers or
aggregators.

Conventions:
- Lookups of a missing record return None
- Mutations of a missing record raise RecordNotFoundError
- Violating a uniqueness constraint raises DuplicateRecordError
"""

import datetime as dt
from abc import ABC, abstractmethod
from typing import List, Optional

from timepulse.models import (
    AuditAction,
    AuditEntity,
    AuditLog,
    Project,
    ProjectCreate,
    ProjectEvent,
    ProjectEventCreate,
    ProjectUpdate,
    TimesheetEntry,
    TimesheetEntryCreate,
    TimesheetEntryUpdate,
    WorkOrder,
    WorkOrderCreate,
)


class StorageError(Exception):
    """Base exception for storage failures."""


class RecordNotFoundError(StorageError):
    """Raised when a mutation targets a record that does not exist."""

    def __init__(self, entity: str, record_id: object):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} with id {record_id} not found")


class DuplicateRecordError(StorageError):
    """Raised when a unique field value is already taken."""

    def __init__(self, entity: str, field: str, value: object):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} with {field} {value!r} already exists")


class ProjectRegistry(ABC):
    """Read access to projects and work orders."""

    @abstractmethod
    def get_projects(self) -> List[Project]:
        """Return all projects."""

    @abstractmethod
    def get_project(self, project_id: int) -> Optional[Project]:
        """Return a project by id, or None."""

    @abstractmethod
    def get_project_by_reference(self, reference_number: str) -> Optional[Project]:
        """Return a project by reference number, or None."""

    @abstractmethod
    def get_work_orders(self, project_id: int) -> List[WorkOrder]:
        """Return the work orders of a project."""

    @abstractmethod
    def get_work_order(self, work_order_id: int) -> Optional[WorkOrder]:
        """Return a work order by id, or None."""


class Storage(ProjectRegistry):
    """Full storage contract: project registry plus entry store."""

    # Projects

    @abstractmethod
    def create_project(self, data: ProjectCreate, created_by: int) -> Project:
        """Create a project with its two work orders and a created event."""

    @abstractmethod
    def update_project(
        self, project_id: int, data: ProjectUpdate, updated_by: int
    ) -> Project:
        """Apply a partial update; a status change adds a status_change event."""

    @abstractmethod
    def delete_project(self, project_id: int) -> None:
        """Delete a project with its work orders, entries and events."""

    # Work orders

    @abstractmethod
    def create_work_order(self, data: WorkOrderCreate) -> WorkOrder:
        """Create a work order under an existing project."""

    # Timesheet entries

    @abstractmethod
    def get_timesheet_entries(
        self, user_id: int, start_date: dt.date, end_date: dt.date
    ) -> List[TimesheetEntry]:
        """Return a user's entries dated within [start_date, end_date]."""

    @abstractmethod
    def get_timesheet_entry(self, entry_id: int) -> Optional[TimesheetEntry]:
        """Return a live entry by id, or None."""

    @abstractmethod
    def get_timesheet_entries_by_project(self, project_id: int) -> List[TimesheetEntry]:
        """Return all live entries logged against a project's work orders."""

    @abstractmethod
    def get_timesheet_entries_by_work_order(
        self, work_order_id: int
    ) -> List[TimesheetEntry]:
        """Return all live entries logged against a work order."""

    @abstractmethod
    def create_timesheet_entry(self, data: TimesheetEntryCreate) -> TimesheetEntry:
        """Persist a new entry. data.hours must already be set."""

    @abstractmethod
    def update_timesheet_entry(
        self, entry_id: int, data: TimesheetEntryUpdate
    ) -> TimesheetEntry:
        """Replace the fields set on data."""

    @abstractmethod
    def delete_timesheet_entry(self, entry_id: int, user_id: int) -> None:
        """Soft delete: move the entry to the archive and audit the action."""

    @abstractmethod
    def restore_timesheet_entry(self, entry_id: int, user_id: int) -> TimesheetEntry:
        """Move an archived entry back, unchanged, and audit the action."""

    @abstractmethod
    def get_deleted_timesheet_entries(self) -> List[TimesheetEntry]:
        """Return the archived (soft-deleted) entries."""

    # Project events

    @abstractmethod
    def get_project_events(self, project_id: int) -> List[ProjectEvent]:
        """Return a project's events, newest first."""

    @abstractmethod
    def create_project_event(self, data: ProjectEventCreate) -> ProjectEvent:
        """Append an event to a project's timeline."""

    # Audit trail

    @abstractmethod
    def get_audit_logs(
        self,
        entity_type: Optional[AuditEntity] = None,
        action: Optional[AuditAction] = None,
        start: Optional[dt.datetime] = None,
        end: Optional[dt.datetime] = None,
    ) -> List[AuditLog]:
        """Return audit records matching the filters, newest first."""
