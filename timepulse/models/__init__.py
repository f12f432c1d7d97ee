"""Data models for TimePulse.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- Project, WorkOrder, ProjectEvent: Project registry entities
- TimesheetEntry: Hours logged against a work order on a date
- TimesheetSuggestion: Derived quick-fill suggestion
- AuditLog: Audit trail record
"""

from timepulse.models.audit import AuditAction, AuditEntity, AuditLog
from timepulse.models.base import BaseDataModel
from timepulse.models.project import (
    EventType,
    Project,
    ProjectCreate,
    ProjectEvent,
    ProjectEventCreate,
    ProjectStatus,
    ProjectUpdate,
    WorkOrder,
    WorkOrderCreate,
    WorkOrderType,
    work_order_identifier,
)
from timepulse.models.timesheet import (
    LeaveType,
    TimesheetEntry,
    TimesheetEntryCreate,
    TimesheetEntryUpdate,
    TimesheetSuggestion,
)

__all__ = [
    "AuditAction",
    "AuditEntity",
    "AuditLog",
    "BaseDataModel",
    "EventType",
    "LeaveType",
    "Project",
    "ProjectCreate",
    "ProjectEvent",
    "ProjectEventCreate",
    "ProjectStatus",
    "ProjectUpdate",
    "TimesheetEntry",
    "TimesheetEntryCreate",
    "TimesheetEntryUpdate",
    "TimesheetSuggestion",
    "WorkOrder",
    "WorkOrderCreate",
    "WorkOrderType",
    "work_order_identifier",
]
