"""Audit trail models.

Every soft delete and restore of a timesheet entry leaves an AuditLog
record behind so removed work can be traced back to who removed it.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import Field

from timepulse.models.base import BaseDataModel, utcnow


class AuditAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"


class AuditEntity(str, Enum):
    PROJECT = "project"
    WORK_ORDER = "work_order"
    TIMESHEET = "timesheet"
    PROJECT_EVENT = "project_event"


class AuditLog(BaseDataModel):
    """One audited action on a stored record."""

    id: int = Field(..., ge=1)
    entity_type: AuditEntity
    entity_id: int = Field(..., ge=1)
    action: AuditAction
    action_by: int = Field(..., ge=1, description="User who performed the action")
    details: Optional[str] = None
    created_at: dt.datetime = Field(default_factory=utcnow)
