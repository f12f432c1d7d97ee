"""Project data models for TimePulse.

This module defines the Project, WorkOrder and ProjectEvent models together
with the input shapes used to create and update them.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from timepulse.models.base import BaseDataModel, strip_required, utcnow


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    DESIGN_REVIEW = "design_review"
    COMPLETED = "completed"


class WorkOrderType(str, Enum):
    """The two categories of billable work every project is split into."""

    VALIDATION = "validation"
    INTERNAL_DESIGN = "internal_design"


class EventType(str, Enum):
    """Kinds of entries on a project timeline."""

    CREATED = "created"
    STATUS_CHANGE = "status_change"
    COMMENT = "comment"


WORK_ORDER_PREFIXES = {
    WorkOrderType.VALIDATION: "VALID",
    WorkOrderType.INTERNAL_DESIGN: "DESIGN",
}


def work_order_identifier(work_type: WorkOrderType, reference_number: str) -> str:
    """Build the human-readable work order code for a project reference.

    Example:
        >>> work_order_identifier(WorkOrderType.VALIDATION, "PRJ-2023-0001")
        'VALID-PRJ-2023-0001'
    """
    return f"{WORK_ORDER_PREFIXES[WorkOrderType(work_type)]}-{reference_number}"


class ProjectCreate(BaseDataModel):
    """Input data for creating a project.

    Example:
        >>> data = ProjectCreate(
        ...     title="North Metro Upgrade",
        ...     reference_number="PRJ-2023-0001",
        ...     form_code_type="NM-DES-2023",
        ... )
        >>> data.status
        <ProjectStatus.DRAFT: 'draft'>
    """

    title: str = Field(..., min_length=1, description="Project title")
    reference_number: str = Field(
        ..., min_length=1, description="Unique project reference (e.g. PRJ-2023-0001)"
    )
    form_code_type: str = Field(..., min_length=1, description="Form code type")
    status: ProjectStatus = Field(ProjectStatus.DRAFT, description="Project status")
    notes: Optional[str] = Field(None, description="Optional notes")

    @field_validator("title", "reference_number", "form_code_type")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that string fields are not empty or whitespace only."""
        return strip_required(v, info.field_name)


class ProjectUpdate(BaseDataModel):
    """Partial project update; only the fields that are set get applied."""

    title: Optional[str] = None
    reference_number: Optional[str] = None
    form_code_type: Optional[str] = None
    status: Optional[ProjectStatus] = None
    notes: Optional[str] = None

    @field_validator("title", "reference_number", "form_code_type")
    @classmethod
    def validate_not_empty(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return v
        return strip_required(v, info.field_name)


class Project(ProjectCreate):
    """A stored project.

    Attributes:
        id: Identifier assigned by the store
        title: Project title
        reference_number: Unique reference (e.g. "PRJ-2023-0001")
        form_code_type: Form code type
        status: Current status
        notes: Optional notes
        created_at: Creation timestamp
    """

    id: int = Field(..., ge=1, description="Project identifier")
    created_at: dt.datetime = Field(default_factory=utcnow)


class WorkOrderCreate(BaseDataModel):
    """Input data for creating a work order."""

    project_id: int = Field(..., ge=1, description="Owning project")
    type: WorkOrderType = Field(..., description="Work order type")
    identifier: str = Field(..., min_length=1, description="Unique work order code")
    description: Optional[str] = None

    @field_validator("identifier")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        return strip_required(v, info.field_name)


class WorkOrder(WorkOrderCreate):
    """A stored work order belonging to a project."""

    id: int = Field(..., ge=1, description="Work order identifier")
    created_at: dt.datetime = Field(default_factory=utcnow)


class ProjectEventCreate(BaseDataModel):
    """Input data for a project timeline event."""

    project_id: int = Field(..., ge=1)
    type: EventType
    content: str = Field(..., min_length=1)
    created_by: int = Field(..., ge=1, description="User who created the event")

    @field_validator("content")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        return strip_required(v, info.field_name)


class ProjectEvent(ProjectEventCreate):
    """A stored project event. Events are never modified after creation."""

    id: int = Field(..., ge=1)
    created_at: dt.datetime = Field(default_factory=utcnow)
