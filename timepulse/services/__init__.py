"""Services for timesheet, project and assistant operations."""

from timepulse.services.assistant_service import AssistantResponse, TimesheetAssistant
from timepulse.services.error_classifier import ErrorClassifier, ErrorType
from timepulse.services.errors import (
    InvalidInputError,
    NotFoundError,
    OperationFailedError,
    TimePulseError,
)
from timepulse.services.project_service import ProjectService
from timepulse.services.timesheet_service import TimesheetService, WeekTimesheet

__all__ = [
    "AssistantResponse",
    "ErrorClassifier",
    "ErrorType",
    "InvalidInputError",
    "NotFoundError",
    "OperationFailedError",
    "ProjectService",
    "TimePulseError",
    "TimesheetAssistant",
    "TimesheetService",
    "WeekTimesheet",
]
