"""Project service: project lifecycle, timeline and hour summaries."""

import datetime as dt
import logging
from typing import List, Optional

from timepulse.aggregators.entry_aggregator import (
    HoursSummary,
    WorkOrderHours,
    summarize,
    summarize_work_orders,
)
from timepulse.aggregators.report_builder import WeeklyReport, build_weekly_report
from timepulse.models import (
    EventType,
    Project,
    ProjectCreate,
    ProjectEvent,
    ProjectEventCreate,
    ProjectUpdate,
    TimesheetEntry,
    WorkOrder,
)
from timepulse.services.error_classifier import ErrorClassifier
from timepulse.services.errors import CALLER_ERRORS, InvalidInputError, NotFoundError
from timepulse.storage.base import Storage
from timepulse.utils.date_utils import get_calendar_week_end, get_week_start
from timepulse.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)


class ProjectService:
    """Manages projects and derives their hour summaries.

    Creating a project also creates its validation and internal design work
    orders and a "created" timeline event; changing its status adds a
    "status_change" event. Deleting a project removes its work orders,
    entries and events.
    """

    def __init__(self, storage: Storage, classifier: Optional[ErrorClassifier] = None):
        self.storage = storage
        self.classifier = classifier or ErrorClassifier()

    def list_projects(self) -> List[Project]:
        try:
            return self.storage.get_projects()
        except Exception as e:
            raise self.classifier.to_service_error(e, "load projects") from e

    def get_project(self, project_id: int) -> Project:
        """Return a project or raise NotFoundError."""
        try:
            project = self.storage.get_project(project_id)
        except Exception as e:
            raise self.classifier.to_service_error(e, "load project") from e
        if project is None:
            raise NotFoundError(f"Project {project_id} was not found.")
        return project

    def get_work_orders(self, project_id: int) -> List[WorkOrder]:
        self.get_project(project_id)
        try:
            return self.storage.get_work_orders(project_id)
        except Exception as e:
            raise self.classifier.to_service_error(e, "load work orders") from e

    @log_function_call(expected=CALLER_ERRORS)
    def create_project(self, data: ProjectCreate, created_by: int) -> Project:
        try:
            project = self.storage.create_project(data, created_by)
        except Exception as e:
            raise self.classifier.to_service_error(e, "create project") from e
        logger.info(f"Created project {project.id} ({project.reference_number})")
        return project

    @log_function_call(expected=CALLER_ERRORS)
    def update_project(
        self, project_id: int, data: ProjectUpdate, updated_by: int
    ) -> Project:
        try:
            project = self.storage.update_project(project_id, data, updated_by)
        except Exception as e:
            raise self.classifier.to_service_error(e, "update project") from e
        logger.info(f"Updated project {project_id}")
        return project

    @log_function_call(include_args=True, level="INFO", expected=CALLER_ERRORS)
    def delete_project(self, project_id: int) -> None:
        try:
            self.storage.delete_project(project_id)
        except Exception as e:
            raise self.classifier.to_service_error(e, "delete project") from e

    def delete_projects(self, project_ids: List[int]) -> int:
        """Delete several projects.

        Every id is checked before anything is deleted, so a missing id
        leaves all projects in place.

        Returns:
            Number of projects deleted
        """
        if not project_ids:
            raise InvalidInputError("No project ids were given.")
        for project_id in project_ids:
            self.get_project(project_id)
        for project_id in project_ids:
            self.delete_project(project_id)
        logger.info(f"Deleted {len(project_ids)} projects")
        return len(project_ids)

    def add_comment(self, project_id: int, content: str, created_by: int) -> ProjectEvent:
        """Append a comment to a project's timeline."""
        try:
            return self.storage.create_project_event(
                ProjectEventCreate(
                    project_id=project_id,
                    type=EventType.COMMENT,
                    content=content,
                    created_by=created_by,
                )
            )
        except Exception as e:
            raise self.classifier.to_service_error(e, "add comment") from e

    def get_events(self, project_id: int) -> List[ProjectEvent]:
        """Return the project's timeline, newest first."""
        self.get_project(project_id)
        try:
            return self.storage.get_project_events(project_id)
        except Exception as e:
            raise self.classifier.to_service_error(e, "load project events") from e

    def summarize_hours(self) -> HoursSummary:
        """Validation and design hours logged per project, over all time."""
        try:
            projects = self.storage.get_projects()
            work_orders: List[WorkOrder] = []
            entries: List[TimesheetEntry] = []
            for project in projects:
                work_orders.extend(self.storage.get_work_orders(project.id))
                entries.extend(self.storage.get_timesheet_entries_by_project(project.id))
        except Exception as e:
            raise self.classifier.to_service_error(e, "summarize project hours") from e
        return summarize(projects, work_orders, entries)

    def work_order_hours(self, project_id: int) -> List[WorkOrderHours]:
        """Hours logged against each of a project's work orders."""
        work_orders = self.get_work_orders(project_id)
        try:
            entries = self.storage.get_timesheet_entries_by_project(project_id)
        except Exception as e:
            raise self.classifier.to_service_error(e, "load project entries") from e
        return summarize_work_orders(work_orders, entries)

    def weekly_report(self, user_id: int, day: Optional[dt.date] = None) -> WeeklyReport:
        """Summary numbers for the Monday to Sunday week containing day.

        Args:
            user_id: Owner of the counted entries
            day: Any date in the week (defaults to today)
        """
        day = day or dt.date.today()
        try:
            projects = self.storage.get_projects()
            work_orders = [
                wo for project in projects for wo in self.storage.get_work_orders(project.id)
            ]
            entries = self.storage.get_timesheet_entries(
                user_id, get_week_start(day), get_calendar_week_end(day)
            )
        except Exception as e:
            raise self.classifier.to_service_error(e, "build weekly report") from e
        return build_weekly_report(projects, work_orders, entries)
