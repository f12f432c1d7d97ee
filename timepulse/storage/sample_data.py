"""Sample data used to seed a fresh in-memory store."""

import datetime as dt
import logging
from decimal import Decimal
from typing import Optional

from timepulse.models import (
    EventType,
    Project,
    ProjectCreate,
    ProjectEventCreate,
    ProjectStatus,
    ProjectUpdate,
    TimesheetEntryCreate,
    WorkOrderType,
)
from timepulse.storage.base import Storage
from timepulse.utils.date_utils import get_week_start

logger = logging.getLogger(__name__)

# (weekday offset, work type, hours, start, end, description)
_SAMPLE_ENTRIES = [
    (0, WorkOrderType.VALIDATION, "2", "09:00", "11:00",
     "Site verification and requirements gathering"),
    (0, WorkOrderType.INTERNAL_DESIGN, "3", "13:00", "16:00",
     "Initial design sketches and planning"),
    (1, WorkOrderType.VALIDATION, "1", "10:00", "11:00",
     "Client requirements review meeting"),
    (1, WorkOrderType.INTERNAL_DESIGN, "2", "13:00", "15:00",
     "Network layout design"),
]


def seed_sample_data(
    storage: Storage, user_id: int, today: Optional[dt.date] = None
) -> Optional[Project]:
    """Populate an empty store with one project and a few entries this week.

    Args:
        storage: Store to populate
        user_id: User the sample entries and events belong to
        today: Reference date for "this week" (defaults to today)

    Returns:
        The sample project, or None if the store already had projects
    """
    if storage.get_projects():
        logger.debug("Store already has projects, skipping sample data")
        return None

    logger.info("Initializing sample data...")
    today = today or dt.date.today()
    week_start = get_week_start(today)

    project = storage.create_project(
        ProjectCreate(
            title="North Metro Upgrade",
            reference_number="PRJ-2023-0001",
            form_code_type="NM-DES-2023",
            notes="Distribution network upgrade for the northern metropolitan area.",
        ),
        created_by=user_id,
    )
    project = storage.update_project(
        project.id, ProjectUpdate(status=ProjectStatus.IN_PROGRESS), updated_by=user_id
    )

    work_orders = {wo.type: wo for wo in storage.get_work_orders(project.id)}
    for offset, work_type, hours, start, end, description in _SAMPLE_ENTRIES:
        storage.create_timesheet_entry(
            TimesheetEntryCreate(
                user_id=user_id,
                work_order_id=work_orders[work_type].id,
                date=week_start + dt.timedelta(days=offset),
                hours=Decimal(hours),
                start_time=start,
                end_time=end,
                description=description,
            )
        )

    storage.create_project_event(
        ProjectEventCreate(
            project_id=project.id,
            type=EventType.COMMENT,
            content="Client requested expedited timeline for northern section",
            created_by=user_id,
        )
    )

    logger.info("Sample data initialization complete")
    return project
