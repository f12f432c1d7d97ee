"""Weekly summary report for the dashboard."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List

from timepulse.aggregators.entry_aggregator import ZERO_HOURS, sum_hours
from timepulse.models import (
    Project,
    ProjectStatus,
    TimesheetEntry,
    WorkOrder,
    WorkOrderType,
)

logger = logging.getLogger(__name__)


@dataclass
class WeeklyReport:
    """Headline numbers for the current week.

    Attributes:
        weekly_hours: All hours logged this week
        active_projects: Projects with status in_progress
        validation_hours: This week's hours on validation work orders
        design_hours: This week's hours on internal design work orders
        total_projects: Number of projects
    """

    weekly_hours: Decimal
    active_projects: int
    validation_hours: Decimal
    design_hours: Decimal
    total_projects: int


def build_weekly_report(
    projects: Iterable[Project],
    work_orders: Iterable[WorkOrder],
    weekly_entries: Iterable[TimesheetEntry],
) -> WeeklyReport:
    """Build the weekly report from this week's entries.

    Entries whose work order is unknown count towards weekly_hours but not
    towards either work type.
    """
    projects = list(projects)
    weekly_entries: List[TimesheetEntry] = list(weekly_entries)
    types = {wo.id: wo.type for wo in work_orders}

    validation_hours = ZERO_HOURS
    design_hours = ZERO_HOURS
    for entry in weekly_entries:
        work_type = types.get(entry.work_order_id)
        if work_type == WorkOrderType.VALIDATION:
            validation_hours += entry.hours
        elif work_type == WorkOrderType.INTERNAL_DESIGN:
            design_hours += entry.hours

    report = WeeklyReport(
        weekly_hours=sum_hours(weekly_entries),
        active_projects=sum(1 for p in projects if p.status == ProjectStatus.IN_PROGRESS),
        validation_hours=validation_hours,
        design_hours=design_hours,
        total_projects=len(projects),
    )
    logger.debug(f"Weekly report: {report}")
    return report
