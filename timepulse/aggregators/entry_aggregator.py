"""Entry aggregator for grouping and summarising timesheet entries.

This module groups a flat list of timesheet entries by calendar date and by
work order, and derives per-project validation/design hour summaries.
Summaries are recomputed on every call; entries can change between reads.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List

import pandas as pd

from timepulse.models import Project, TimesheetEntry, WorkOrder, WorkOrderType
from timepulse.utils.date_utils import to_date_key

logger = logging.getLogger(__name__)

ZERO_HOURS = Decimal("0")


@dataclass
class ProjectHoursSummary:
    """Hours logged against one project, split by work order type.

    Attributes:
        project: The project
        validation_hours: Hours on validation work orders
        design_hours: Hours on internal design work orders
    """

    project: Project
    validation_hours: Decimal = ZERO_HOURS
    design_hours: Decimal = ZERO_HOURS

    @property
    def total_hours(self) -> Decimal:
        return self.validation_hours + self.design_hours


@dataclass
class HoursSummary:
    """Per-project summaries plus the totals across all listed projects."""

    projects: List[ProjectHoursSummary] = field(default_factory=list)

    @property
    def validation_hours(self) -> Decimal:
        return sum((p.validation_hours for p in self.projects), ZERO_HOURS)

    @property
    def design_hours(self) -> Decimal:
        return sum((p.design_hours for p in self.projects), ZERO_HOURS)

    @property
    def total_hours(self) -> Decimal:
        return self.validation_hours + self.design_hours

    def for_project(self, project_id: int) -> ProjectHoursSummary:
        """Return the summary of one project.

        Raises:
            KeyError: If the project was not part of the summary
        """
        for summary in self.projects:
            if summary.project.id == project_id:
                return summary
        raise KeyError(f"No summary for project {project_id}")


@dataclass
class WorkOrderHours:
    """Total hours logged against a single work order."""

    work_order: WorkOrder
    total_hours: Decimal


def sum_hours(entries: Iterable[TimesheetEntry]) -> Decimal:
    """Sum the hours of the given entries."""
    return sum((Decimal(entry.hours) for entry in entries), ZERO_HOURS)


def group_by_date(
    entries: Iterable[TimesheetEntry], date_keys: Iterable[str]
) -> Dict[str, List[TimesheetEntry]]:
    """Group entries under ISO date keys.

    Every key in date_keys is present in the result, even with no entries,
    so a week always iterates over the same days. Entries dated outside
    the listed keys are left out.

    Args:
        entries: Entries to group
        date_keys: ISO yyyy-MM-dd keys, in display order

    Returns:
        Mapping of date key to the entries on that date, in input order

    Example:
        >>> grouped = group_by_date([], ["2023-06-12", "2023-06-13"])
        >>> grouped
        {'2023-06-12': [], '2023-06-13': []}
    """
    grouped: Dict[str, List[TimesheetEntry]] = {key: [] for key in date_keys}

    for entry in entries:
        key = to_date_key(entry.date)
        if key in grouped:
            grouped[key].append(entry)

    return grouped


def group_by_work_order(
    entries: Iterable[TimesheetEntry],
) -> Dict[int, List[TimesheetEntry]]:
    """Group entries by the work order they were logged against."""
    grouped: Dict[int, List[TimesheetEntry]] = defaultdict(list)
    for entry in entries:
        grouped[entry.work_order_id].append(entry)
    return dict(grouped)


def summarize(
    projects: Iterable[Project],
    work_orders: Iterable[WorkOrder],
    entries: Iterable[TimesheetEntry],
) -> HoursSummary:
    """Summarise hours per project, split into validation and design.

    For each work order, the hours of the entries referencing it are added
    to its project's validation bucket (validation work orders) or design
    bucket (everything else). Work orders of projects that are not listed,
    and entries of unknown work orders, are ignored.

    Args:
        projects: Projects to summarise
        work_orders: Work orders of those projects
        entries: Entries to count

    Returns:
        HoursSummary with one ProjectHoursSummary per project, in order
    """
    summaries = {project.id: ProjectHoursSummary(project=project) for project in projects}
    hours_by_work_order = {
        work_order_id: sum_hours(grouped)
        for work_order_id, grouped in group_by_work_order(entries).items()
    }

    for work_order in work_orders:
        summary = summaries.get(work_order.project_id)
        if summary is None:
            continue
        hours = hours_by_work_order.get(work_order.id, ZERO_HOURS)
        if work_order.type == WorkOrderType.VALIDATION:
            summary.validation_hours += hours
        else:
            summary.design_hours += hours

    result = HoursSummary(projects=list(summaries.values()))
    logger.debug(
        f"Summarised {len(result.projects)} projects: {result.total_hours} hours"
    )
    return result


def summarize_work_orders(
    work_orders: Iterable[WorkOrder], entries: Iterable[TimesheetEntry]
) -> List[WorkOrderHours]:
    """Total hours per work order, in work order order."""
    grouped = group_by_work_order(entries)
    return [
        WorkOrderHours(work_order=wo, total_hours=sum_hours(grouped.get(wo.id, [])))
        for wo in work_orders
    ]


def build_weekly_matrix(
    grouped: Dict[str, List[TimesheetEntry]], work_orders: Iterable[WorkOrder]
) -> pd.DataFrame:
    """Build a work order by date matrix of logged hours.

    Args:
        grouped: Output of group_by_date
        work_orders: Work orders used to label the rows

    Returns:
        DataFrame with work order identifiers as index, date keys as columns
        and float hours as cells (0.0 where nothing was logged)
    """
    labels = {wo.id: wo.identifier for wo in work_orders}
    matrix_data: Dict[str, Dict[str, float]] = defaultdict(dict)

    for date_key, day_entries in grouped.items():
        for entry in day_entries:
            label = labels.get(entry.work_order_id, f"WO-{entry.work_order_id}")
            matrix_data[label][date_key] = matrix_data[label].get(date_key, 0.0) + float(
                entry.hours
            )

    if not matrix_data:
        logger.debug("No entries, returning empty matrix")
        return pd.DataFrame(columns=list(grouped.keys()), dtype=float)

    df = pd.DataFrame.from_dict(matrix_data, orient="index")
    df = df.reindex(columns=list(grouped.keys())).fillna(0.0)
    return df.sort_index()
