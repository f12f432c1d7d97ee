"""Aggregators module for grouping and summarising timesheet data.

This module provides grouping by date and work order, per-project hour
summaries, smart suggestions and the weekly dashboard report.
"""

from timepulse.aggregators.entry_aggregator import (
    HoursSummary,
    ProjectHoursSummary,
    WorkOrderHours,
    build_weekly_matrix,
    group_by_date,
    group_by_work_order,
    sum_hours,
    summarize,
    summarize_work_orders,
)
from timepulse.aggregators.report_builder import WeeklyReport, build_weekly_report
from timepulse.aggregators.suggestion_engine import (
    SuggestionEngine,
    build_suggestions,
    top_suggestions,
)

__all__ = [
    "HoursSummary",
    "ProjectHoursSummary",
    "SuggestionEngine",
    "WeeklyReport",
    "WorkOrderHours",
    "build_suggestions",
    "build_weekly_matrix",
    "build_weekly_report",
    "group_by_date",
    "group_by_work_order",
    "sum_hours",
    "summarize",
    "summarize_work_orders",
    "top_suggestions",
]
