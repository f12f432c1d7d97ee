"""Parsers for natural-language timesheet prompts."""

from timepulse.parsers.time_parser import (
    Duration,
    ParsedEntry,
    ParseFailure,
    ParseFailureReason,
    ParseResult,
    ProjectMatch,
    TimeParser,
    extract_date,
    extract_description,
    extract_duration,
    extract_project,
    extract_work_type,
    resolve_work_order,
)

__all__ = [
    "Duration",
    "ParseFailure",
    "ParseFailureReason",
    "ParseResult",
    "ParsedEntry",
    "ProjectMatch",
    "TimeParser",
    "extract_date",
    "extract_description",
    "extract_duration",
    "extract_project",
    "extract_work_type",
    "resolve_work_order",
]
