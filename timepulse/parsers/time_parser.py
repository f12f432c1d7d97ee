"""Natural-language time entry parser.

Turns a free-text prompt such as
"I worked on project PRJ-2023-0001 validation from 9:00 to 11:30 today"
into a structured candidate entry. Recognition is plain regex and keyword
matching, applied as a fixed pipeline of independent extractors:

1. Project (reference number first, then a known project title)
2. Work type (validation wins over design)
3. Duration (explicit hour count first, then a time range)
4. Date (today, yesterday or tomorrow)
5. Description (whatever is left after removing the parts above)
6. Work order (the project's work order of the identified type)

Identification failures are returned as ParseFailure values, never raised.
"""

import datetime as dt
import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional, Union

from timepulse.calculators.hours_calculator import hours_between
from timepulse.calculators.time_utils import normalize_time, round_hours
from timepulse.models import Project, WorkOrder, WorkOrderType
from timepulse.storage.base import ProjectRegistry

logger = logging.getLogger(__name__)

REFERENCE_PATTERN = re.compile(r"PRJ-\d{4}-\d{4}", re.IGNORECASE)
HOURS_PATTERN = re.compile(r"\b(\d+(?:\.\d+)?)\s*(?:hours?|hrs?)\b", re.IGNORECASE)
# Word boundaries keep digits inside reference numbers from reading as a range
TIME_RANGE_PATTERN = re.compile(
    r"\b(\d{1,2}(?::\d{2})?(?:am|pm)?)\s*(?:to|-)\s*(\d{1,2}(?::\d{2})?(?:am|pm)?)\b",
    re.IGNORECASE,
)
TIME_PATTERN = re.compile(r"\b\d{1,2}(?::\d{2})?\s*(?:am|pm)?\b", re.IGNORECASE)

STOP_WORDS = frozenset(
    {
        "i",
        "worked",
        "on",
        "project",
        "for",
        "from",
        "to",
        "hours",
        "hour",
        "hrs",
        "hr",
        "validation",
        "internal",
        "design",
        "today",
        "yesterday",
        "tomorrow",
        "morning",
        "afternoon",
        "spent",
        "log",
        "logged",
        "please",
        "create",
        "entry",
        "the",
        "and",
        "with",
        "this",
        "that",
    }
)
MIN_WORD_LENGTH = 3


class ParseFailureReason(str, Enum):
    """Which piece of information the parser could not identify."""

    NO_PROJECT = "no project identified"
    NO_WORK_TYPE = "no work type identified"
    NO_DURATION = "no duration identified"
    WORK_ORDER_NOT_FOUND = "work order not found for this project/type combination"


FAILURE_MESSAGES = {
    ParseFailureReason.NO_PROJECT: (
        "I couldn't identify a project reference or name in your request. "
        "Please include a project reference (like PRJ-2023-0001) or a project name."
    ),
    ParseFailureReason.NO_WORK_TYPE: (
        "I couldn't determine if you were working on validation or internal "
        "design. Please specify the type of work."
    ),
    ParseFailureReason.NO_DURATION: (
        "I couldn't determine how many hours you worked or what time range. "
        "Please specify either the number of hours or a time range "
        "(e.g., 9:00 to 12:00)."
    ),
}


@dataclass
class ProjectMatch:
    """A project identified in a prompt.

    project is None when a reference number was written but is not known
    to the registry.
    """

    matched_text: str
    reference_number: Optional[str] = None
    project: Optional[Project] = None

    @property
    def label(self) -> str:
        if self.reference_number:
            return self.reference_number
        return self.project.title if self.project else self.matched_text


@dataclass
class Duration:
    """Hours worked, with the time range they came from when there was one."""

    hours: Decimal
    start_time: Optional[str] = None
    end_time: Optional[str] = None


@dataclass
class ParsedEntry:
    """A successfully parsed candidate entry, ready to be persisted."""

    work_order_id: int
    project: ProjectMatch
    work_type: WorkOrderType
    date: dt.date
    hours: Decimal
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    description: Optional[str] = None
    success: bool = field(default=True, init=False)


@dataclass
class ParseFailure:
    """A prompt the parser could not turn into an entry."""

    reason: ParseFailureReason
    message: str
    success: bool = field(default=False, init=False)


ParseResult = Union[ParsedEntry, ParseFailure]


def extract_project(prompt: str, projects: Iterable[Project]) -> Optional[ProjectMatch]:
    """Find the project a prompt refers to.

    A PRJ-YYYY-NNNN reference number wins. Otherwise the first project whose
    title occurs in the prompt (case-insensitive) is used.

    Example:
        >>> extract_project("validation on prj-2023-0001", []).reference_number
        'PRJ-2023-0001'
    """
    projects = list(projects)
    match = REFERENCE_PATTERN.search(prompt)
    if match:
        reference = match.group(0).upper()
        project = next(
            (p for p in projects if p.reference_number.upper() == reference), None
        )
        return ProjectMatch(
            matched_text=match.group(0), reference_number=reference, project=project
        )

    lowered = prompt.lower()
    for project in projects:
        title = project.title.strip().lower()
        if title and title in lowered:
            return ProjectMatch(matched_text=project.title, project=project)
    return None


def extract_work_type(prompt: str) -> Optional[WorkOrderType]:
    """Classify the work as validation or internal design.

    Example:
        >>> extract_work_type("validation and design review")
        <WorkOrderType.VALIDATION: 'validation'>
    """
    lowered = prompt.lower()
    if "validation" in lowered:
        return WorkOrderType.VALIDATION
    if "internal design" in lowered or "design" in lowered:
        return WorkOrderType.INTERNAL_DESIGN
    return None


def extract_duration(prompt: str) -> Optional[Duration]:
    """Find how long was worked.

    An explicit count ("3 hours", "2.5 hrs") wins over a time range
    ("9:00 to 11:30", "1pm-3pm"). A range whose ends are not valid clock
    times is ignored.

    Example:
        >>> extract_duration("from 9:00 to 11:30").hours
        Decimal('2.50')
    """
    match = HOURS_PATTERN.search(prompt)
    if match:
        return Duration(hours=round_hours(Decimal(match.group(1))))

    match = TIME_RANGE_PATTERN.search(prompt)
    if match:
        start_time = normalize_time(match.group(1))
        end_time = normalize_time(match.group(2))
        if start_time and end_time:
            return Duration(
                hours=hours_between(start_time, end_time),
                start_time=start_time,
                end_time=end_time,
            )
        logger.debug(f"Ignoring time range with invalid clock times: {match.group(0)!r}")
    return None


def extract_date(prompt: str, today: dt.date) -> dt.date:
    """Resolve the relative day mentioned in a prompt (default: today)."""
    lowered = prompt.lower()
    if "yesterday" in lowered:
        return today - dt.timedelta(days=1)
    if "tomorrow" in lowered:
        return today + dt.timedelta(days=1)
    return today


def extract_description(prompt: str, project_text: Optional[str] = None) -> Optional[str]:
    """Keep the words of a prompt that describe the work itself.

    The project reference or title, hour counts and times are removed, then
    stop words and short tokens are dropped. One or two digit numbers read
    as clock hours and are removed too; longer numbers are not times and are
    kept, so "reviewing 100 drawings" keeps its quantity.

    Example:
        >>> extract_description("Spent 2 hours on PRJ-2023-0001 site inspection",
        ...                     "PRJ-2023-0001")
        'site inspection'
    """
    text = prompt.lower()
    if project_text:
        text = text.replace(project_text.lower(), " ")
    text = HOURS_PATTERN.sub(" ", text)
    text = TIME_RANGE_PATTERN.sub(" ", text)
    text = TIME_PATTERN.sub(" ", text)

    words: List[str] = []
    for token in text.split():
        word = token.strip(".,!?")
        if len(word) < MIN_WORD_LENGTH or word in STOP_WORDS:
            continue
        words.append(word)

    description = " ".join(words).strip()
    return description or None


def resolve_work_order(
    registry: ProjectRegistry, project: Optional[Project], work_type: WorkOrderType
) -> Optional[WorkOrder]:
    """Look up the project's work order of the given type.

    Registry failures are logged and treated as no work order.
    """
    if project is None:
        return None
    try:
        work_orders = registry.get_work_orders(project.id)
    except Exception as e:
        logger.warning(f"Failed to fetch work orders for project {project.id}: {e}")
        return None
    return next((wo for wo in work_orders if wo.type == work_type), None)


def work_order_not_found_message(work_type: WorkOrderType) -> str:
    return (
        f"I couldn't find a {work_type.value} work order for this project. "
        "Please check the project reference and try again."
    )


class TimeParser:
    """Parses free-text prompts into candidate timesheet entries.

    Example:
        >>> parser = TimeParser(storage)
        >>> result = parser.parse("Log 3 hours of internal design on PRJ-2023-0001")
        >>> result.success
        True
    """

    def __init__(self, registry: ProjectRegistry):
        self.registry = registry

    def parse(
        self,
        prompt: str,
        known_projects: Optional[List[Project]] = None,
        today: Optional[dt.date] = None,
    ) -> ParseResult:
        """Run the extraction pipeline on a prompt.

        Args:
            prompt: Free text written by the user
            known_projects: Projects to match titles against (fetched from
                the registry when omitted)
            today: Reference date for relative days (defaults to today)

        Returns:
            ParsedEntry on success, ParseFailure naming the missing piece
            otherwise
        """
        today = today or dt.date.today()
        if known_projects is None:
            known_projects = self._fetch_projects()

        project_match = extract_project(prompt, known_projects)
        if project_match is None:
            return self._fail(ParseFailureReason.NO_PROJECT)

        # Reference numbers outside the given list may still be registered
        if project_match.project is None and project_match.reference_number:
            project_match.project = self._fetch_project_by_reference(
                project_match.reference_number
            )

        work_type = extract_work_type(prompt)
        if work_type is None:
            return self._fail(ParseFailureReason.NO_WORK_TYPE)

        duration = extract_duration(prompt)
        if duration is None:
            return self._fail(ParseFailureReason.NO_DURATION)

        entry_date = extract_date(prompt, today)
        description = extract_description(prompt, project_match.matched_text)

        work_order = resolve_work_order(self.registry, project_match.project, work_type)
        if work_order is None:
            return ParseFailure(
                reason=ParseFailureReason.WORK_ORDER_NOT_FOUND,
                message=work_order_not_found_message(work_type),
            )

        logger.info(
            f"Parsed prompt: {project_match.label} {work_type.value} "
            f"{duration.hours}h on {entry_date}"
        )
        return ParsedEntry(
            work_order_id=work_order.id,
            project=project_match,
            work_type=work_type,
            date=entry_date,
            hours=duration.hours,
            start_time=duration.start_time,
            end_time=duration.end_time,
            description=description,
        )

    def _fail(self, reason: ParseFailureReason) -> ParseFailure:
        logger.info(f"Could not parse prompt: {reason.value}")
        return ParseFailure(reason=reason, message=FAILURE_MESSAGES[reason])

    def _fetch_projects(self) -> List[Project]:
        try:
            return self.registry.get_projects()
        except Exception as e:
            logger.warning(f"Failed to fetch projects, matching against none: {e}")
            return []

    def _fetch_project_by_reference(self, reference: str) -> Optional[Project]:
        try:
            return self.registry.get_project_by_reference(reference)
        except Exception as e:
            logger.warning(f"Failed to look up project {reference}: {e}")
            return None
