"""Smart suggestion engine for quick-fill timesheet entries.

The engine looks at a user's recent entries, finds work orders they log
against repeatedly, and turns the most recent entry of each pattern into a
suggestion that can be re-logged with one action.

Rules (defaults):
1. Only the trailing 30 days of entries are considered
2. A work order needs at least 2 entries to count as recurring
3. The most recent entry of each work order is the representative
4. A pattern is kept if it was used in the last 7 days, or has 3 or more
   entries (strong patterns that just did not recur this week)
5. Suggestions are ranked by frequency, highest first (stable on ties)
"""

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from timepulse.aggregators.entry_aggregator import group_by_work_order
from timepulse.models import Project, TimesheetEntry, TimesheetSuggestion, WorkOrder
from timepulse.storage.base import Storage

logger = logging.getLogger(__name__)

SUGGESTION_WINDOW_DAYS = 30
RECENT_DAYS = 7
MIN_OCCURRENCES = 2
STRONG_OCCURRENCES = 3
MAX_DISPLAYED_SUGGESTIONS = 5

DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "17:00"

# work order id -> (work order, owning project)
WorkOrderLookup = Dict[int, Tuple[Optional[WorkOrder], Optional[Project]]]


def build_suggestions(
    entries: Iterable[TimesheetEntry],
    today: dt.date,
    work_orders: Optional[WorkOrderLookup] = None,
    recent_days: int = RECENT_DAYS,
    min_occurrences: int = MIN_OCCURRENCES,
    strong_occurrences: int = STRONG_OCCURRENCES,
) -> List[TimesheetSuggestion]:
    """Turn recurring entries into ranked suggestions.

    Args:
        entries: The user's entries for the analysis window
        today: Reference date for the recency check
        work_orders: Optional lookup used to fill in project/work order labels
        recent_days: A pattern used less than this many days ago is recent
        min_occurrences: Minimum entries for a work order to count as recurring
        strong_occurrences: Entries at which an old pattern is still suggested

    Returns:
        All qualifying suggestions, sorted by frequency descending
    """
    work_orders = work_orders or {}
    suggestions: List[TimesheetSuggestion] = []

    for work_order_id, group in group_by_work_order(entries).items():
        frequency = len(group)
        if frequency < min_occurrences:
            continue

        # max() keeps the first of several entries on the same latest date
        latest = max(group, key=lambda entry: entry.date)
        is_recent = (today - latest.date).days < recent_days
        if not is_recent and frequency < strong_occurrences:
            continue

        work_order, project = work_orders.get(work_order_id, (None, None))
        suggestions.append(
            TimesheetSuggestion(
                work_order_id=work_order_id,
                project_title=project.title if project else "",
                project_reference=project.reference_number if project else "",
                work_order_type=work_order.type if work_order else None,
                work_order_identifier=work_order.identifier if work_order else "",
                hours=latest.hours,
                start_time=latest.start_time or DEFAULT_START_TIME,
                end_time=latest.end_time or DEFAULT_END_TIME,
                description=latest.description,
                frequency=frequency,
                last_used=latest.date,
                break_taken=latest.break_taken,
                break_duration=latest.break_duration,
                is_leave=latest.is_leave,
                leave_type=latest.leave_type,
                leave_hours=latest.leave_hours,
            )
        )

    # sorted() is stable, so equally frequent patterns keep their order
    return sorted(suggestions, key=lambda s: s.frequency, reverse=True)


def top_suggestions(
    suggestions: List[TimesheetSuggestion], limit: int = MAX_DISPLAYED_SUGGESTIONS
) -> List[TimesheetSuggestion]:
    """Return the suggestions that are actually shown to the user."""
    return suggestions[:limit]


class SuggestionEngine:
    """Builds suggestions from the entry store.

    Store failures never propagate: the engine logs them and returns no
    suggestions, since suggestions are optional help.

    Example:
        >>> engine = SuggestionEngine(storage)
        >>> suggestions = engine.suggest(user_id=1)
    """

    def __init__(
        self,
        storage: Storage,
        window_days: int = SUGGESTION_WINDOW_DAYS,
        recent_days: int = RECENT_DAYS,
        min_occurrences: int = MIN_OCCURRENCES,
        strong_occurrences: int = STRONG_OCCURRENCES,
    ):
        self.storage = storage
        self.window_days = window_days
        self.recent_days = recent_days
        self.min_occurrences = min_occurrences
        self.strong_occurrences = strong_occurrences

    def suggest(
        self, user_id: int, today: Optional[dt.date] = None
    ) -> List[TimesheetSuggestion]:
        """Suggest recurring entries from the user's trailing window.

        Args:
            user_id: User whose history is analysed
            today: Reference date (defaults to today)

        Returns:
            Suggestions sorted by frequency; empty if the store is unavailable
        """
        today = today or dt.date.today()
        start_date = today - dt.timedelta(days=self.window_days)

        try:
            entries = self.storage.get_timesheet_entries(user_id, start_date, today)
            lookup = self._work_order_lookup(entries)
        except Exception as e:
            logger.warning(f"Failed to fetch entries for suggestions: {e}")
            return []

        suggestions = build_suggestions(
            entries,
            today,
            work_orders=lookup,
            recent_days=self.recent_days,
            min_occurrences=self.min_occurrences,
            strong_occurrences=self.strong_occurrences,
        )
        logger.info(
            f"Built {len(suggestions)} suggestions from {len(entries)} entries "
            f"between {start_date} and {today}"
        )
        return suggestions

    def _work_order_lookup(self, entries: List[TimesheetEntry]) -> WorkOrderLookup:
        lookup: WorkOrderLookup = {}
        for work_order_id in {entry.work_order_id for entry in entries}:
            work_order = self.storage.get_work_order(work_order_id)
            project = (
                self.storage.get_project(work_order.project_id) if work_order else None
            )
            lookup[work_order_id] = (work_order, project)
        return lookup
