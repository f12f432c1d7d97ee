"""Wiring of the services a CLI invocation works with."""

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Optional

from timepulse.aggregators.suggestion_engine import SuggestionEngine
from timepulse.config.settings import TimePulseConfig
from timepulse.parsers.time_parser import TimeParser
from timepulse.services.assistant_service import TimesheetAssistant
from timepulse.services.project_service import ProjectService
from timepulse.services.timesheet_service import TimesheetService
from timepulse.storage.base import Storage
from timepulse.storage.memory_storage import MemStorage
from timepulse.storage.sample_data import seed_sample_data

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a command needs, passed as the click context object."""

    config: TimePulseConfig
    storage: Storage
    user_id: int
    today: dt.date
    debug: bool = False

    @property
    def timesheets(self) -> TimesheetService:
        return TimesheetService(
            self.storage,
            auto_break_threshold=self.config.auto_break_threshold_hours,
            auto_break_hours=self.config.auto_break_hours,
        )

    @property
    def projects(self) -> ProjectService:
        return ProjectService(self.storage)

    @property
    def assistant(self) -> TimesheetAssistant:
        return TimesheetAssistant(TimeParser(self.storage), self.timesheets)

    @property
    def suggestions(self) -> SuggestionEngine:
        return SuggestionEngine(
            self.storage,
            window_days=self.config.suggestion_window_days,
            recent_days=self.config.suggestion_recent_days,
            min_occurrences=self.config.suggestion_min_occurrences,
            strong_occurrences=self.config.suggestion_strong_occurrences,
        )


def build_app_context(
    config: TimePulseConfig,
    user_id: Optional[int] = None,
    today: Optional[dt.date] = None,
    debug: bool = False,
    storage: Optional[Storage] = None,
) -> AppContext:
    """Create the store (seeded if configured) and the context around it."""
    user_id = user_id or config.default_user_id
    today = today or dt.date.today()
    if storage is None:
        storage = MemStorage()
        if config.seed_sample_data:
            seed_sample_data(storage, config.default_user_id, today=today)
    logger.debug(f"CLI context for user {user_id}, today {today}")
    return AppContext(
        config=config, storage=storage, user_id=user_id, today=today, debug=debug
    )
