"""Timesheet assistant: log hours from a free-text prompt."""

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Optional

from timepulse.models import TimesheetEntry, TimesheetEntryCreate
from timepulse.parsers.time_parser import ParsedEntry, ParseFailure, TimeParser
from timepulse.services.errors import TimePulseError
from timepulse.services.timesheet_service import TimesheetService
from timepulse.utils.date_utils import format_long_date
from timepulse.utils.logging_utils import LogContext, generate_request_id

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a description of your work."
PROCESSING_ERROR_MESSAGE = (
    "I encountered an error while processing your request. Please try again "
    "or create the timesheet entry manually."
)


@dataclass
class AssistantResponse:
    """Outcome of one prompt: a message for the user and the created entry."""

    success: bool
    message: str
    entry: Optional[TimesheetEntry] = None


def format_success_message(parsed: ParsedEntry, entry: TimesheetEntry) -> str:
    """Describe a logged entry the way it is shown back to the user.

    Example:
        "Successfully logged 2.50 hours for PRJ-2023-0001 (validation) on
        Friday, October 16 with description: site inspection."
    """
    message = (
        f"Successfully logged {entry.hours:.2f} hours for {parsed.project.label} "
        f"({parsed.work_type.value}) on {format_long_date(entry.date)}"
    )
    if entry.description:
        message += f" with description: {entry.description}"
    return message + "."


class TimesheetAssistant:
    """Parses prompts and logs the resulting entries.

    Never raises for user-facing problems: every outcome is an
    AssistantResponse.
    """

    def __init__(self, parser: TimeParser, timesheet_service: TimesheetService):
        self.parser = parser
        self.timesheet_service = timesheet_service

    def parse_prompt(self, prompt: str, today: Optional[dt.date] = None):
        """Parse without logging anything (dry run)."""
        return self.parser.parse(prompt, today=today)

    def process_prompt(
        self, prompt: str, user_id: int, today: Optional[dt.date] = None
    ) -> AssistantResponse:
        """Parse a prompt and, if it is complete, log the entry.

        Args:
            prompt: Free text such as "Log 3 hours of internal design on
                PRJ-2023-0001 yesterday"
            user_id: User the entry is logged for
            today: Reference date for relative days (defaults to today)

        Returns:
            AssistantResponse with the outcome message
        """
        if not prompt or not prompt.strip():
            return AssistantResponse(success=False, message=EMPTY_PROMPT_MESSAGE)

        with LogContext(user_id=user_id, prompt_id=generate_request_id()):
            logger.info(f"Processing prompt: {prompt!r}")
            result = self.parser.parse(prompt, today=today)
            if isinstance(result, ParseFailure):
                return AssistantResponse(success=False, message=result.message)

            try:
                entry = self.timesheet_service.create_entry(
                    TimesheetEntryCreate(
                        user_id=user_id,
                        work_order_id=result.work_order_id,
                        date=result.date,
                        hours=result.hours,
                        start_time=result.start_time,
                        end_time=result.end_time,
                        description=result.description,
                    )
                )
            except TimePulseError as e:
                logger.error(f"Failed to log parsed entry: {e.user_message}")
                return AssistantResponse(success=False, message=PROCESSING_ERROR_MESSAGE)

            return AssistantResponse(
                success=True,
                message=format_success_message(result, entry),
                entry=entry,
            )
