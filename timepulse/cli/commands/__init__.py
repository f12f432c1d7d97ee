"""CLI commands."""

from timepulse.cli.commands.entries import delete_entry, restore_entry, suggest, week
from timepulse.cli.commands.log import log_entry, parse_prompt
from timepulse.cli.commands.projects import events, list_projects, report

__all__ = [
    "delete_entry",
    "events",
    "list_projects",
    "log_entry",
    "parse_prompt",
    "report",
    "restore_entry",
    "suggest",
    "week",
]
