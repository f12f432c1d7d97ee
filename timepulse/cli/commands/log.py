"""Log and parse commands for free-text prompts."""

import click

from timepulse.cli.app import AppContext
from timepulse.cli.error_handlers import EXIT_INVALID_INPUT, with_error_handling
from timepulse.cli.utils.formatters import (
    format_error,
    format_hours,
    format_success,
    format_table,
    format_time_range,
)
from timepulse.parsers.time_parser import ParseFailure


@click.command(name="log")
@click.argument("prompt")
@click.pass_obj
def log_entry(app: AppContext, prompt: str):
    """Log hours described in plain English.

    Example:
        timepulse log "Log 3 hours of internal design on PRJ-2023-0001 yesterday"
        timepulse log "I worked on PRJ-2023-0001 validation from 9:00 to 11:30"
    """
    with with_error_handling(app.debug):
        response = app.assistant.process_prompt(prompt, app.user_id, today=app.today)

    if not response.success:
        click.echo(format_error(response.message), err=True)
        raise click.exceptions.Exit(EXIT_INVALID_INPUT)

    click.echo(format_success(response.message))
    click.echo(f"Entry id: {response.entry.id}")


@click.command(name="parse")
@click.argument("prompt")
@click.pass_obj
def parse_prompt(app: AppContext, prompt: str):
    """Show how a prompt would be read, without logging anything.

    Example:
        timepulse parse "Spent 2 hours on North Metro Upgrade validation"
    """
    with with_error_handling(app.debug):
        result = app.assistant.parse_prompt(prompt, today=app.today)

    if isinstance(result, ParseFailure):
        click.echo(format_error(result.message), err=True)
        raise click.exceptions.Exit(EXIT_INVALID_INPUT)

    rows = [
        ["Project", result.project.label],
        ["Work type", result.work_type.value],
        ["Work order", str(result.work_order_id)],
        ["Date", result.date.isoformat()],
        ["Hours", format_hours(result.hours)],
        ["Time", format_time_range(result.start_time, result.end_time)],
        ["Description", result.description or "-"],
    ]
    click.echo(format_table(["Field", "Value"], rows))
