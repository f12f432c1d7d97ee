"""Timesheet entry commands: weekly view, suggestions, delete, restore and audit."""

from typing import Optional

import click

from timepulse.aggregators.suggestion_engine import top_suggestions
from timepulse.cli.app import AppContext
from timepulse.cli.error_handlers import with_error_handling
from timepulse.cli.utils.formatters import (
    format_hours,
    format_info,
    format_success,
    format_table,
    format_time_range,
    format_warning,
)
from timepulse.models import AuditAction, AuditEntity
from timepulse.utils.date_utils import format_week_range


@click.command(name="week")
@click.option(
    "--date",
    "day",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Any date in the week to show (default: today)",
)
@click.option("--matrix/--no-matrix", default=True, help="Show the work order matrix")
@click.pass_obj
def week(app: AppContext, day, matrix: bool):
    """Show the Monday to Friday timesheet with daily totals.

    Days reaching 4.5 hours without a recorded break show the automatic
    30 minute deduction.

    Example:
        timepulse week
        timepulse week --date 2026-10-05 --no-matrix
    """
    with with_error_handling(app.debug):
        target = day.date() if day else app.today
        timesheet = app.timesheets.get_week(app.user_id, target)

        click.echo(format_info(f"Week of {format_week_range(target)}"))
        click.echo()

        rows = []
        for date_key in timesheet.date_keys:
            result = timesheet.daily_totals[date_key]
            note = ""
            if result.auto_break_applied:
                note = f"auto break -{format_hours(app.config.auto_break_hours)}"
            elif result.break_taken:
                note = "break taken"
            rows.append(
                [
                    date_key,
                    str(len(timesheet.entries_by_date[date_key])),
                    format_hours(result.raw_hours),
                    format_hours(result.total_hours),
                    note,
                ]
            )
        click.echo(format_table(["Date", "Entries", "Logged", "Total", "Note"], rows))

        if timesheet.entry_count == 0:
            click.echo()
            click.echo(format_info("No entries logged this week."))
            return

        entry_rows = []
        for date_key in timesheet.date_keys:
            for entry in timesheet.entries_by_date[date_key]:
                work_order = timesheet.work_orders.get(entry.work_order_id)
                entry_rows.append(
                    [
                        str(entry.id),
                        date_key,
                        work_order.identifier if work_order else str(entry.work_order_id),
                        format_hours(entry.hours),
                        format_time_range(entry.start_time, entry.end_time),
                        entry.description or "",
                    ]
                )
        click.echo()
        click.echo(
            format_table(
                ["ID", "Date", "Work Order", "Hours", "Time", "Description"], entry_rows
            )
        )

        if matrix:
            click.echo()
            click.echo(timesheet.to_matrix().to_string())

        click.echo()
        click.echo(format_success(f"Weekly total: {format_hours(timesheet.total_hours)}"))


@click.command(name="suggest")
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum suggestions to show (default: MAX_SUGGESTIONS)",
)
@click.pass_obj
def suggest(app: AppContext, limit: Optional[int]):
    """Suggest entries based on your recurring work.

    Example:
        timepulse suggest --limit 3
    """
    with with_error_handling(app.debug):
        suggestions = app.suggestions.suggest(app.user_id, today=app.today)
        shown = top_suggestions(suggestions, limit or app.config.max_suggestions)

        if not shown:
            click.echo(format_info("No suggestions yet. Log recurring work to get some."))
            return

        rows = [
            [
                s.project_reference or str(s.work_order_id),
                s.project_title,
                s.work_order_type.value if s.work_order_type else "",
                format_hours(s.hours),
                format_time_range(s.start_time, s.end_time),
                str(s.frequency),
                s.last_used.isoformat(),
                s.description or "",
            ]
            for s in shown
        ]
        click.echo(
            format_table(
                [
                    "Reference",
                    "Project",
                    "Type",
                    "Hours",
                    "Time",
                    "Frequency",
                    "Last Used",
                    "Description",
                ],
                rows,
            )
        )
        click.echo()
        click.echo(format_success(f"Showing {len(shown)} of {len(suggestions)} suggestion(s)"))


@click.command(name="delete-entry")
@click.argument("entry_id", type=int)
@click.pass_obj
def delete_entry(app: AppContext, entry_id: int):
    """Delete a timesheet entry (it can be restored later).

    Example:
        timepulse delete-entry 3
    """
    with with_error_handling(app.debug):
        app.timesheets.delete_entry(entry_id, app.user_id)
        click.echo(format_success(f"Deleted timesheet entry {entry_id}"))
        click.echo(format_warning(f"Restore it with: timepulse restore-entry {entry_id}"))


@click.command(name="restore-entry")
@click.argument("entry_id", type=int)
@click.pass_obj
def restore_entry(app: AppContext, entry_id: int):
    """Restore a deleted timesheet entry.

    Example:
        timepulse restore-entry 3
    """
    with with_error_handling(app.debug):
        entry = app.timesheets.restore_entry(entry_id, app.user_id)
        click.echo(
            format_success(
                f"Restored timesheet entry {entry.id} "
                f"({format_hours(entry.hours)} on {entry.date.isoformat()})"
            )
        )


@click.command(name="deleted-entries")
@click.pass_obj
def deleted_entries(app: AppContext):
    """List your deleted entries that can still be restored.

    Example:
        timepulse deleted-entries
    """
    with with_error_handling(app.debug):
        entries = app.timesheets.get_deleted_entries(user_id=app.user_id)

        if not entries:
            click.echo(format_info("No deleted entries."))
            return

        rows = [
            [
                str(entry.id),
                entry.date.isoformat(),
                str(entry.work_order_id),
                format_hours(entry.hours),
                entry.description or "",
            ]
            for entry in entries
        ]
        click.echo(format_table(["ID", "Date", "Work Order", "Hours", "Description"], rows))
        click.echo()
        click.echo(format_info("Restore one with: timepulse restore-entry ID"))


@click.command(name="audit-log")
@click.option(
    "--entity",
    type=click.Choice([entity.value for entity in AuditEntity]),
    default=None,
    help="Only records about this kind of entity",
)
@click.option(
    "--action",
    type=click.Choice([action.value for action in AuditAction]),
    default=None,
    help="Only records of this action",
)
@click.option(
    "--since",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="First day to include (YYYY-MM-DD, UTC)",
)
@click.option(
    "--until",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Last day to include (YYYY-MM-DD, UTC)",
)
@click.pass_obj
def audit_log(app: AppContext, entity, action, since, until):
    """Show the audit trail of creates, updates, deletes and restores.

    Example:
        timepulse audit-log --entity timesheet --action delete
    """
    with with_error_handling(app.debug):
        logs = app.timesheets.get_audit_logs(
            entity_type=AuditEntity(entity) if entity else None,
            action=AuditAction(action) if action else None,
            since=since.date() if since else None,
            until=until.date() if until else None,
        )

        if not logs:
            click.echo(format_info("No audit records match."))
            return

        rows = [
            [
                log.created_at.strftime("%Y-%m-%d %H:%M"),
                log.entity_type.value,
                str(log.entity_id),
                log.action.value,
                str(log.action_by),
                log.details or "",
            ]
            for log in logs
        ]
        click.echo(
            format_table(["When", "Entity", "ID", "Action", "By", "Details"], rows)
        )
