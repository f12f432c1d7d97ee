"""Project commands: hour summaries, weekly report and timelines."""

import click

from timepulse.cli.app import AppContext
from timepulse.cli.error_handlers import with_error_handling
from timepulse.cli.utils.formatters import (
    format_hours,
    format_info,
    format_success,
    format_table,
)
from timepulse.utils.date_utils import (
    format_date_range,
    get_calendar_week_end,
    get_week_start,
)


@click.command(name="projects")
@click.pass_obj
def list_projects(app: AppContext):
    """List projects with their validation and design hours.

    Example:
        timepulse projects
    """
    with with_error_handling(app.debug):
        summary = app.projects.summarize_hours()

        if not summary.projects:
            click.echo(format_info("No projects found."))
            return

        rows = [
            [
                str(item.project.id),
                item.project.reference_number,
                item.project.title,
                item.project.status.value,
                format_hours(item.validation_hours),
                format_hours(item.design_hours),
                format_hours(item.total_hours),
            ]
            for item in summary.projects
        ]
        click.echo(
            format_table(
                ["ID", "Reference", "Title", "Status", "Validation", "Design", "Total"],
                rows,
            )
        )
        click.echo()
        click.echo(
            format_success(
                f"{len(summary.projects)} project(s), "
                f"{format_hours(summary.total_hours)} logged"
            )
        )


@click.command(name="report")
@click.pass_obj
def report(app: AppContext):
    """Show the Monday to Sunday summary report.

    Example:
        timepulse --today 2026-10-16 report
    """
    with with_error_handling(app.debug):
        weekly = app.projects.weekly_report(app.user_id, app.today)

        week_span = format_date_range(
            get_week_start(app.today), get_calendar_week_end(app.today)
        )
        click.echo(format_info(f"Week of {week_span}"))
        rows = [
            ["Hours this week", format_hours(weekly.weekly_hours)],
            ["Validation hours", format_hours(weekly.validation_hours)],
            ["Design hours", format_hours(weekly.design_hours)],
            ["Active projects", str(weekly.active_projects)],
            ["Total projects", str(weekly.total_projects)],
        ]
        click.echo(format_table(["Metric", "Value"], rows))


@click.command(name="events")
@click.argument("project_id", type=int)
@click.pass_obj
def events(app: AppContext, project_id: int):
    """Show a project's timeline, newest first.

    Example:
        timepulse events 1
    """
    with with_error_handling(app.debug):
        project = app.projects.get_project(project_id)
        timeline = app.projects.get_events(project_id)

        click.echo(format_info(f"{project.reference_number} - {project.title}"))
        rows = [
            [
                event.created_at.strftime("%Y-%m-%d %H:%M"),
                event.type.value,
                event.content,
            ]
            for event in timeline
        ]
        click.echo(format_table(["When", "Type", "Event"], rows))
