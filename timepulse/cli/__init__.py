"""TimePulse CLI.

This module provides a command-line interface for logging hours from
free-text prompts, viewing the weekly timesheet, suggestions, project
summaries and project timelines.
"""

import click
from pydantic import ValidationError

from timepulse import __version__
from timepulse.cli.app import AppContext, build_app_context
from timepulse.cli.commands.entries import (
    audit_log,
    delete_entry,
    deleted_entries,
    restore_entry,
    suggest,
    week,
)
from timepulse.cli.commands.log import log_entry, parse_prompt
from timepulse.cli.commands.projects import events, list_projects, report
from timepulse.cli.error_handlers import ConfigurationError, with_error_handling
from timepulse.config.logging_config import LoggingConfig, configure_logging
from timepulse.config.settings import get_config


@click.group(help="TimePulse CLI - Log hours and track projects from the terminal")
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Verbose logging and full stack traces")
@click.option(
    "--user-id",
    type=click.IntRange(min=1),
    default=None,
    help="User to act as (defaults to DEFAULT_USER_ID)",
)
@click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date for relative days and the current week (YYYY-MM-DD)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, user_id, today):
    """TimePulse CLI main entry point."""
    with with_error_handling(debug):
        configure_logging(LoggingConfig.from_env(log_level="DEBUG" if debug else None))

        # An injected context (tests, embedding) is reused as is
        if isinstance(ctx.obj, AppContext):
            ctx.obj.debug = debug or ctx.obj.debug
            return

        try:
            config = get_config()
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings: {e.error_count()} problem(s)",
                recovery_hint="Check the values in your .env file",
            ) from e

        ctx.obj = build_app_context(
            config,
            user_id=user_id,
            today=today.date() if today else None,
            debug=debug or config.debug,
        )


# Register commands
cli.add_command(log_entry)
cli.add_command(parse_prompt)
cli.add_command(week)
cli.add_command(suggest)
cli.add_command(list_projects)
cli.add_command(report)
cli.add_command(events)
cli.add_command(delete_entry)
cli.add_command(restore_entry)
cli.add_command(deleted_entries)
cli.add_command(audit_log)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
