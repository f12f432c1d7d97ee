"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click

from timepulse.cli.utils.formatters import format_error, format_warning
from timepulse.services.errors import (
    InvalidInputError,
    NotFoundError,
    OperationFailedError,
)

EXIT_CONFIGURATION_ERROR = 1
EXIT_OPERATION_FAILED = 2
EXIT_INVALID_INPUT = 3
EXIT_NOT_FOUND = 4
EXIT_CANCELLED = 130
EXIT_UNEXPECTED = 255


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""


def _echo_error(title: str, message: str, hint: Optional[str] = None) -> None:
    click.echo(format_error(f"{title}: {message}"), err=True)
    if hint:
        click.echo(format_warning(f"Hint: {hint}"), err=True)


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code for the error type
    """
    if isinstance(error, ConfigurationError):
        _echo_error("Configuration Error", error.message, error.recovery_hint)
        return EXIT_CONFIGURATION_ERROR

    elif isinstance(error, InvalidInputError):
        _echo_error("Invalid Input", error.user_message)
        for detail in error.details:
            click.echo(f"  - {detail}", err=True)
        return EXIT_INVALID_INPUT

    elif isinstance(error, NotFoundError):
        _echo_error(
            "Not Found",
            error.user_message,
            "Check the id; run deleted-entries to see what can be restored",
        )
        return EXIT_NOT_FOUND

    elif isinstance(error, OperationFailedError):
        _echo_error(
            "Operation Failed",
            error.user_message,
            "The data store could not be reached; nothing was changed",
        )
        if debug and error.cause is not None:
            click.echo(f"Cause: {type(error.cause).__name__}: {error.cause}", err=True)
        return EXIT_OPERATION_FAILED

    # Handle click.Abort (user cancellation)
    elif isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return EXIT_CANCELLED

    else:
        click.echo(format_error(f"Unexpected Error: {type(error).__name__}"), err=True)
        click.echo(str(error), err=True)

        if debug:
            click.echo("\nFull stack trace:", err=True)
            click.echo(traceback.format_exc(), err=True)
        else:
            click.echo(
                format_warning("\nRun with --debug flag for full stack trace"), err=True
            )

        return EXIT_UNEXPECTED


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Args:
        debug: Whether to show full stack traces

    Example:
        @click.command()
        @click.pass_obj
        def my_command(app):
            with with_error_handling(app.debug):
                # Command implementation
                pass
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if isinstance(exc_val, Exception) and not isinstance(
                exc_val, click.exceptions.Exit
            ):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False

    return ErrorHandler(debug)
