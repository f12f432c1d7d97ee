"""Unit tests for CLI error handling."""

import click
import pytest

from timepulse.cli.error_handlers import (
    EXIT_CANCELLED,
    EXIT_CONFIGURATION_ERROR,
    EXIT_INVALID_INPUT,
    EXIT_NOT_FOUND,
    EXIT_OPERATION_FAILED,
    EXIT_UNEXPECTED,
    ConfigurationError,
    handle_cli_error,
    with_error_handling,
)
from timepulse.services.errors import (
    InvalidInputError,
    NotFoundError,
    OperationFailedError,
)


class TestHandleCliError:
    """Test exit codes and messages per error type."""

    def test_configuration_error(self, capsys):
        code = handle_cli_error(ConfigurationError("bad env", recovery_hint="fix .env"))

        captured = capsys.readouterr()
        assert code == EXIT_CONFIGURATION_ERROR
        assert "bad env" in captured.err
        assert "fix .env" in captured.err

    def test_invalid_input_lists_details(self, capsys):
        error = InvalidInputError("Could not create project", details=["title: required"])

        code = handle_cli_error(error)

        assert code == EXIT_INVALID_INPUT
        assert "title: required" in capsys.readouterr().err

    def test_not_found(self):
        assert handle_cli_error(NotFoundError("Project 1 was not found.")) == EXIT_NOT_FOUND

    def test_operation_failed_differs_from_bad_input(self, capsys):
        error = OperationFailedError("Could not save", cause=ConnectionError("down"))

        code = handle_cli_error(error, debug=True)

        assert code == EXIT_OPERATION_FAILED
        assert code != EXIT_INVALID_INPUT
        assert "ConnectionError" in capsys.readouterr().err

    def test_abort(self):
        assert handle_cli_error(click.Abort()) == EXIT_CANCELLED

    def test_unexpected(self, capsys):
        code = handle_cli_error(RuntimeError("boom"))

        assert code == EXIT_UNEXPECTED
        assert "--debug" in capsys.readouterr().err


class TestWithErrorHandling:
    """Test the error handling context manager."""

    def test_exits_with_code(self):
        with pytest.raises(SystemExit) as exc_info:
            with with_error_handling():
                raise NotFoundError("gone")
        assert exc_info.value.code == EXIT_NOT_FOUND

    def test_no_error_passes(self):
        with with_error_handling():
            value = 1
        assert value == 1

    def test_click_exit_is_not_an_error(self):
        with pytest.raises(click.exceptions.Exit):
            with with_error_handling():
                raise click.exceptions.Exit(0)
