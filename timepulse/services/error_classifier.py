"""
Error classification for service operations.

Maps exceptions raised by models and storage onto the service error
hierarchy, keeping counts of each kind for diagnostics.
"""

import logging
from enum import Enum
from typing import Any, Dict, List

from pydantic import ValidationError

from timepulse.services.errors import (
    InvalidInputError,
    NotFoundError,
    OperationFailedError,
    TimePulseError,
)
from timepulse.storage.base import DuplicateRecordError, RecordNotFoundError

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Classification of error types."""

    INVALID_INPUT = "invalid_input"  # Validation errors, duplicates, bad values
    NOT_FOUND = "not_found"  # Missing records
    OPERATION_FAILED = "operation_failed"  # Anything else (storage unavailable)


class ErrorClassifier:
    """
    Classifies errors raised during service operations.

    Features:
    - Input/not-found/failure classification
    - Conversion to service exceptions with user-facing messages
    - Statistics tracking
    """

    def __init__(self):
        """Initialize error classifier with statistics tracking."""
        self._stats: Dict[str, int] = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        stats = {error_type.value: 0 for error_type in ErrorType}
        stats["total"] = 0
        return stats

    def classify(self, exception: Exception) -> ErrorType:
        """
        Classify an exception.

        Args:
            exception: The exception to classify

        Returns:
            ErrorType classification
        """
        self._stats["total"] += 1

        if isinstance(exception, InvalidInputError):
            error_type = ErrorType.INVALID_INPUT
        elif isinstance(exception, (NotFoundError, RecordNotFoundError)):
            error_type = ErrorType.NOT_FOUND
        # ValidationError is a ValueError subclass
        elif isinstance(exception, (DuplicateRecordError, ValueError)):
            error_type = ErrorType.INVALID_INPUT
        else:
            error_type = ErrorType.OPERATION_FAILED

        self._stats[error_type.value] += 1
        return error_type

    def get_error_description(self, exception: Exception) -> str:
        """
        Get a human-readable error description for logs.

        Args:
            exception: The exception to describe

        Returns:
            Error description string
        """
        error_type = self.classify(exception)

        if isinstance(exception, ValidationError):
            return (
                f"Validation error ({exception.error_count()} problems) "
                f"- {error_type.value}"
            )
        if isinstance(exception, RecordNotFoundError):
            return f"{exception.entity} {exception.record_id} not found - {error_type.value}"
        if isinstance(exception, DuplicateRecordError):
            return (
                f"Duplicate {exception.entity} {exception.field} "
                f"- {error_type.value}"
            )

        return f"{type(exception).__name__}: {str(exception)} - {error_type.value}"

    def to_service_error(self, exception: Exception, action: str) -> TimePulseError:
        """
        Convert an exception into the matching service error.

        Service errors pass through unchanged.

        Args:
            exception: The exception raised while performing the action
            action: What was being done, e.g. "create timesheet entry"

        Returns:
            A TimePulseError subclass carrying the original as cause
        """
        if isinstance(exception, TimePulseError):
            self.classify(exception)
            return exception

        error_type = self.classify(exception)
        logger.debug(f"Failed to {action}: {type(exception).__name__}: {exception}")

        if error_type == ErrorType.NOT_FOUND:
            if isinstance(exception, RecordNotFoundError):
                message = f"{exception.entity} {exception.record_id} was not found."
            else:
                message = f"Could not {action}: record not found."
            return NotFoundError(message, cause=exception)

        if error_type == ErrorType.INVALID_INPUT:
            return InvalidInputError(
                f"Could not {action}: the input is invalid.",
                cause=exception,
                details=self._input_details(exception),
            )

        return OperationFailedError(
            f"Could not {action}. Please try again later.", cause=exception
        )

    @staticmethod
    def _input_details(exception: Exception) -> List[str]:
        if isinstance(exception, ValidationError):
            return [
                f"{'.'.join(str(part) for part in error['loc']) or 'input'}: {error['msg']}"
                for error in exception.errors()
            ]
        if isinstance(exception, DuplicateRecordError):
            return [f"{exception.field} {exception.value!r} is already in use"]
        return [str(exception)]

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get error classification statistics.

        Returns:
            Dictionary with error counts
        """
        return self._stats.copy()

    def reset_statistics(self):
        """Reset error statistics."""
        self._stats = self._empty_stats()
