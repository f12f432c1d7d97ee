"""Service-level exceptions.

Every failing service operation raises one of these. Each carries a
user_message that is safe to show (no internal detail) and, when it wraps
another exception, the original as .cause.
"""

from typing import List, Optional


class TimePulseError(Exception):
    """Base exception for service operation failures."""

    def __init__(
        self,
        user_message: str,
        cause: Optional[BaseException] = None,
        details: Optional[List[str]] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.cause = cause
        self.details = details or []


class InvalidInputError(TimePulseError):
    """The caller supplied data the operation cannot accept."""


class NotFoundError(TimePulseError):
    """The record the operation targets does not exist."""


class OperationFailedError(TimePulseError):
    """The operation failed for a reason outside the caller's control."""


# Failures caused by the caller's request rather than by the system
CALLER_ERRORS = (InvalidInputError, NotFoundError)
