"""Structured logging utilities with context support."""

import functools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, Optional, Tuple, Type

# Thread-local storage for log context
_thread_local = threading.local()


def generate_request_id() -> str:
    """Generate a short unique id to correlate the log lines of one request."""
    return uuid.uuid4().hex[:12]


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently attached to log records."""
    return dict(getattr(_thread_local, "context", {}))


class LogContext:
    """Context manager for adding structured fields to log records.

    Fields are stored in thread-local storage and copied onto every record
    emitted while the context is active (see _ContextFilter). Nested
    contexts add to the outer fields and restore them on exit.

    Example:
        with LogContext(user_id=1, request_id=generate_request_id()):
            logger.info("Processing prompt")
            # Record carries user_id and request_id
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._previous: Optional[Dict[str, Any]] = None

    def __enter__(self) -> "LogContext":
        self._previous = get_log_context()
        _thread_local.context = {**self._previous, **self.fields}
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _thread_local.context = self._previous or {}


class _ContextFilter(logging.Filter):
    """Logging filter that adds context fields to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in get_log_context().items():
            setattr(record, key, value)
        return True


def log_function_call(
    func: Optional[Callable] = None,
    *,
    include_args: bool = False,
    level: str = "DEBUG",
    expected: Tuple[Type[BaseException], ...] = (),
) -> Callable:
    """Decorator to log function entry, exit and exceptions.

    Args:
        func: Function to decorate (when used without arguments)
        include_args: Whether to include function arguments in logs
        level: Log level for entry/exit lines
        expected: Exception types that are part of normal operation; these
            are logged at INFO without a traceback

    Example:
        @log_function_call(expected=(InvalidInputError,))
        def create_entry(self, data):
            ...

        @log_function_call(include_args=True, level="INFO")
        def delete_entry(self, entry_id, user_id):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                signature = ", ".join(
                    [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
                )
                logger.log(log_level, f"Entering {f.__qualname__}({signature})")
            else:
                logger.log(log_level, f"Entering {f.__qualname__}")

            try:
                result = f(*args, **kwargs)
            except expected as e:
                logger.info(f"{f.__qualname__} rejected: {type(e).__name__}: {e}")
                raise
            except Exception as e:
                logger.error(
                    f"Exception in {f.__qualname__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            logger.log(log_level, f"Exiting {f.__qualname__}")
            return result

        return wrapper

    # Handle both @log_function_call and @log_function_call() syntax
    if func is None:
        return decorator
    return decorator(func)
