"""Tests for structured logging utilities."""

import logging

import pytest

from timepulse.utils.logging_utils import (
    LogContext,
    _ContextFilter,
    generate_request_id,
    get_log_context,
    log_function_call,
)


class TestGenerateRequestId:
    """Test request ID generation."""

    def test_format(self):
        request_id = generate_request_id()

        assert isinstance(request_id, str)
        assert len(request_id) == 12
        int(request_id, 16)

    def test_uniqueness(self):
        ids = [generate_request_id() for _ in range(100)]
        assert len(set(ids)) == 100


class TestLogContext:
    """Test LogContext context manager."""

    def test_fields_visible_inside_context(self):
        assert get_log_context() == {}

        with LogContext(user_id=1):
            assert get_log_context() == {"user_id": 1}

        assert get_log_context() == {}

    def test_nested_contexts_merge_and_restore(self):
        with LogContext(user_id=1):
            with LogContext(request_id="r1"):
                assert get_log_context() == {"user_id": 1, "request_id": "r1"}
            assert get_log_context() == {"user_id": 1}

    def test_context_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with LogContext(user_id=1):
                raise RuntimeError("boom")

        assert get_log_context() == {}

    def test_get_log_context_returns_copy(self):
        with LogContext(user_id=1):
            get_log_context()["user_id"] = 99
            assert get_log_context() == {"user_id": 1}

    def test_filter_copies_fields_onto_record(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        with LogContext(user_id=5, request_id="abc"):
            assert _ContextFilter().filter(record) is True

        assert record.user_id == 5
        assert record.request_id == "abc"


class TestLogFunctionCall:
    """Test log_function_call decorator."""

    def test_without_arguments(self, caplog):
        @log_function_call
        def add(a, b):
            return a + b

        with caplog.at_level(logging.DEBUG):
            assert add(2, 3) == 5

        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("Entering") and "add" in m for m in messages)
        assert any(m.startswith("Exiting") and "add" in m for m in messages)

    def test_include_args_and_level(self, caplog):
        @log_function_call(include_args=True, level="INFO")
        def delete(entry_id, user_id=None):
            return True

        with caplog.at_level(logging.INFO):
            delete(3, user_id=1)

        entering = [r for r in caplog.records if r.getMessage().startswith("Entering")]
        assert entering[0].levelno == logging.INFO
        assert "(3, user_id=1)" in entering[0].getMessage()

    def test_exception_is_logged_and_reraised(self, caplog):
        @log_function_call
        def fail():
            raise ValueError("bad hours")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValueError, match="bad hours"):
                fail()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "ValueError: bad hours" in errors[0].getMessage()

    def test_expected_exception_logged_without_traceback(self, caplog):
        @log_function_call(expected=(KeyError,))
        def lookup():
            raise KeyError("entry 9")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(KeyError):
                lookup()

        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
        rejected = [r for r in caplog.records if "rejected" in r.getMessage()]
        assert len(rejected) == 1
        assert rejected[0].levelno == logging.INFO
        assert rejected[0].exc_info is None

    def test_unexpected_exception_still_an_error(self, caplog):
        @log_function_call(expected=(KeyError,))
        def broken():
            raise RuntimeError("store down")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(RuntimeError):
                broken()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].exc_info is not None

    def test_preserves_metadata(self):
        @log_function_call
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
