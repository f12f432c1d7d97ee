"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import os
from decimal import Decimal
from typing import Dict

import pytest

from timepulse.config import TimePulseConfig, reload_config
from timepulse.config.logging_config import reset_logging
from timepulse.models import (
    ProjectCreate,
    TimesheetEntryCreate,
    WorkOrderType,
)
from timepulse.storage import MemStorage

# Friday
TODAY = dt.date(2026, 10, 16)
USER_ID = 1


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'ENVIRONMENT': 'testing',
        'DEBUG': 'false',
        'LOG_LEVEL': 'WARNING',
        'DEFAULT_USER_ID': '1',
        'SEED_SAMPLE_DATA': 'true',
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import timepulse.config.settings
    timepulse.config.settings._config = None

    yield test_env_vars

    # Clean up
    timepulse.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> TimePulseConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def today() -> dt.date:
    """Fixed reference date (a Friday) so week and relative-day logic is stable."""
    return TODAY


@pytest.fixture
def storage() -> MemStorage:
    """Empty in-memory store."""
    return MemStorage()


@pytest.fixture
def project(storage):
    """Project PRJ-2023-0001 with its two work orders."""
    return storage.create_project(
        ProjectCreate(
            title="North Metro Upgrade",
            reference_number="PRJ-2023-0001",
            form_code_type="NM-DES-2023",
        ),
        created_by=USER_ID,
    )


@pytest.fixture
def work_orders(storage, project):
    """The project's work orders keyed by type."""
    return {wo.type: wo for wo in storage.get_work_orders(project.id)}


@pytest.fixture
def validation_work_order(work_orders):
    return work_orders[WorkOrderType.VALIDATION]


@pytest.fixture
def design_work_order(work_orders):
    return work_orders[WorkOrderType.INTERNAL_DESIGN]


@pytest.fixture
def make_entry(storage):
    """Factory storing an entry with sensible defaults."""

    def _make_entry(work_order, date=TODAY, hours="2", user_id=USER_ID, **fields):
        return storage.create_timesheet_entry(
            TimesheetEntryCreate(
                user_id=user_id,
                work_order_id=work_order.id,
                date=date,
                hours=Decimal(hours) if hours is not None else None,
                **fields,
            )
        )

    return _make_entry


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Drop handlers the CLI installs so later tests do not log to closed streams."""
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    # Remove test coverage files in case they're created
    test_files = ['coverage.xml', '.coverage']
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as exercising the command-line interface"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        # Add unit marker for tests in tests/unit/
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "tests/unit/cli/" in str(item.fspath):
            item.add_marker(pytest.mark.cli)
