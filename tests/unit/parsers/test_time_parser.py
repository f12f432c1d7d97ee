"""Unit tests for the natural-language time parser."""

import datetime as dt
from decimal import Decimal
from unittest.mock import Mock

import pytest

from timepulse.models import Project, ProjectCreate, WorkOrderType
from timepulse.parsers.time_parser import (
    ParsedEntry,
    ParseFailure,
    ParseFailureReason,
    TimeParser,
    extract_date,
    extract_description,
    extract_duration,
    extract_project,
    extract_work_type,
    resolve_work_order,
)

TODAY = dt.date(2026, 10, 16)


@pytest.fixture
def parser(storage, project):
    return TimeParser(storage)


def _project(project_id: int, title: str, reference: str) -> Project:
    return Project(
        id=project_id, title=title, reference_number=reference, form_code_type="FC"
    )


class TestExtractProject:
    """Test cases for project identification."""

    def test_reference_number_wins(self):
        projects = [_project(1, "North Metro Upgrade", "PRJ-2023-0001")]

        match = extract_project(
            "north metro upgrade work on prj-2023-0002", projects
        )

        assert match.reference_number == "PRJ-2023-0002"
        assert match.project is None

    def test_reference_resolved_against_known_projects(self):
        projects = [_project(1, "North Metro Upgrade", "PRJ-2023-0001")]

        match = extract_project("validation on PRJ-2023-0001", projects)

        assert match.project.id == 1
        assert match.label == "PRJ-2023-0001"

    def test_title_match_case_insensitive(self):
        projects = [
            _project(1, "Harbour Bridge Survey", "PRJ-2023-0002"),
            _project(2, "North Metro Upgrade", "PRJ-2023-0001"),
        ]

        match = extract_project("2 hours validation on NORTH METRO UPGRADE", projects)

        assert match.project.id == 2
        assert match.reference_number is None
        assert match.label == "North Metro Upgrade"

    def test_first_matching_title_wins(self):
        projects = [
            _project(1, "Metro", "PRJ-2023-0003"),
            _project(2, "North Metro Upgrade", "PRJ-2023-0001"),
        ]

        assert extract_project("north metro upgrade", projects).project.id == 1

    def test_nothing_found(self):
        assert extract_project("2 hours of validation", []) is None


class TestExtractWorkType:
    """Test cases for work type identification."""

    @pytest.mark.parametrize(
        "prompt,expected",
        [
            ("Validation of the site", WorkOrderType.VALIDATION),
            ("internal design session", WorkOrderType.INTERNAL_DESIGN),
            ("DESIGN review", WorkOrderType.INTERNAL_DESIGN),
            ("design and validation", WorkOrderType.VALIDATION),
            ("site visit", None),
        ],
    )
    def test_classification(self, prompt, expected):
        assert extract_work_type(prompt) == expected


class TestExtractDuration:
    """Test cases for duration identification."""

    @pytest.mark.parametrize(
        "prompt,expected",
        [
            ("3 hours", "3"),
            ("1 hour", "1"),
            ("2.5 hrs", "2.5"),
            ("4hr", "4"),
        ],
    )
    def test_hour_count(self, prompt, expected):
        duration = extract_duration(prompt)

        assert duration.hours == Decimal(expected)
        assert duration.start_time is None

    def test_hour_count_wins_over_range(self):
        assert extract_duration("2 hours from 9:00 to 17:00").hours == Decimal("2")

    @pytest.mark.parametrize(
        "prompt,start,end,hours",
        [
            ("from 9:00 to 11:30", "09:00", "11:30", "2.50"),
            ("9-12", "09:00", "12:00", "3.00"),
            ("1pm - 3:30pm", "13:00", "15:30", "2.50"),
            ("10am to 2pm", "10:00", "14:00", "4.00"),
            ("9:00 to 9:10", "09:00", "09:10", "0.17"),
        ],
    )
    def test_time_range(self, prompt, start, end, hours):
        duration = extract_duration(prompt)

        assert duration.start_time == start
        assert duration.end_time == end
        assert duration.hours == Decimal(hours)

    def test_reversed_range_clamps_to_zero(self):
        assert extract_duration("from 5pm to 9am").hours == Decimal("0")

    def test_invalid_clock_times_are_not_a_range(self):
        assert extract_duration("from 30 to 45") is None

    def test_reference_number_is_not_a_range(self):
        assert extract_duration("validation on PRJ-2023-0001") is None


class TestExtractDate:
    """Test cases for relative dates."""

    def test_default_today(self):
        assert extract_date("validation", TODAY) == TODAY

    def test_yesterday(self):
        assert extract_date("Yesterday I did validation", TODAY) == dt.date(2026, 10, 15)

    def test_tomorrow(self):
        assert extract_date("tomorrow", TODAY) == dt.date(2026, 10, 17)

    def test_absolute_dates_are_ignored(self):
        assert extract_date("on 2026-10-01", TODAY) == TODAY


class TestExtractDescription:
    """Test cases for description extraction."""

    def test_keeps_content_words(self):
        assert (
            extract_description(
                "Spent 2 hours on PRJ-2023-0001 validation, site inspection!",
                "PRJ-2023-0001",
            )
            == "site inspection"
        )

    def test_strips_times_and_title(self):
        assert (
            extract_description(
                "North Metro Upgrade design from 9am to 11am reviewing drawings",
                "North Metro Upgrade",
            )
            == "reviewing drawings"
        )

    def test_long_numbers_are_kept(self):
        assert (
            extract_description(
                "Spent 2 hours on PRJ-2023-0001 reviewing 100 drawings", "PRJ-2023-0001"
            )
            == "reviewing 100 drawings"
        )

    def test_short_numbers_read_as_hours(self):
        assert (
            extract_description(
                "Spent 2 hours on PRJ-2023-0001 checking 12 panels", "PRJ-2023-0001"
            )
            == "checking panels"
        )

    def test_nothing_left(self):
        assert (
            extract_description(
                "I worked on project PRJ-2023-0001 validation from 9:00 to 11:30 today",
                "PRJ-2023-0001",
            )
            is None
        )


class TestResolveWorkOrder:
    """Test cases for work order resolution."""

    def test_finds_matching_type(self, storage, project, design_work_order):
        work_order = resolve_work_order(storage, project, WorkOrderType.INTERNAL_DESIGN)
        assert work_order == design_work_order

    def test_no_project(self, storage):
        assert resolve_work_order(storage, None, WorkOrderType.VALIDATION) is None

    def test_registry_failure_is_empty(self, project):
        registry = Mock()
        registry.get_work_orders.side_effect = ConnectionError("down")

        assert resolve_work_order(registry, project, WorkOrderType.VALIDATION) is None


class TestTimeParser:
    """End-to-end tests for TimeParser.parse."""

    def test_time_range_prompt(self, parser, validation_work_order):
        result = parser.parse(
            "I worked on project PRJ-2023-0001 validation from 9:00 to 11:30 today",
            today=TODAY,
        )

        assert isinstance(result, ParsedEntry)
        assert result.success is True
        assert result.project.reference_number == "PRJ-2023-0001"
        assert result.work_type == WorkOrderType.VALIDATION
        assert result.work_order_id == validation_work_order.id
        assert result.start_time == "09:00"
        assert result.end_time == "11:30"
        assert result.hours == Decimal("2.5")
        assert result.date == TODAY

    def test_hour_count_prompt(self, parser, design_work_order):
        result = parser.parse(
            "Log 3 hours of internal design on PRJ-2023-0001 yesterday", today=TODAY
        )

        assert isinstance(result, ParsedEntry)
        assert result.work_type == WorkOrderType.INTERNAL_DESIGN
        assert result.work_order_id == design_work_order.id
        assert result.hours == Decimal("3")
        assert result.start_time is None
        assert result.date == dt.date(2026, 10, 15)

    def test_project_by_title(self, parser, validation_work_order):
        result = parser.parse(
            "Spent 1.5 hours on north metro upgrade validation checking cabling",
            today=TODAY,
        )

        assert result.work_order_id == validation_work_order.id
        assert result.description == "checking cabling"

    @pytest.mark.parametrize(
        "prompt,reason",
        [
            ("3 hours of validation", ParseFailureReason.NO_PROJECT),
            ("3 hours on PRJ-2023-0001", ParseFailureReason.NO_WORK_TYPE),
            ("validation on PRJ-2023-0001", ParseFailureReason.NO_DURATION),
            (
                "3 hours validation on PRJ-2023-9999",
                ParseFailureReason.WORK_ORDER_NOT_FOUND,
            ),
        ],
    )
    def test_failures(self, parser, prompt, reason):
        result = parser.parse(prompt, today=TODAY)

        assert isinstance(result, ParseFailure)
        assert result.success is False
        assert result.reason == reason
        assert result.message

    def test_work_order_failure_message_names_type(self, parser):
        result = parser.parse("3 hours validation on PRJ-2023-9999", today=TODAY)
        assert "validation work order" in result.message

    def test_missing_project_message(self, parser):
        result = parser.parse("3 hours of validation", today=TODAY)
        assert "PRJ-2023-0001" in result.message

    def test_known_projects_override_registry(self, storage, project):
        registry = Mock(wraps=storage)

        TimeParser(registry).parse(
            "2 hours validation on North Metro Upgrade",
            known_projects=[project],
            today=TODAY,
        )

        registry.get_projects.assert_not_called()

    def test_registry_failure_means_no_project(self):
        registry = Mock()
        registry.get_projects.side_effect = ConnectionError("down")

        result = TimeParser(registry).parse("2 hours validation on Metro", today=TODAY)

        assert result.reason == ParseFailureReason.NO_PROJECT

    def test_later_registered_reference(self, storage, project):
        other = storage.create_project(
            ProjectCreate(
                title="Harbour Bridge Survey",
                reference_number="PRJ-2023-0002",
                form_code_type="HB-VAL-2023",
            ),
            created_by=1,
        )

        result = TimeParser(storage).parse(
            "2 hours validation on PRJ-2023-0002", known_projects=[project], today=TODAY
        )

        assert result.project.project.id == other.id
