"""Unit tests for the weekly report."""

from decimal import Decimal

from timepulse.aggregators.report_builder import build_weekly_report
from timepulse.models import ProjectCreate, ProjectStatus, ProjectUpdate


class TestBuildWeeklyReport:
    """Test cases for build_weekly_report."""

    def test_empty(self):
        report = build_weekly_report([], [], [])

        assert report.weekly_hours == Decimal("0")
        assert report.active_projects == 0
        assert report.total_projects == 0

    def test_counts_and_hours(
        self, storage, project, validation_work_order, design_work_order, make_entry
    ):
        storage.update_project(
            project.id, ProjectUpdate(status=ProjectStatus.IN_PROGRESS), updated_by=1
        )
        storage.create_project(
            ProjectCreate(
                title="Harbour Bridge Survey",
                reference_number="PRJ-2023-0002",
                form_code_type="HB-VAL-2023",
            ),
            created_by=1,
        )
        entries = [
            make_entry(validation_work_order, hours="2"),
            make_entry(validation_work_order, hours="1"),
            make_entry(design_work_order, hours="3.5"),
        ]

        report = build_weekly_report(
            storage.get_projects(),
            [validation_work_order, design_work_order],
            entries,
        )

        assert report.weekly_hours == Decimal("6.5")
        assert report.validation_hours == Decimal("3")
        assert report.design_hours == Decimal("3.5")
        assert report.active_projects == 1
        assert report.total_projects == 2

    def test_unknown_work_order_counts_only_towards_week(
        self, validation_work_order, make_entry
    ):
        entries = [make_entry(validation_work_order, hours="2")]

        report = build_weekly_report([], [], entries)

        assert report.weekly_hours == Decimal("2")
        assert report.validation_hours == Decimal("0")
        assert report.design_hours == Decimal("0")
