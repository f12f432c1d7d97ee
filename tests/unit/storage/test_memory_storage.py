"""Unit tests for the in-memory store."""

import datetime as dt
from decimal import Decimal

import pytest

from timepulse.models import (
    AuditAction,
    AuditEntity,
    EventType,
    ProjectCreate,
    ProjectEventCreate,
    ProjectStatus,
    ProjectUpdate,
    TimesheetEntryCreate,
    TimesheetEntryUpdate,
    WorkOrderCreate,
    WorkOrderType,
)
from timepulse.storage import DuplicateRecordError, RecordNotFoundError

TODAY = dt.date(2026, 10, 16)


class TestProjects:
    """Test cases for project storage."""

    def test_create_adds_two_work_orders(self, storage, project):
        work_orders = storage.get_work_orders(project.id)

        assert {wo.type for wo in work_orders} == {
            WorkOrderType.VALIDATION,
            WorkOrderType.INTERNAL_DESIGN,
        }
        assert {wo.identifier for wo in work_orders} == {
            "VALID-PRJ-2023-0001",
            "DESIGN-PRJ-2023-0001",
        }

    def test_create_adds_created_event(self, storage, project):
        [event] = storage.get_project_events(project.id)

        assert event.type == EventType.CREATED
        assert event.content == 'Project "North Metro Upgrade" created'
        assert event.created_by == 1

    def test_duplicate_reference_rejected(self, storage, project):
        with pytest.raises(DuplicateRecordError):
            storage.create_project(
                ProjectCreate(
                    title="Copy",
                    reference_number="prj-2023-0001",
                    form_code_type="X",
                ),
                created_by=1,
            )

    def test_lookup_by_reference(self, storage, project):
        assert storage.get_project_by_reference("prj-2023-0001") == project
        assert storage.get_project_by_reference("PRJ-2023-9999") is None

    def test_missing_project_lookup_returns_none(self, storage):
        assert storage.get_project(42) is None

    def test_status_change_adds_event(self, storage, project):
        updated = storage.update_project(
            project.id, ProjectUpdate(status="in_progress"), updated_by=2
        )

        events = storage.get_project_events(project.id)
        assert updated.status == ProjectStatus.IN_PROGRESS
        assert events[0].type == EventType.STATUS_CHANGE
        assert events[0].content == 'Status changed from "draft" to "in_progress"'
        assert events[0].created_by == 2

    def test_update_without_status_change_adds_no_event(self, storage, project):
        updated = storage.update_project(
            project.id, ProjectUpdate(notes="Phase 2"), updated_by=1
        )

        assert updated.notes == "Phase 2"
        assert updated.title == project.title
        assert len(storage.get_project_events(project.id)) == 1

    def test_update_missing_project(self, storage):
        with pytest.raises(RecordNotFoundError):
            storage.update_project(42, ProjectUpdate(notes="x"), updated_by=1)

    def test_update_to_taken_reference_rejected(self, storage, project):
        other = storage.create_project(
            ProjectCreate(
                title="Other", reference_number="PRJ-2023-0002", form_code_type="X"
            ),
            created_by=1,
        )
        with pytest.raises(DuplicateRecordError):
            storage.update_project(
                other.id, ProjectUpdate(reference_number="PRJ-2023-0001"), updated_by=1
            )

    def test_delete_cascades(self, storage, project, work_orders, make_entry):
        validation = work_orders[WorkOrderType.VALIDATION]
        design = work_orders[WorkOrderType.INTERNAL_DESIGN]
        entries = [make_entry(validation) for _ in range(3)] + [
            make_entry(design) for _ in range(2)
        ]
        storage.create_project_event(
            ProjectEventCreate(
                project_id=project.id, type="comment", content="Note", created_by=1
            )
        )

        storage.delete_project(project.id)

        assert storage.get_project(project.id) is None
        assert storage.get_work_orders(project.id) == []
        assert storage.get_work_order(validation.id) is None
        assert storage.get_project_events(project.id) == []
        assert all(storage.get_timesheet_entry(e.id) is None for e in entries)
        assert storage.get_timesheet_entries_by_work_order(design.id) == []

    def test_delete_cascades_to_archived_entries(
        self, storage, project, validation_work_order, make_entry
    ):
        entry = make_entry(validation_work_order)
        storage.delete_timesheet_entry(entry.id, user_id=1)

        storage.delete_project(project.id)

        assert storage.get_deleted_timesheet_entries() == []
        with pytest.raises(RecordNotFoundError):
            storage.restore_timesheet_entry(entry.id, user_id=1)

    def test_delete_leaves_other_projects(self, storage, project, make_entry):
        other = storage.create_project(
            ProjectCreate(
                title="Other", reference_number="PRJ-2023-0002", form_code_type="X"
            ),
            created_by=1,
        )
        other_wo = storage.get_work_orders(other.id)[0]
        kept = make_entry(other_wo)

        storage.delete_project(project.id)

        assert storage.get_timesheet_entry(kept.id) == kept
        assert len(storage.get_project_events(other.id)) == 1

    def test_delete_missing_project(self, storage):
        with pytest.raises(RecordNotFoundError):
            storage.delete_project(42)


class TestWorkOrders:
    """Test cases for work order storage."""

    def test_requires_project(self, storage):
        with pytest.raises(RecordNotFoundError):
            storage.create_work_order(
                WorkOrderCreate(project_id=42, type="validation", identifier="VALID-X")
            )

    def test_identifier_unique(self, storage, project):
        with pytest.raises(DuplicateRecordError):
            storage.create_work_order(
                WorkOrderCreate(
                    project_id=project.id,
                    type="validation",
                    identifier="VALID-PRJ-2023-0001",
                )
            )


class TestTimesheetEntries:
    """Test cases for timesheet entry storage."""

    def test_create_read_round_trip(self, storage, validation_work_order):
        data = TimesheetEntryCreate(
            user_id=1,
            work_order_id=validation_work_order.id,
            date=TODAY,
            hours="2.5",
            start_time="09:00",
            end_time="11:30",
            description="Site inspection",
            break_taken=True,
            break_duration=15,
        )

        created = storage.create_timesheet_entry(data)
        loaded = storage.get_timesheet_entry(created.id)

        assert loaded == created
        assert loaded.model_dump(exclude={"id", "created_at"}) == data.model_dump()

    def test_create_requires_work_order(self, storage):
        with pytest.raises(RecordNotFoundError):
            storage.create_timesheet_entry(
                TimesheetEntryCreate(user_id=1, work_order_id=42, date=TODAY, hours="1")
            )

    def test_create_requires_hours(self, storage, validation_work_order):
        with pytest.raises(ValueError):
            storage.create_timesheet_entry(
                TimesheetEntryCreate(
                    user_id=1, work_order_id=validation_work_order.id, date=TODAY
                )
            )

    def test_range_query_is_inclusive_and_per_user(
        self, storage, validation_work_order, make_entry
    ):
        start = make_entry(validation_work_order, date=dt.date(2026, 10, 12))
        end = make_entry(validation_work_order, date=dt.date(2026, 10, 16))
        make_entry(validation_work_order, date=dt.date(2026, 10, 17))
        make_entry(validation_work_order, date=dt.date(2026, 10, 13), user_id=2)

        result = storage.get_timesheet_entries(
            1, dt.date(2026, 10, 12), dt.date(2026, 10, 16)
        )

        assert result == [start, end]

    def test_by_project(self, storage, project, work_orders, make_entry):
        entries = [make_entry(wo) for wo in work_orders.values()]
        assert storage.get_timesheet_entries_by_project(project.id) == entries

    def test_partial_update(self, storage, validation_work_order, make_entry):
        entry = make_entry(validation_work_order, description="Before")

        updated = storage.update_timesheet_entry(
            entry.id, TimesheetEntryUpdate(hours="4")
        )

        assert updated.hours == Decimal("4")
        assert updated.description == "Before"
        assert updated.id == entry.id
        assert updated.created_at == entry.created_at

    def test_update_missing_entry(self, storage):
        with pytest.raises(RecordNotFoundError):
            storage.update_timesheet_entry(42, TimesheetEntryUpdate(hours="1"))

    def test_update_to_missing_work_order(self, storage, validation_work_order, make_entry):
        entry = make_entry(validation_work_order)
        with pytest.raises(RecordNotFoundError):
            storage.update_timesheet_entry(
                entry.id, TimesheetEntryUpdate(work_order_id=42)
            )

    def test_soft_delete_and_restore_round_trip(
        self, storage, validation_work_order, make_entry
    ):
        entry = make_entry(
            validation_work_order,
            start_time="09:00",
            end_time="11:00",
            description="Cabling check",
        )

        storage.delete_timesheet_entry(entry.id, user_id=1)

        assert storage.get_timesheet_entry(entry.id) is None
        assert storage.get_timesheet_entries_by_work_order(validation_work_order.id) == []
        assert storage.get_deleted_timesheet_entries() == [entry]

        restored = storage.restore_timesheet_entry(entry.id, user_id=1)

        assert restored.model_dump() == entry.model_dump()
        assert storage.get_timesheet_entries_by_work_order(validation_work_order.id) == [
            entry
        ]
        assert storage.get_deleted_timesheet_entries() == []

    def test_delete_missing_entry(self, storage):
        with pytest.raises(RecordNotFoundError):
            storage.delete_timesheet_entry(42, user_id=1)

    def test_restore_not_deleted_entry(self, storage, validation_work_order, make_entry):
        entry = make_entry(validation_work_order)
        with pytest.raises(RecordNotFoundError):
            storage.restore_timesheet_entry(entry.id, user_id=1)


class TestEventsAndAudit:
    """Test cases for project events and the audit trail."""

    def test_events_newest_first(self, storage, project):
        comment = storage.create_project_event(
            ProjectEventCreate(
                project_id=project.id, type="comment", content="Later", created_by=1
            )
        )

        events = storage.get_project_events(project.id)

        assert events[0] == comment
        assert events[-1].type == EventType.CREATED

    def test_event_requires_project(self, storage):
        with pytest.raises(RecordNotFoundError):
            storage.create_project_event(
                ProjectEventCreate(project_id=42, type="comment", content="x", created_by=1)
            )

    def test_delete_and_restore_are_audited(
        self, storage, validation_work_order, make_entry
    ):
        entry = make_entry(validation_work_order)
        storage.delete_timesheet_entry(entry.id, user_id=3)
        storage.restore_timesheet_entry(entry.id, user_id=3)

        logs = storage.get_audit_logs(entity_type=AuditEntity.TIMESHEET)

        assert [log.action for log in logs] == [AuditAction.RESTORE, AuditAction.DELETE]
        assert all(log.entity_id == entry.id and log.action_by == 3 for log in logs)

    def test_audit_filters(self, storage, project):
        storage.update_project(project.id, ProjectUpdate(status="completed"), updated_by=1)

        updates = storage.get_audit_logs(action=AuditAction.UPDATE)
        future = storage.get_audit_logs(
            start=dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=1)
        )

        assert len(updates) == 1
        assert updates[0].details == "status"
        assert future == []
