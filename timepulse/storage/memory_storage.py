"""In-memory implementation of the Storage interface.

Records live in plain dicts keyed by integer ids handed out by one
itertools.count generator per collection. Soft-deleted timesheet entries
move to a separate archive keyed by their original id, so a restore puts
back exactly the record that was removed.
"""

import datetime as dt
import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from timepulse.models import (
    AuditAction,
    AuditEntity,
    AuditLog,
    EventType,
    Project,
    ProjectCreate,
    ProjectEvent,
    ProjectEventCreate,
    ProjectUpdate,
    TimesheetEntry,
    TimesheetEntryCreate,
    TimesheetEntryUpdate,
    WorkOrder,
    WorkOrderCreate,
    WorkOrderType,
    work_order_identifier,
)
from timepulse.models.base import utcnow
from timepulse.storage.base import DuplicateRecordError, RecordNotFoundError, Storage

logger = logging.getLogger(__name__)


@dataclass
class DeletedRecord:
    """An archived entry together with who removed it and when."""

    entry: TimesheetEntry
    deleted_at: dt.datetime
    deleted_by: int


class MemStorage(Storage):
    """Dictionary-backed store used by the CLI and the test suite.

    Example:
        >>> storage = MemStorage()
        >>> project = storage.create_project(
        ...     ProjectCreate(
        ...         title="North Metro Upgrade",
        ...         reference_number="PRJ-2023-0001",
        ...         form_code_type="NM-DES-2023",
        ...     ),
        ...     created_by=1,
        ... )
        >>> [wo.identifier for wo in storage.get_work_orders(project.id)]
        ['VALID-PRJ-2023-0001', 'DESIGN-PRJ-2023-0001']
    """

    def __init__(self):
        self._projects: Dict[int, Project] = {}
        self._work_orders: Dict[int, WorkOrder] = {}
        self._entries: Dict[int, TimesheetEntry] = {}
        self._deleted_entries: Dict[int, DeletedRecord] = {}
        self._events: Dict[int, ProjectEvent] = {}
        self._audit_logs: Dict[int, AuditLog] = {}

        self._project_ids: Iterator[int] = itertools.count(1)
        self._work_order_ids: Iterator[int] = itertools.count(1)
        self._entry_ids: Iterator[int] = itertools.count(1)
        self._event_ids: Iterator[int] = itertools.count(1)
        self._audit_ids: Iterator[int] = itertools.count(1)

    # Projects

    def get_projects(self) -> List[Project]:
        return list(self._projects.values())

    def get_project(self, project_id: int) -> Optional[Project]:
        return self._projects.get(project_id)

    def get_project_by_reference(self, reference_number: str) -> Optional[Project]:
        wanted = reference_number.strip().upper()
        for project in self._projects.values():
            if project.reference_number.upper() == wanted:
                return project
        return None

    def create_project(self, data: ProjectCreate, created_by: int) -> Project:
        if self.get_project_by_reference(data.reference_number) is not None:
            raise DuplicateRecordError(
                "Project", "reference_number", data.reference_number
            )

        project = Project(id=next(self._project_ids), **data.model_dump())
        self._projects[project.id] = project
        logger.info(f"Created project {project.reference_number} (ID: {project.id})")

        for work_type in (WorkOrderType.VALIDATION, WorkOrderType.INTERNAL_DESIGN):
            self.create_work_order(
                WorkOrderCreate(
                    project_id=project.id,
                    type=work_type,
                    identifier=work_order_identifier(
                        work_type, project.reference_number
                    ),
                )
            )

        self.create_project_event(
            ProjectEventCreate(
                project_id=project.id,
                type=EventType.CREATED,
                content=f'Project "{project.title}" created',
                created_by=created_by,
            )
        )
        self._audit(AuditEntity.PROJECT, project.id, AuditAction.CREATE, created_by)
        return project

    def update_project(
        self, project_id: int, data: ProjectUpdate, updated_by: int
    ) -> Project:
        existing = self._projects.get(project_id)
        if existing is None:
            raise RecordNotFoundError("Project", project_id)

        changes = data.model_dump(exclude_unset=True)
        new_reference = changes.get("reference_number")
        if new_reference is not None:
            clash = self.get_project_by_reference(new_reference)
            if clash is not None and clash.id != project_id:
                raise DuplicateRecordError("Project", "reference_number", new_reference)

        updated = Project(**{**existing.model_dump(), **changes})
        self._projects[project_id] = updated

        if updated.status != existing.status:
            self.create_project_event(
                ProjectEventCreate(
                    project_id=project_id,
                    type=EventType.STATUS_CHANGE,
                    content=(
                        f'Status changed from "{existing.status.value}" '
                        f'to "{updated.status.value}"'
                    ),
                    created_by=updated_by,
                )
            )
        self._audit(
            AuditEntity.PROJECT,
            project_id,
            AuditAction.UPDATE,
            updated_by,
            details=", ".join(sorted(changes)) or None,
        )
        return updated

    def delete_project(self, project_id: int) -> None:
        if project_id not in self._projects:
            raise RecordNotFoundError("Project", project_id)

        work_order_ids = {wo.id for wo in self.get_work_orders(project_id)}

        removed_entries = [
            entry_id
            for entry_id, entry in self._entries.items()
            if entry.work_order_id in work_order_ids
        ]
        for entry_id in removed_entries:
            del self._entries[entry_id]

        # Archived entries cannot be restored once their work order is gone
        for entry_id in [
            entry_id
            for entry_id, record in self._deleted_entries.items()
            if record.entry.work_order_id in work_order_ids
        ]:
            del self._deleted_entries[entry_id]

        for work_order_id in work_order_ids:
            del self._work_orders[work_order_id]

        for event_id in [
            event.id for event in self._events.values() if event.project_id == project_id
        ]:
            del self._events[event_id]

        del self._projects[project_id]
        logger.info(
            f"Deleted project {project_id} with {len(work_order_ids)} work orders "
            f"and {len(removed_entries)} timesheet entries"
        )

    # Work orders

    def get_work_orders(self, project_id: int) -> List[WorkOrder]:
        return [wo for wo in self._work_orders.values() if wo.project_id == project_id]

    def get_work_order(self, work_order_id: int) -> Optional[WorkOrder]:
        return self._work_orders.get(work_order_id)

    def create_work_order(self, data: WorkOrderCreate) -> WorkOrder:
        if data.project_id not in self._projects:
            raise RecordNotFoundError("Project", data.project_id)
        if any(wo.identifier == data.identifier for wo in self._work_orders.values()):
            raise DuplicateRecordError("WorkOrder", "identifier", data.identifier)

        work_order = WorkOrder(id=next(self._work_order_ids), **data.model_dump())
        self._work_orders[work_order.id] = work_order
        logger.debug(f"Created work order {work_order.identifier}")
        return work_order

    # Timesheet entries

    def get_timesheet_entries(
        self, user_id: int, start_date: dt.date, end_date: dt.date
    ) -> List[TimesheetEntry]:
        return [
            entry
            for entry in self._entries.values()
            if entry.user_id == user_id and start_date <= entry.date <= end_date
        ]

    def get_timesheet_entry(self, entry_id: int) -> Optional[TimesheetEntry]:
        return self._entries.get(entry_id)

    def get_timesheet_entries_by_project(self, project_id: int) -> List[TimesheetEntry]:
        work_order_ids = {wo.id for wo in self.get_work_orders(project_id)}
        return [
            entry
            for entry in self._entries.values()
            if entry.work_order_id in work_order_ids
        ]

    def get_timesheet_entries_by_work_order(
        self, work_order_id: int
    ) -> List[TimesheetEntry]:
        return [
            entry
            for entry in self._entries.values()
            if entry.work_order_id == work_order_id
        ]

    def create_timesheet_entry(self, data: TimesheetEntryCreate) -> TimesheetEntry:
        if data.work_order_id not in self._work_orders:
            raise RecordNotFoundError("WorkOrder", data.work_order_id)
        if data.hours is None:
            raise ValueError("hours must be set before an entry is stored")

        entry = TimesheetEntry(id=next(self._entry_ids), **data.model_dump())
        self._entries[entry.id] = entry
        logger.debug(
            f"Created timesheet entry {entry.id}: {entry.hours} hours on {entry.date}"
        )
        return entry

    def update_timesheet_entry(
        self, entry_id: int, data: TimesheetEntryUpdate
    ) -> TimesheetEntry:
        existing = self._entries.get(entry_id)
        if existing is None:
            raise RecordNotFoundError("TimesheetEntry", entry_id)

        changes = data.model_dump(exclude_unset=True)
        work_order_id = changes.get("work_order_id")
        if work_order_id is not None and work_order_id not in self._work_orders:
            raise RecordNotFoundError("WorkOrder", work_order_id)

        updated = TimesheetEntry(**{**existing.model_dump(), **changes})
        self._entries[entry_id] = updated
        logger.debug(f"Updated timesheet entry {entry_id}: {sorted(changes)}")
        return updated

    def delete_timesheet_entry(self, entry_id: int, user_id: int) -> None:
        entry = self._entries.pop(entry_id, None)
        if entry is None:
            raise RecordNotFoundError("TimesheetEntry", entry_id)

        self._deleted_entries[entry_id] = DeletedRecord(
            entry=entry, deleted_at=utcnow(), deleted_by=user_id
        )
        self._audit(AuditEntity.TIMESHEET, entry_id, AuditAction.DELETE, user_id)
        logger.info(f"Soft-deleted timesheet entry {entry_id}")

    def restore_timesheet_entry(self, entry_id: int, user_id: int) -> TimesheetEntry:
        record = self._deleted_entries.pop(entry_id, None)
        if record is None:
            raise RecordNotFoundError("Deleted TimesheetEntry", entry_id)

        self._entries[entry_id] = record.entry
        self._audit(AuditEntity.TIMESHEET, entry_id, AuditAction.RESTORE, user_id)
        logger.info(f"Restored timesheet entry {entry_id}")
        return record.entry

    def get_deleted_timesheet_entries(self) -> List[TimesheetEntry]:
        return [record.entry for record in self._deleted_entries.values()]

    # Project events

    def get_project_events(self, project_id: int) -> List[ProjectEvent]:
        events = [e for e in self._events.values() if e.project_id == project_id]
        return sorted(events, key=lambda e: (e.created_at, e.id), reverse=True)

    def create_project_event(self, data: ProjectEventCreate) -> ProjectEvent:
        if data.project_id not in self._projects:
            raise RecordNotFoundError("Project", data.project_id)

        event = ProjectEvent(id=next(self._event_ids), **data.model_dump())
        self._events[event.id] = event
        return event

    # Audit trail

    def get_audit_logs(
        self,
        entity_type: Optional[AuditEntity] = None,
        action: Optional[AuditAction] = None,
        start: Optional[dt.datetime] = None,
        end: Optional[dt.datetime] = None,
    ) -> List[AuditLog]:
        logs = list(self._audit_logs.values())
        if entity_type is not None:
            logs = [log for log in logs if log.entity_type == entity_type]
        if action is not None:
            logs = [log for log in logs if log.action == action]
        if start is not None:
            logs = [log for log in logs if log.created_at >= start]
        if end is not None:
            logs = [log for log in logs if log.created_at <= end]
        return sorted(logs, key=lambda log: (log.created_at, log.id), reverse=True)

    def _audit(
        self,
        entity_type: AuditEntity,
        entity_id: int,
        action: AuditAction,
        action_by: int,
        details: Optional[str] = None,
    ) -> AuditLog:
        log = AuditLog(
            id=next(self._audit_ids),
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            action_by=action_by,
            details=details,
        )
        self._audit_logs[log.id] = log
        return log
