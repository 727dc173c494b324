from __future__ import annotations

from datetime import datetime

import pytest

from src.squad_attendance.squad_attendance.audit.recorder import AuditRecorder
from src.squad_attendance.squad_attendance.audit.service import AuditLogService
from src.squad_attendance.squad_attendance.core.enums import AuditOperation, EntityType
from src.squad_attendance.squad_attendance.core.exceptions import AuthorizationError, ValidationError
from src.squad_attendance.squad_attendance.events.model import ChangeEvent


@pytest.fixture
def trail(store, actor_of):
    recorder = AuditRecorder(store.audit_logs, clock=lambda: datetime(2026, 3, 2, 12, 0))
    for entity_type, entity_id, user_id in [
        (EntityType.ATTENDANCE, 7, 1),
        (EntityType.ATTENDANCE, 8, 2),
        (EntityType.LEAVE_REQUEST, 7, 2),
    ]:
        recorder.notify(
            ChangeEvent(
                entity_type=entity_type,
                entity_id=entity_id,
                operation=AuditOperation.UPDATE,
                actor=actor_of(user_id),
                before={"notes": None},
                after={"notes": "fixed"},
            )
        )
    return AuditLogService(store.audit_logs)


def test_admin_reads_history_of_one_record(trail, actor_of):
    (entry,) = trail.list_entries(actor_of(1), entity_type="attendance_records", entity_id="7")

    assert entry.entity_type == EntityType.ATTENDANCE
    assert entry.fields_changed == ("notes",)


def test_admin_reads_recent_entries_by_actor(trail, actor_of):
    assert len(trail.list_entries(actor_of(1))) == 3
    assert [e.entity_id for e in trail.list_entries(actor_of(1), performed_by=2)] == ["8", "7"]


def test_only_admins_read_the_audit_log(trail, actor_of):
    for user_id in (2, 3, 6):
        with pytest.raises(AuthorizationError):
            trail.list_entries(actor_of(user_id))


def test_entity_filter_needs_both_parts(trail, actor_of):
    with pytest.raises(ValidationError):
        trail.list_entries(actor_of(1), entity_type="attendance_records")
    with pytest.raises(ValidationError):
        trail.list_entries(actor_of(1), entity_type="payslips", entity_id="1")
