from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..common.serialization import snapshot
from ..common.validators import require_choice
from ..core.enums import AuditOperation, EntityType, Role, WorkMode
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..events.dispatcher import ChangeDispatcher
from ..events.model import ChangeEvent
from ..squads.repository import SquadRepository
from ..users.model import Actor
from ..users.repository import UserRepository
from .hooks import ComplianceHook
from .model import DERIVED_FIELDS, AttendanceRecord
from .repository import AttendanceRepository

EDITABLE_FIELDS = ("check_in_time", "check_out_time", "work_mode", "location", "notes", "verified", "sprint_id")


class AttendanceService:
    """Use cases around daily attendance records.

    Every write goes through the compliance hook first and is announced to
    the post-write observers afterwards.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        hook: ComplianceHook,
        *,
        squads: SquadRepository | None = None,
        dispatcher: ChangeDispatcher | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._hook = hook
        self._squads = squads
        self._dispatcher = dispatcher or ChangeDispatcher()

    def check_in(
        self,
        actor: Actor,
        *,
        work_mode: str | None = None,
        location: str | None = None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        user = self._users.get_by_id(int(actor.user_id))
        if not user or not user.is_active:
            raise ValidationError("User not found")
        if user.squad_id is None:
            raise ValidationError("User is not assigned to any squad")

        if self._attendance.get_for_user_and_date(user.user_id, today):
            raise ValidationError("Already checked in today")

        mode = require_choice(work_mode, WorkMode, "work mode") if work_mode else user.work_mode
        record = AttendanceRecord(
            attendance_id=None,
            user_id=user.user_id,
            squad_id=user.squad_id,
            sprint_id=self._active_sprint(user.squad_id),
            work_date=today,
            check_in_time=now,
            work_mode=mode,
            location=location,
            notes=notes,
        )
        record = self._hook.apply(record)
        record = replace(record, attendance_id=self._attendance.insert(record))

        self._dispatch(AuditOperation.CREATE, actor, None, record, action="User checked in")
        return record

    def check_out(self, actor: Actor, *, notes: str | None = None, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()

        before = self._attendance.get_for_user_and_date(int(actor.user_id), now.date())
        if not before:
            raise ValidationError("No check-in found for today")
        if before.check_out_time is not None:
            raise ValidationError("Already checked out today")
        if before.check_in_time and now < before.check_in_time:
            raise ValidationError("Check-out time cannot be earlier than check-in time")

        record = replace(before, check_out_time=now, notes=notes or before.notes)
        record = self._hook.apply(record)
        self._attendance.update(record)

        self._dispatch(AuditOperation.UPDATE, actor, before, record, action="User checked out")
        return record

    def update_record(self, actor: Actor, attendance_id: int, changes: dict[str, Any]) -> AttendanceRecord:
        """Manual correction by an admin or the squad lead.

        Derived compliance fields are recomputed here and cannot be supplied.
        """

        before = self._get(attendance_id)
        self._ensure_can_edit(actor, before)

        derived = sorted(set(changes) & set(DERIVED_FIELDS))
        if derived:
            raise ValidationError(f"Computed fields cannot be set: {', '.join(derived)}")
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(unknown)}")

        values = dict(changes)
        if "work_mode" in values:
            values["work_mode"] = require_choice(values["work_mode"], WorkMode, "work mode")
        if "verified" in values:
            values["verified"] = bool(values["verified"])
        for key in ("check_in_time", "check_out_time"):
            value = values.get(key)
            if value is not None and (not isinstance(value, datetime) or value.tzinfo is not None):
                raise ValidationError(f"Invalid {key}: expected a local date-time")

        record = replace(before, **values)
        if record.check_in_time and record.check_in_time.date() != record.work_date:
            raise ValidationError(f"Check-in time must fall on the record's work date ({record.work_date.isoformat()})")
        if record.check_in_time and record.check_out_time and record.check_out_time < record.check_in_time:
            raise ValidationError("Check-out time cannot be earlier than check-in time")

        record = self._hook.apply(record)
        self._attendance.update(record)

        self._dispatch(AuditOperation.UPDATE, actor, before, record)
        return record

    def delete_record(self, actor: Actor, attendance_id: int) -> None:
        if actor.role != Role.ADMIN:
            raise AuthorizationError("Only admins can delete attendance records")

        before = self._get(attendance_id)
        self._attendance.delete(before.attendance_id)
        self._dispatch(AuditOperation.DELETE, actor, before, None)

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today)

    def status(self, actor: Actor, *, today: date | None = None) -> dict:
        today = today or now_local().date()
        record = self.get_today_record(int(actor.user_id), today)
        return {
            "checked_in": bool(record and record.check_in_time),
            "checked_out": bool(record and record.check_out_time),
            "record": snapshot(record),
        }

    def _get(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        return record

    def _ensure_can_edit(self, actor: Actor, record: AttendanceRecord) -> None:
        if actor.role == Role.ADMIN:
            return
        if actor.role == Role.SQUAD_LEAD and self._squads and record.squad_id is not None:
            squad = self._squads.get_by_id(record.squad_id)
            if squad and squad.lead_id == actor.user_id:
                return
        raise AuthorizationError("Not allowed to edit this attendance record")

    def _active_sprint(self, squad_id: int) -> Optional[int]:
        if not self._squads:
            return None
        squad = self._squads.get_by_id(squad_id)
        return squad.active_sprint_id if squad else None

    def _dispatch(
        self,
        operation: AuditOperation,
        actor: Actor,
        before: Optional[AttendanceRecord],
        after: Optional[AttendanceRecord],
        *,
        action: str | None = None,
    ) -> None:
        current = after or before
        self._dispatcher.dispatch(
            ChangeEvent(
                entity_type=EntityType.ATTENDANCE,
                entity_id=current.attendance_id,
                operation=operation,
                actor=actor,
                before=snapshot(before),
                after=snapshot(after),
                action=action,
            )
        )
