from __future__ import annotations

from datetime import date
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import Actor
from ..users.repository import UserRepository
from .model import PresenceRow, Squad
from .repository import SquadRepository

CHECKED_IN = "checked-in"
CHECKED_OUT = "checked-out"
NOT_CHECKED_IN = "not-checked-in"


class SquadService:
    def __init__(self, squads: SquadRepository, users: UserRepository, attendance: AttendanceRepository):
        self._squads = squads
        self._users = users
        self._attendance = attendance

    def list_squads(self) -> Sequence[Squad]:
        return self._squads.list_all()

    def presence_board(self, actor: Actor, squad_id: int, *, today: date | None = None) -> list[PresenceRow]:
        """Who in the squad is in today, and how."""

        today = today or now_local().date()
        squad = self._squads.get_by_id(int(squad_id))
        if not squad:
            raise NotFoundError(f"Squad {squad_id} not found")

        if actor.role not in {Role.ADMIN, Role.VIEWER}:
            member = self._users.get_by_id(int(actor.user_id))
            if not member or member.squad_id != squad.squad_id:
                raise AuthorizationError("You can only view your own squad")

        records = {r.user_id: r for r in self._attendance.list_for_squad_and_date(squad.squad_id, today)}

        rows = []
        for user in self._users.list_by_squad(squad.squad_id):
            record = records.get(user.user_id)
            if record is None or record.check_in_time is None:
                rows.append(
                    PresenceRow(
                        user_id=user.user_id,
                        name=user.name,
                        email=user.email,
                        work_mode=user.work_mode.value,
                        state=NOT_CHECKED_IN,
                    )
                )
                continue

            rows.append(
                PresenceRow(
                    user_id=user.user_id,
                    name=user.name,
                    email=user.email,
                    work_mode=record.work_mode.value,
                    state=CHECKED_OUT if record.check_out_time else CHECKED_IN,
                    check_in_time=record.check_in_time.strftime("%H:%M"),
                    check_out_time=record.check_out_time.strftime("%H:%M") if record.check_out_time else None,
                    compliance_status=record.compliance_status.value,
                )
            )
        return rows
