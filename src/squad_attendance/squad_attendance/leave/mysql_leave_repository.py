from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRequestRepository

_SELECT = """
    SELECT request_id, user_id, squad_id, leave_type, reason, duration, status, created_at,
           squad_lead_id, squad_lead_decided_at, admin_id, admin_decided_at
    FROM leave_requests
"""


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return self._to_request(r) if r else None

    def create(self, request: LeaveRequest) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, squad_id, leave_type, reason, duration, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(request.user_id),
                    int(request.squad_id),
                    request.leave_type.value,
                    request.reason,
                    request.duration,
                    request.status.value,
                    request.created_at,
                ),
            )
            return int(cur.lastrowid)

    def update_decision(self, request: LeaveRequest) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, squad_lead_id=%s, squad_lead_decided_at=%s, admin_id=%s, admin_decided_at=%s
                WHERE request_id=%s
                """,
                (
                    request.status.value,
                    request.squad_lead_id,
                    request.squad_lead_decided_at,
                    request.admin_id,
                    request.admin_decided_at,
                    int(request.request_id),
                ),
            )
            return cur.rowcount > 0

    def list_all(self, *, limit: int = 200) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY created_at DESC LIMIT %s", (int(limit),))
            return [self._to_request(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int, *, limit: int = 200) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE user_id=%s ORDER BY created_at DESC LIMIT %s",
                (int(user_id), int(limit)),
            )
            return [self._to_request(r) for r in fetchall(cur)]

    @staticmethod
    def _to_request(r: dict) -> LeaveRequest:
        return LeaveRequest(
            request_id=int(r["request_id"]),
            user_id=int(r["user_id"]),
            squad_id=int(r["squad_id"]),
            leave_type=LeaveType(r["leave_type"]),
            reason=r["reason"],
            duration=r["duration"],
            status=LeaveStatus(r["status"]),
            created_at=r.get("created_at"),
            squad_lead_id=r.get("squad_lead_id"),
            squad_lead_decided_at=r.get("squad_lead_decided_at"),
            admin_id=r.get("admin_id"),
            admin_decided_at=r.get("admin_decided_at"),
        )
