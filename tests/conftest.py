"""In-memory repositories shared by the test modules.

Each fake implements the matching repository protocol closely enough for the
services under test; no database is needed.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.squad_attendance.squad_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from src.squad_attendance.squad_attendance.core.enums import ReportStatus, Role, WorkMode
from src.squad_attendance.squad_attendance.leave.model import LeaveRequest
from src.squad_attendance.squad_attendance.notifications.model import Notification
from src.squad_attendance.squad_attendance.policies.model import AttendanceRules
from src.squad_attendance.squad_attendance.reports.model import ReportConfig
from src.squad_attendance.squad_attendance.squads.model import Squad
from src.squad_attendance.squad_attendance.users.model import Actor, User


class InMemoryUsers:
    def __init__(self, users=()):
        self.users_by_id: dict[int, User] = {u.user_id: u for u in users}

    def add(self, user: User) -> User:
        self.users_by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.email == email), None)

    def list_by_role(self, role: Role):
        return [u for u in self.users_by_id.values() if u.role == role and u.is_active]

    def list_by_squad(self, squad_id: int):
        return [u for u in self.users_by_id.values() if u.squad_id == squad_id and u.is_active]


class InMemorySquads:
    def __init__(self, squads=()):
        self.squads_by_id: dict[int, Squad] = {s.squad_id: s for s in squads}

    def get_by_id(self, squad_id: int) -> Optional[Squad]:
        return self.squads_by_id.get(int(squad_id))

    def list_all(self):
        return sorted(self.squads_by_id.values(), key=lambda s: s.name)


class InMemoryAttendance:
    def __init__(self, users: InMemoryUsers, squads: InMemorySquads):
        self._users = users
        self._squads = squads
        self.records: dict[int, AttendanceRecord] = {}
        self._next_id = 1

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        record = replace(record, attendance_id=self._next_id)
        self._next_id += 1
        self.records[record.attendance_id] = record
        return record

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(int(attendance_id))

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return next((r for r in self.records.values() if r.user_id == user_id and r.work_date == work_date), None)

    def insert(self, record: AttendanceRecord) -> int:
        return self.add(record).attendance_id

    def update(self, record: AttendanceRecord) -> bool:
        if record.attendance_id not in self.records:
            return False
        self.records[record.attendance_id] = record
        return True

    def delete(self, attendance_id: int) -> bool:
        return self.records.pop(int(attendance_id), None) is not None

    def list_open_for_date(self, work_date: date, limit: int):
        return [r for r in self.records.values() if r.work_date == work_date and r.is_open][:limit]

    def list_for_squad_and_date(self, squad_id: int, work_date: date):
        return [r for r in self.records.values() if r.squad_id == squad_id and r.work_date == work_date]

    def get_report_rows(self, *, start_date, end_date, squad_ids=(), user_ids=(), compliance_statuses=(), limit=None):
        rows = []
        for r in sorted(self.records.values(), key=lambda r: (r.work_date, r.user_id)):
            if not start_date <= r.work_date <= end_date:
                continue
            if squad_ids and r.squad_id not in squad_ids:
                continue
            if user_ids and r.user_id not in user_ids:
                continue
            if compliance_statuses and r.compliance_status not in compliance_statuses:
                continue
            user = self._users.get_by_id(r.user_id)
            squad = self._squads.get_by_id(r.squad_id) if r.squad_id is not None else None
            rows.append(
                AttendanceReportRow(
                    attendance_id=r.attendance_id,
                    user_id=r.user_id,
                    user_name=user.name,
                    email=user.email,
                    squad_id=r.squad_id,
                    squad_name=squad.name if squad else None,
                    work_date=r.work_date,
                    check_in_time=r.check_in_time,
                    check_out_time=r.check_out_time,
                    total_hours=r.total_hours,
                    late_minutes=r.late_minutes,
                    compliance_status=r.compliance_status,
                    compliance_notes=r.compliance_notes,
                )
            )
        return rows[:limit] if limit is not None else rows


class InMemoryNotifications:
    def __init__(self):
        self.items: list[Notification] = []
        self.fail = False

    def create(self, notification: Notification) -> int:
        if self.fail:
            raise RuntimeError("notification store down")
        notification = replace(notification, notification_id=len(self.items) + 1)
        self.items.append(notification)
        return notification.notification_id

    def list_for_recipient(self, recipient_id: int, *, unread_only: bool = False, limit: int = 200):
        items = [n for n in self.items if n.recipient_id == recipient_id and not (unread_only and n.is_read)]
        return items[:limit]

    def mark_read(self, notification_id: int, recipient_id: int) -> bool:
        for i, n in enumerate(self.items):
            if n.notification_id == notification_id and n.recipient_id == recipient_id:
                self.items[i] = replace(n, is_read=True)
                return True
        return False

    def exists_for(self, *, recipient_id, type, related_type, related_id, sent_on) -> bool:
        return any(
            n.recipient_id == recipient_id
            and n.type == type
            and n.related_type == related_type
            and n.related_id == related_id
            and n.sent_at.date() == sent_on
            for n in self.items
        )

    def for_user(self, user_id: int):
        return [n for n in self.items if n.recipient_id == user_id]


class InMemoryAuditLogs:
    def __init__(self):
        self.entries = []
        self.fail = False

    def create(self, entry) -> int:
        if self.fail:
            raise RuntimeError("audit store down")
        self.entries.append(entry)
        return len(self.entries)

    def list_for_entity(self, *, entity_type, entity_id, limit=200):
        return [e for e in self.entries if e.entity_type == entity_type and e.entity_id == str(entity_id)][:limit]

    def list_recent(self, *, performed_by=None, limit=200):
        return [e for e in self.entries if performed_by is None or e.performed_by == performed_by][:limit]


class InMemoryLeaveRequests:
    def __init__(self):
        self.requests: dict[int, LeaveRequest] = {}

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        return self.requests.get(int(request_id))

    def create(self, request: LeaveRequest) -> int:
        rid = len(self.requests) + 1
        self.requests[rid] = replace(request, request_id=rid)
        return rid

    def update_decision(self, request: LeaveRequest) -> bool:
        if request.request_id not in self.requests:
            return False
        self.requests[request.request_id] = request
        return True

    def list_all(self, *, limit: int = 200):
        return list(self.requests.values())[:limit]

    def list_for_user(self, user_id: int, *, limit: int = 200):
        return [r for r in self.requests.values() if r.user_id == user_id][:limit]


class InMemoryReports:
    def __init__(self):
        self.reports: dict[int, ReportConfig] = {}
        self.statuses: list[tuple[int, object]] = []

    def add(self, report: ReportConfig) -> ReportConfig:
        rid = report.report_id or len(self.reports) + 1
        report = replace(report, report_id=rid)
        self.reports[rid] = report
        return report

    def get_by_id(self, report_id: int) -> Optional[ReportConfig]:
        return self.reports.get(int(report_id))

    def create(self, report: ReportConfig) -> int:
        return self.add(replace(report, report_id=None)).report_id

    def save_generation(self, report_id: int, *, metrics, generated_at) -> bool:
        report = self.reports[report_id]
        self.reports[report_id] = replace(report, metrics=metrics, generated_at=generated_at, status=ReportStatus.GENERATED)
        return True

    def update_status(self, report_id: int, status) -> bool:
        self.statuses.append((report_id, status))
        self.reports[report_id] = replace(self.reports[report_id], status=status)
        return True

    def update_next_run(self, report_id: int, next_run: datetime) -> bool:
        report = self.reports[report_id]
        self.reports[report_id] = replace(report, automation=replace(report.automation, next_scheduled_run=next_run))
        return True

    def list_due(self, now: datetime):
        return [
            r
            for r in self.reports.values()
            if r.automation.auto_generate
            and r.automation.next_scheduled_run is not None
            and r.automation.next_scheduled_run <= now
            and r.status != ReportStatus.ARCHIVED
        ]

    def list_automated(self):
        return [r for r in self.reports.values() if r.automation.auto_generate]


def make_user(user_id: int, role: Role, squad_id: Optional[int], **kwargs) -> User:
    return User(
        user_id=user_id,
        name=kwargs.pop("name", f"User {user_id}"),
        email=kwargs.pop("email", f"user{user_id}@example.com"),
        password_hash=kwargs.pop("password_hash", generate_password_hash("secret")),
        role=role,
        squad_id=squad_id,
        **kwargs,
    )


def actor_for(user: User) -> Actor:
    return Actor(user_id=user.user_id, role=user.role, ip_address="10.0.0.1", user_agent="pytest")


@pytest.fixture
def store():
    """Two squads and a handful of users.

    Platform (1) is led by user 2 and overrides only the minimum hours and the
    check-in time; Mobile (2) has no overrides at all.
    """

    squads = InMemorySquads(
        [
            Squad(
                squad_id=1,
                name="Platform",
                lead_id=2,
                attendance_rules=AttendanceRules(minimum_work_hours=7.5, standard_check_in_time="09:30"),
            ),
            Squad(squad_id=2, name="Mobile", lead_id=None),
        ]
    )
    users = InMemoryUsers(
        [
            make_user(1, Role.ADMIN, None, name="Ada Admin", email="admin@example.com"),
            make_user(2, Role.SQUAD_LEAD, 1, name="Lee Lead", email="lead@example.com"),
            make_user(3, Role.MEMBER, 1, name="Mia Member", email="mia@example.com", work_mode=WorkMode.OFFICE),
            make_user(4, Role.MEMBER, 2, name="Max Mobile", email="max@example.com"),
            make_user(5, Role.MEMBER, None, name="Nora Nosquad", email="nora@example.com"),
            make_user(6, Role.VIEWER, None, name="Vic Viewer", email="viewer@example.com"),
        ]
    )
    return SimpleNamespace(
        users=users,
        squads=squads,
        attendance=InMemoryAttendance(users, squads),
        notifications=InMemoryNotifications(),
        audit_logs=InMemoryAuditLogs(),
        leave_requests=InMemoryLeaveRequests(),
        reports=InMemoryReports(),
    )


@pytest.fixture
def actor_of(store):
    """Session actor for a seeded user id."""

    def _actor(user_id: int) -> Actor:
        return actor_for(store.users.get_by_id(user_id))

    return _actor
