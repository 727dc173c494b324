from __future__ import annotations

from datetime import datetime, time, timezone
from types import SimpleNamespace

import pytest
from flask import Flask

from src.squad_attendance.squad_attendance.attendance.controller import register as register_attendance
from src.squad_attendance.squad_attendance.attendance.hooks import ComplianceHook
from src.squad_attendance.squad_attendance.attendance.model import AttendanceRecord
from src.squad_attendance.squad_attendance.attendance.service import AttendanceService
from src.squad_attendance.squad_attendance.audit.controller import register as register_audit
from src.squad_attendance.squad_attendance.audit.recorder import AuditRecorder
from src.squad_attendance.squad_attendance.audit.service import AuditLogService
from src.squad_attendance.squad_attendance.events.dispatcher import ChangeDispatcher
from src.squad_attendance.squad_attendance.notifications.reminders import CheckoutReminderSweep
from src.squad_attendance.squad_attendance.notifications.service import NotificationService
from src.squad_attendance.squad_attendance.policies.resolver import PolicyResolver
from src.squad_attendance.squad_attendance.users.controller import register as register_users
from src.squad_attendance.squad_attendance.users.service import AuthService

CRON_SECRET = "cron-test-secret"


@pytest.fixture
def client(store):
    notifications = NotificationService(store.notifications)
    container = SimpleNamespace(
        auth_service=AuthService(store.users, ChangeDispatcher([AuditRecorder(store.audit_logs)])),
        audit_log_service=AuditLogService(store.audit_logs),
        attendance_service=AttendanceService(
            store.attendance,
            store.users,
            ComplianceHook(PolicyResolver(store.squads)),
            squads=store.squads,
        ),
        checkout_reminder_sweep=CheckoutReminderSweep(store.attendance, notifications),
    )

    app = Flask(__name__)
    app.secret_key = "test"
    app.config["TESTING"] = True
    app.config["CRON_SECRET"] = CRON_SECRET
    register_users(app, container)
    register_attendance(app, container)
    register_audit(app, container)
    return app.test_client()


def login(client, email):
    return client.post("/api/auth/login", json={"email": email, "password": "secret"})


def test_login_rejects_wrong_password(client):
    resp = client.post("/api/auth/login", json={"email": "mia@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid email or password"}


def test_check_in_requires_a_session(client):
    assert client.post("/api/attendance/check-in", json={}).status_code == 401


def test_check_in_flow(client):
    assert login(client, "mia@example.com").status_code == 200

    resp = client.post("/api/attendance/check-in", json={"work_mode": "remote"})
    assert resp.status_code == 201
    assert resp.get_json()["attendance"]["work_mode"] == "remote"

    again = client.post("/api/attendance/check-in", json={})
    assert again.status_code == 400
    assert again.get_json()["message"] == "Already checked in today"

    status = client.get("/api/attendance/status").get_json()
    assert status["checked_in"] is True
    assert status["checked_out"] is False


def test_members_cannot_edit_records(client):
    login(client, "mia@example.com")
    assert client.patch("/api/attendance/1", json={"notes": "x"}).status_code == 403


def test_reminder_endpoint_needs_the_cron_secret(client):
    assert client.post("/api/attendance/auto-checkout-reminder").status_code == 401
    assert (
        client.post("/api/attendance/auto-checkout-reminder", headers={"Authorization": "Bearer wrong"}).status_code
        == 401
    )

    resp = client.post(
        "/api/attendance/auto-checkout-reminder",
        headers={"Authorization": f"Bearer {CRON_SECRET}"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Sent 0 check-out reminders"


def test_edit_accepts_utc_offsets_as_local_time(client, store):
    sent = datetime(2026, 3, 2, 9, 20, tzinfo=timezone.utc)
    local = sent.astimezone().replace(tzinfo=None)
    record = store.attendance.add(
        AttendanceRecord(
            attendance_id=None,
            user_id=4,
            squad_id=2,
            work_date=local.date(),
            check_in_time=datetime.combine(local.date(), time(0, 0)),
        )
    )
    login(client, "admin@example.com")

    resp = client.patch(f"/api/attendance/{record.attendance_id}", json={"check_in_time": sent.isoformat()})

    assert resp.status_code == 200
    assert resp.get_json()["attendance"]["check_in_time"] == local.isoformat()
    assert store.attendance.get_by_id(record.attendance_id).check_in_time == local


def test_edit_rejects_unparseable_times(client, store):
    record = store.attendance.add(
        AttendanceRecord(
            attendance_id=None,
            user_id=4,
            squad_id=2,
            work_date=datetime(2026, 3, 2).date(),
            check_in_time=datetime(2026, 3, 2, 9, 0),
        )
    )
    login(client, "admin@example.com")

    resp = client.patch(f"/api/attendance/{record.attendance_id}", json={"check_out_time": "5pm"})

    assert resp.status_code == 400


def test_audit_log_is_admin_only(client):
    login(client, "mia@example.com")
    assert client.get("/api/audit-logs").status_code == 403

    login(client, "admin@example.com")
    resp = client.get("/api/audit-logs", query_string={"performed_by": 3})

    assert resp.status_code == 200
    (entry,) = resp.get_json()["entries"]
    assert entry["operation"] == "login"
    assert entry["entity_type"] == "users"


def test_audit_log_rejects_bad_filters(client):
    login(client, "admin@example.com")

    assert client.get("/api/audit-logs", query_string={"performed_by": "mia"}).status_code == 400
    assert client.get("/api/audit-logs", query_string={"entity_type": "users"}).status_code == 400
