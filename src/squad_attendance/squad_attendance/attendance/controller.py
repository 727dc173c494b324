from __future__ import annotations

from datetime import datetime

from flask import Flask, request

from ..common.serialization import to_jsonable
from ..common.web import cron_required, current_actor, json_errors, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError

_DATETIME_FIELDS = ("check_in_time", "check_out_time")


def _parse_changes(data: dict) -> dict:
    changes = dict(data)
    for key in _DATETIME_FIELDS:
        value = changes.get(key)
        if isinstance(value, str) and value:
            try:
                parsed = datetime.fromisoformat(value)
            except ValueError:
                raise ValidationError(f"Invalid {key}: expected ISO date-time")
            # Stored times are naive local time.
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone().replace(tzinfo=None)
            changes[key] = parsed
        elif value == "":
            changes[key] = None
    return changes


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @login_required
    @json_errors
    def check_in():
        data = request.get_json(silent=True) or {}
        record = container.attendance_service.check_in(
            current_actor(),
            work_mode=data.get("work_mode"),
            location=data.get("location"),
            notes=data.get("notes"),
        )
        return ok({"message": "Checked in successfully", "attendance": to_jsonable(record)}, 201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    @login_required
    @json_errors
    def check_out():
        data = request.get_json(silent=True) or {}
        record = container.attendance_service.check_out(current_actor(), notes=data.get("notes"))
        return ok({"message": "Checked out successfully", "attendance": to_jsonable(record)})

    @app.route("/api/attendance/status", methods=["GET"], endpoint="api_attendance_status")
    @login_required
    @json_errors
    def status():
        return ok(container.attendance_service.status(current_actor()))

    @app.route("/api/attendance/<int:attendance_id>", methods=["PATCH"], endpoint="api_attendance_update")
    @roles_required(Role.ADMIN, Role.SQUAD_LEAD)
    @json_errors
    def update(attendance_id: int):
        changes = _parse_changes(request.get_json(silent=True) or {})
        record = container.attendance_service.update_record(current_actor(), attendance_id, changes)
        return ok({"attendance": to_jsonable(record)})

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="api_attendance_delete")
    @roles_required(Role.ADMIN)
    @json_errors
    def delete(attendance_id: int):
        container.attendance_service.delete_record(current_actor(), attendance_id)
        return ok({"message": "Attendance record deleted"})

    @app.route("/api/attendance/auto-checkout-reminder", methods=["POST"], endpoint="api_checkout_reminder")
    @cron_required
    @json_errors
    def checkout_reminder():
        result = container.checkout_reminder_sweep.run()
        return ok({"message": result.message, "reminders_sent": result.reminders_sent, "skipped": result.skipped})
