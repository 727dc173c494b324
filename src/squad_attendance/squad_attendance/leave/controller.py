from __future__ import annotations

from flask import Flask, request

from ..common.serialization import to_jsonable
from ..common.web import current_actor, json_errors, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave-requests", methods=["POST"], endpoint="api_leave_submit")
    @login_required
    @json_errors
    def submit():
        data = request.get_json(silent=True) or {}
        leave = container.leave_service.submit(
            current_actor(),
            leave_type=data.get("type", ""),
            reason=data.get("reason", ""),
            duration=data.get("duration", ""),
            user_id=data.get("user_id"),
        )
        return ok({"leave_request": to_jsonable(leave)}, 201)

    @app.route("/api/leave-requests", methods=["GET"], endpoint="api_leave_list")
    @login_required
    @json_errors
    def list_requests():
        items = container.leave_service.list_for(current_actor())
        return ok({"leave_requests": to_jsonable(list(items))})

    @app.route("/api/leave-requests/<int:request_id>/approve", methods=["POST"], endpoint="api_leave_approve")
    @roles_required(Role.ADMIN, Role.SQUAD_LEAD)
    @json_errors
    def approve(request_id: int):
        leave = container.leave_service.approve(current_actor(), request_id)
        return ok({"leave_request": to_jsonable(leave)})

    @app.route("/api/leave-requests/<int:request_id>/reject", methods=["POST"], endpoint="api_leave_reject")
    @roles_required(Role.ADMIN, Role.SQUAD_LEAD)
    @json_errors
    def reject(request_id: int):
        leave = container.leave_service.reject(current_actor(), request_id)
        return ok({"leave_request": to_jsonable(leave)})
