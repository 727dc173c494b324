from __future__ import annotations

from flask import Flask, request

from ..common.serialization import to_jsonable
from ..common.web import current_actor, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="api_notifications")
    @login_required
    @json_errors
    def list_notifications():
        unread_only = request.args.get("unread") in {"1", "true", "yes"}
        items = container.notification_service.list_for(current_actor(), unread_only=unread_only)
        return ok({"notifications": to_jsonable(list(items))})

    @app.route("/api/notifications/<int:notification_id>/read", methods=["POST"], endpoint="api_notification_read")
    @login_required
    @json_errors
    def mark_read(notification_id: int):
        container.notification_service.mark_read(current_actor(), notification_id)
        return ok()
