from __future__ import annotations

from flask import Flask, request

from ..common.serialization import to_jsonable
from ..common.web import current_actor, json_errors, ok, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit-logs", methods=["GET"], endpoint="api_audit_logs")
    @roles_required(Role.ADMIN)
    @json_errors
    def list_audit_logs():
        performed_by = request.args.get("performed_by")
        if performed_by is not None and not performed_by.isdigit():
            raise ValidationError("performed_by must be a user id")

        entries = container.audit_log_service.list_entries(
            current_actor(),
            entity_type=request.args.get("entity_type"),
            entity_id=request.args.get("entity_id"),
            performed_by=int(performed_by) if performed_by is not None else None,
        )
        return ok({"entries": to_jsonable(list(entries))})
