from __future__ import annotations

from flask import Flask

from ..common.serialization import to_jsonable
from ..common.web import current_actor, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/squads/<int:squad_id>/presence", methods=["GET"], endpoint="api_squad_presence")
    @login_required
    @json_errors
    def presence(squad_id: int):
        rows = container.squad_service.presence_board(current_actor(), squad_id)
        return ok({"squad_id": squad_id, "members": to_jsonable(rows)})
