from __future__ import annotations

from flask import Flask, request, session

from ..common.web import current_actor, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    @json_errors
    def login():
        data = request.get_json(silent=True) or {}
        s_user = container.auth_service.authenticate(
            data.get("email", ""),
            data.get("password", ""),
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
        )

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["squad_id"] = s_user.squad_id

        return ok(
            {
                "user": {
                    "id": s_user.user_id,
                    "name": s_user.name,
                    "email": s_user.email,
                    "role": s_user.role.value,
                    "squad_id": s_user.squad_id,
                }
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    @login_required
    @json_errors
    def logout():
        container.auth_service.logout(current_actor())
        session.clear()
        return ok({"message": "Logged out"})
