from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import AuditOperation, EntityType, Role
from ..core.exceptions import AuthenticationError
from ..events.dispatcher import ChangeDispatcher
from ..events.model import ChangeEvent
from .model import Actor
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role
    squad_id: Optional[int]


class AuthService:
    """Use case: authenticate user (login/logout)."""

    def __init__(self, users: UserRepository, dispatcher: Optional[ChangeDispatcher] = None):
        self._users = users
        self._dispatcher = dispatcher or ChangeDispatcher()

    def authenticate(self, email: str, password: str, *, ip_address: Optional[str] = None, user_agent: Optional[str] = None) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        self._dispatcher.dispatch(
            ChangeEvent(
                entity_type=EntityType.USER,
                entity_id=user.user_id,
                operation=AuditOperation.LOGIN,
                actor=Actor(user_id=user.user_id, role=user.role, ip_address=ip_address, user_agent=user_agent),
                action="User logged in",
            )
        )
        logger.info("User %s logged in", user.user_id)

        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            squad_id=user.squad_id,
        )

    def logout(self, actor: Actor) -> None:
        self._dispatcher.dispatch(
            ChangeEvent(
                entity_type=EntityType.USER,
                entity_id=actor.user_id,
                operation=AuditOperation.LOGOUT,
                actor=actor,
                action="User logged out",
            )
        )
