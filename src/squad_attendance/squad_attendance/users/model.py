from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role, WorkMode


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: A plain data object (no DB access code).
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    squad_id: Optional[int]
    work_mode: WorkMode = WorkMode.REMOTE
    time_zone: str = "UTC"
    is_active: bool = True


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation (current session caller)."""

    user_id: Optional[int]
    role: Role
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


SYSTEM_ACTOR = Actor(user_id=None, role=Role.ADMIN)
