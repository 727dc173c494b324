from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role, WorkMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_SELECT = """
    SELECT user_id, name, email, password_hash, role, squad_id, work_mode, time_zone, is_active
    FROM users
"""


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return self._to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE email=%s", (email,))
            row = fetchone(cur)
            return self._to_user(row) if row else None

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE role=%s AND is_active=1 ORDER BY user_id ASC", (role.value,))
            return [self._to_user(r) for r in fetchall(cur)]

    def list_by_squad(self, squad_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE squad_id=%s AND is_active=1 ORDER BY name ASC", (int(squad_id),))
            return [self._to_user(r) for r in fetchall(cur)]

    @staticmethod
    def _to_user(row: dict) -> User:
        return User(
            user_id=int(row["user_id"]),
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            role=Role(row["role"]),
            squad_id=row.get("squad_id"),
            work_mode=WorkMode(row.get("work_mode") or WorkMode.REMOTE.value),
            time_zone=row.get("time_zone") or "UTC",
            is_active=bool(row.get("is_active", True)),
        )
