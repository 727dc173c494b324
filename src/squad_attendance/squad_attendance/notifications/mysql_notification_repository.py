from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import EntityType, NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification
from .repository import NotificationRepository

_SELECT = """
    SELECT notification_id, recipient_id, title, message, type, sent_at, is_read, related_type, related_id
    FROM notifications
"""


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, notification: Notification) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(recipient_id, title, message, type, sent_at, is_read, related_type, related_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(notification.recipient_id),
                    notification.title,
                    notification.message,
                    notification.type.value,
                    notification.sent_at,
                    int(notification.is_read),
                    notification.related_type.value if notification.related_type else None,
                    notification.related_id,
                ),
            )
            return int(cur.lastrowid)

    def list_for_recipient(self, recipient_id: int, *, unread_only: bool = False, limit: int = 200) -> Sequence[Notification]:
        where = "recipient_id=%s" + (" AND is_read=0" if unread_only else "")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {where} ORDER BY sent_at DESC LIMIT %s",
                (int(recipient_id), int(limit)),
            )
            return [self._to_notification(r) for r in fetchall(cur)]

    def mark_read(self, notification_id: int, recipient_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE notification_id=%s AND recipient_id=%s",
                (int(notification_id), int(recipient_id)),
            )
            return cur.rowcount > 0

    def exists_for(
        self,
        *,
        recipient_id: int,
        type: NotificationType,
        related_type: EntityType,
        related_id: int,
        sent_on: date,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found FROM notifications
                WHERE recipient_id=%s AND type=%s AND related_type=%s AND related_id=%s AND DATE(sent_at)=%s
                LIMIT 1
                """,
                (int(recipient_id), type.value, related_type.value, int(related_id), sent_on),
            )
            return fetchone(cur) is not None

    @staticmethod
    def _to_notification(r: dict) -> Notification:
        return Notification(
            notification_id=int(r["notification_id"]),
            recipient_id=int(r["recipient_id"]),
            title=r["title"],
            message=r["message"],
            type=NotificationType(r["type"]),
            sent_at=r["sent_at"],
            is_read=bool(r.get("is_read")),
            related_type=EntityType(r["related_type"]) if r.get("related_type") else None,
            related_id=r.get("related_id"),
        )
