from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import EntityType, NotificationType
from ..core.exceptions import NotFoundError
from ..users.model import Actor
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Create and read in-app notifications.

    `notify` is a side effect of other operations: it never raises, a failed
    write is logged and reported as None.
    """

    def __init__(self, notifications: NotificationRepository, *, clock: Optional[Callable[[], datetime]] = None):
        self._notifications = notifications
        self._clock = clock or now_local

    @property
    def clock(self) -> Callable[[], datetime]:
        return self._clock

    def notify(
        self,
        recipient_id: int,
        *,
        title: str,
        message: str,
        type: NotificationType,
        related_type: Optional[EntityType] = None,
        related_id: Optional[int] = None,
    ) -> Optional[int]:
        notification = Notification(
            notification_id=None,
            recipient_id=int(recipient_id),
            title=title,
            message=message,
            type=type,
            sent_at=self._clock(),
            related_type=related_type,
            related_id=related_id,
        )
        try:
            return self._notifications.create(notification)
        except Exception:
            logger.exception("Failed to create %s notification for user %s", type.value, recipient_id)
            return None

    def list_for(self, actor: Actor, *, unread_only: bool = False, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Notification]:
        return self._notifications.list_for_recipient(int(actor.user_id), unread_only=unread_only, limit=limit)

    def mark_read(self, actor: Actor, notification_id: int) -> None:
        if not self._notifications.mark_read(int(notification_id), int(actor.user_id)):
            raise NotFoundError(f"Notification {notification_id} not found")
