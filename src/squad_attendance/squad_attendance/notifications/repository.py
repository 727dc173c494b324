from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import EntityType, NotificationType
from .model import Notification


class NotificationRepository(Protocol):
    def create(self, notification: Notification) -> int:
        raise NotImplementedError

    def list_for_recipient(self, recipient_id: int, *, unread_only: bool = False, limit: int = 200) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, notification_id: int, recipient_id: int) -> bool:
        raise NotImplementedError

    def exists_for(
        self,
        *,
        recipient_id: int,
        type: NotificationType,
        related_type: EntityType,
        related_id: int,
        sent_on: date,
    ) -> bool:
        """Whether a matching notification was already sent on `sent_on`."""

        raise NotImplementedError
