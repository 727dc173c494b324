from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EntityType, NotificationType


@dataclass(frozen=True)
class Notification:
    """In-app notification addressed to one user."""

    notification_id: Optional[int]
    recipient_id: int
    title: str
    message: str
    type: NotificationType
    sent_at: datetime
    is_read: bool = False
    related_type: Optional[EntityType] = None
    related_id: Optional[int] = None
