from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.constants import REMINDER_SWEEP_LIMIT
from ..core.enums import EntityType, NotificationType
from .repository import NotificationRepository
from .service import NotificationService

logger = logging.getLogger(__name__)

REMINDER_TITLE = "Check-out Reminder"
REMINDER_MESSAGE = "Don't forget to check out for today!"


@dataclass(frozen=True)
class ReminderSweepResult:
    reminders_sent: int
    skipped: int = 0

    @property
    def message(self) -> str:
        return f"Sent {self.reminders_sent} check-out reminders"


class CheckoutReminderSweep:
    """Remind everyone still checked in today to check out.

    Re-running the sweep on the same day sends the reminders again unless
    `deduplicate` is set, in which case records already reminded today are
    skipped.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        notifications: NotificationService,
        *,
        notification_store: Optional[NotificationRepository] = None,
        deduplicate: bool = False,
        limit: int = REMINDER_SWEEP_LIMIT,
    ):
        if deduplicate and notification_store is None:
            raise ValueError("deduplicate requires a notification store")
        self._attendance = attendance
        self._notifications = notifications
        self._store = notification_store
        self._deduplicate = deduplicate
        self._limit = int(limit)

    def run(self, today: Optional[date] = None) -> ReminderSweepResult:
        today = today or self._notifications.clock().date()
        open_records = self._attendance.list_open_for_date(today, self._limit)

        sent = skipped = 0
        for record in open_records:
            if self._deduplicate and self._already_reminded(record.user_id, record.attendance_id, today):
                skipped += 1
                continue

            notification_id = self._notifications.notify(
                record.user_id,
                title=REMINDER_TITLE,
                message=REMINDER_MESSAGE,
                type=NotificationType.REMINDER,
                related_type=EntityType.ATTENDANCE,
                related_id=record.attendance_id,
            )
            if notification_id is not None:
                sent += 1

        logger.info("Checkout reminder sweep for %s: %d sent, %d skipped", today, sent, skipped)
        return ReminderSweepResult(reminders_sent=sent, skipped=skipped)

    def _already_reminded(self, user_id: int, attendance_id: int, today: date) -> bool:
        return self._store.exists_for(
            recipient_id=user_id,
            type=NotificationType.REMINDER,
            related_type=EntityType.ATTENDANCE,
            related_id=attendance_id,
            sent_on=today,
        )
