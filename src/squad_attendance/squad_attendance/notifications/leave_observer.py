from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import AuditOperation, EntityType, LeaveStatus, NotificationType, Role
from ..events.model import ChangeEvent
from ..squads.repository import SquadRepository
from ..users.repository import UserRepository
from .service import NotificationService

logger = logging.getLogger(__name__)


class LeaveNotificationObserver:
    """Walks the leave approval chain: lead, then admins, then the requester."""

    def __init__(self, notifications: NotificationService, users: UserRepository, squads: SquadRepository):
        self._notifications = notifications
        self._users = users
        self._squads = squads

    def notify(self, event: ChangeEvent) -> None:
        if event.entity_type != EntityType.LEAVE_REQUEST or not event.after:
            return

        doc = event.after
        request_id = int(event.entity_id)

        if event.operation == AuditOperation.CREATE:
            self._notify_squad_lead(doc.get("squad_id"), request_id)
            return

        status = _status(doc)
        if status is None or status == _status(event.before):
            return

        if status == LeaveStatus.PENDING_ADMIN:
            self._notify_admins(request_id)
        elif status.is_terminal:
            self._notify_requester(doc["user_id"], request_id, status)

    def _notify_squad_lead(self, squad_id: Optional[int], request_id: int) -> None:
        squad = self._squads.get_by_id(int(squad_id)) if squad_id is not None else None
        if not squad or squad.lead_id is None:
            logger.info("Leave request %s has no squad lead to notify", request_id)
            return

        self._notifications.notify(
            squad.lead_id,
            title="New Leave Request",
            message="A new leave request has been submitted and requires your approval.",
            type=NotificationType.LEAVE,
            related_type=EntityType.LEAVE_REQUEST,
            related_id=request_id,
        )

    def _notify_admins(self, request_id: int) -> None:
        for admin in self._users.list_by_role(Role.ADMIN):
            self._notifications.notify(
                admin.user_id,
                title="Leave Request Pending Admin Approval",
                message="A leave request has been approved by the squad lead and requires final admin approval.",
                type=NotificationType.LEAVE,
                related_type=EntityType.LEAVE_REQUEST,
                related_id=request_id,
            )

    def _notify_requester(self, user_id: int, request_id: int, status: LeaveStatus) -> None:
        if status == LeaveStatus.APPROVED:
            message = "Your leave request has been approved."
        else:
            message = "Your leave request has been rejected."

        self._notifications.notify(
            int(user_id),
            title="Leave Request Update",
            message=message,
            type=NotificationType.LEAVE,
            related_type=EntityType.LEAVE_REQUEST,
            related_id=request_id,
        )


def _status(doc: Optional[dict]) -> Optional[LeaveStatus]:
    if not doc or not doc.get("status"):
        return None
    return LeaveStatus(doc["status"])
