from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.serialization import snapshot
from ..common.validators import require_choice, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import AuditOperation, EntityType, LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..events.dispatcher import ChangeDispatcher
from ..events.model import ChangeEvent
from ..squads.repository import SquadRepository
from ..users.model import Actor
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import LeaveRequestRepository


class LeaveService:
    """Leave requests: squad lead decides first, admin gives the final answer."""

    def __init__(
        self,
        requests: LeaveRequestRepository,
        users: UserRepository,
        squads: SquadRepository,
        *,
        dispatcher: ChangeDispatcher | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._requests = requests
        self._users = users
        self._squads = squads
        self._dispatcher = dispatcher or ChangeDispatcher()
        self._clock = clock or now_local

    def submit(
        self,
        actor: Actor,
        *,
        leave_type: str,
        reason: str,
        duration: str,
        user_id: int | None = None,
    ) -> LeaveRequest:
        target_id = int(user_id) if user_id is not None else int(actor.user_id)
        if target_id != actor.user_id and actor.role not in {Role.ADMIN, Role.SQUAD_LEAD}:
            raise AuthorizationError("You can only request leave for yourself")

        user = self._users.get_by_id(target_id)
        if not user:
            raise NotFoundError(f"User {target_id} not found")
        if user.squad_id is None:
            raise ValidationError("User is not assigned to any squad")

        request = LeaveRequest(
            request_id=None,
            user_id=user.user_id,
            squad_id=user.squad_id,
            leave_type=require_choice(leave_type, LeaveType, "leave type"),
            reason=require_non_empty(reason, "Reason"),
            duration=require_non_empty(duration, "Duration"),
            created_at=self._clock(),
        )
        request = replace(request, request_id=self._requests.create(request))

        self._dispatch(AuditOperation.CREATE, actor, None, request, "Leave request submitted")
        return request

    def approve(self, actor: Actor, request_id: int) -> LeaveRequest:
        return self._decide(actor, request_id, approve=True)

    def reject(self, actor: Actor, request_id: int) -> LeaveRequest:
        return self._decide(actor, request_id, approve=False)

    def list_for(self, actor: Actor, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRequest]:
        if actor.role in {Role.ADMIN, Role.SQUAD_LEAD}:
            return self._requests.list_all(limit=limit)
        return self._requests.list_for_user(int(actor.user_id), limit=limit)

    def _decide(self, actor: Actor, request_id: int, *, approve: bool) -> LeaveRequest:
        before = self._requests.get_by_id(int(request_id))
        if not before:
            raise NotFoundError(f"Leave request {request_id} not found")
        if before.status.is_terminal:
            raise ValidationError(f"Leave request is already {before.status.value}")

        now = self._clock()
        if actor.role == Role.ADMIN:
            after = replace(
                before,
                status=LeaveStatus.APPROVED if approve else LeaveStatus.REJECTED_ADMIN,
                admin_id=actor.user_id,
                admin_decided_at=now,
            )
        elif actor.role == Role.SQUAD_LEAD and self._leads_squad(actor, before.squad_id):
            if before.status != LeaveStatus.PENDING_SQUAD_LEAD:
                raise ValidationError("Leave request is waiting for admin approval")
            after = replace(
                before,
                status=LeaveStatus.PENDING_ADMIN if approve else LeaveStatus.REJECTED_SQUAD_LEAD,
                squad_lead_id=actor.user_id,
                squad_lead_decided_at=now,
            )
        else:
            raise AuthorizationError("Not allowed to decide this leave request")

        if not self._requests.update_decision(after):
            raise ValidationError("Failed to update leave request")

        operation = AuditOperation.APPROVE if approve else AuditOperation.REJECT
        self._dispatch(operation, actor, before, after, f"Leave request {after.status.value}")
        return after

    def _leads_squad(self, actor: Actor, squad_id: int) -> bool:
        squad = self._squads.get_by_id(int(squad_id))
        return bool(squad and squad.lead_id == actor.user_id)

    def _dispatch(
        self,
        operation: AuditOperation,
        actor: Actor,
        before: Optional[LeaveRequest],
        after: LeaveRequest,
        action: str,
    ) -> None:
        self._dispatcher.dispatch(
            ChangeEvent(
                entity_type=EntityType.LEAVE_REQUEST,
                entity_id=after.request_id,
                operation=operation,
                actor=actor,
                before=snapshot(before),
                after=snapshot(after),
                action=action,
            )
        )
