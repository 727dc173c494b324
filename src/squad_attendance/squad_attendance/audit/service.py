from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_choice
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import EntityType, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import Actor
from .model import AuditEntry
from .repository import AuditRepository


class AuditLogService:
    """Read side of the audit trail. Admins only; entries are never edited."""

    def __init__(self, audit_logs: AuditRepository):
        self._audit_logs = audit_logs

    def list_entries(
        self,
        actor: Actor,
        *,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
        performed_by: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[AuditEntry]:
        if actor.role != Role.ADMIN:
            raise AuthorizationError("Only admins can read the audit log")

        if entity_type or entity_id:
            if not (entity_type and entity_id):
                raise ValidationError("entity_type and entity_id must be given together")
            return self._audit_logs.list_for_entity(
                entity_type=require_choice(entity_type, EntityType, "entity type"),
                entity_id=str(entity_id),
                limit=limit,
            )
        return self._audit_logs.list_recent(performed_by=performed_by, limit=limit)
