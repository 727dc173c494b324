from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EntityType
from .model import AuditEntry


class AuditRepository(Protocol):
    def create(self, entry: AuditEntry) -> int:
        raise NotImplementedError

    def list_for_entity(self, *, entity_type: EntityType, entity_id: str, limit: int = 200) -> Sequence[AuditEntry]:
        raise NotImplementedError

    def list_recent(self, *, performed_by: Optional[int] = None, limit: int = 200) -> Sequence[AuditEntry]:
        raise NotImplementedError
