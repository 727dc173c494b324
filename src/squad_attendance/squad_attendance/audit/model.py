from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import AuditCategory, AuditOperation, AuditSeverity, EntityType


@dataclass(frozen=True)
class AuditEntry:
    """One audit log row. Written by the recorder only, never edited."""

    action: str
    operation: AuditOperation
    entity_type: EntityType
    entity_id: Optional[str]
    performed_by: Optional[int]
    timestamp: datetime
    severity: AuditSeverity
    category: AuditCategory
    compliance: bool
    checksum: str
    before: Optional[dict] = None
    after: Optional[dict] = None
    fields_changed: tuple[str, ...] = field(default_factory=tuple)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    audit_id: Optional[int] = None

    def payload(self) -> dict[str, Any]:
        """The part of the entry covered by the checksum."""
        return {
            "action": self.action,
            "operation": self.operation.value,
            "entity_type": self.entity_type.value,
            "entity_id": self.entity_id,
            "timestamp": self.timestamp.isoformat(),
            "changes": {
                "before": self.before,
                "after": self.after,
                "fields_changed": list(self.fields_changed),
            },
        }
