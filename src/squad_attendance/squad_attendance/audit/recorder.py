from __future__ import annotations

import hashlib
import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.serialization import canonical_json
from ..core.enums import AuditOperation, EntityType
from ..events.model import ChangeEvent
from .classification import determine_category, determine_severity, is_compliance_relevant
from .diff import changed_fields
from .model import AuditEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)

_VERBS = {
    AuditOperation.CREATE: "Created",
    AuditOperation.UPDATE: "Updated",
    AuditOperation.DELETE: "Deleted",
}


def compute_checksum(entry: AuditEntry) -> str:
    return hashlib.sha256(canonical_json(entry.payload()).encode("utf-8")).hexdigest()


class AuditRecorder:
    """Post-write observer that writes one audit entry per committed change.

    Audit writes are best effort: failures are logged and dropped so the
    primary write is never affected.
    """

    def __init__(self, audit_logs: AuditRepository, *, clock: Optional[Callable[[], datetime]] = None):
        self._audit_logs = audit_logs
        self._clock = clock or now_local

    def notify(self, event: ChangeEvent) -> None:
        if event.entity_type == EntityType.AUDIT_LOG:
            return

        try:
            entry = self.build_entry(event)
            self._audit_logs.create(entry)
            logger.debug("Audit log created: %s", entry.action)
        except Exception:
            logger.exception("Failed to create audit log for %s %s", event.entity_type.value, event.entity_id)

    def build_entry(self, event: ChangeEvent) -> AuditEntry:
        actor = event.actor
        fields = changed_fields(event.before, event.after)
        entry = AuditEntry(
            action=event.action or self._default_action(event),
            operation=event.operation,
            entity_type=event.entity_type,
            entity_id=str(event.entity_id) if event.entity_id is not None else None,
            performed_by=actor.user_id if actor else None,
            timestamp=self._clock(),
            severity=determine_severity(event.entity_type, event.operation),
            category=determine_category(event.entity_type),
            compliance=is_compliance_relevant(event.entity_type, event.operation),
            checksum="",
            before=event.before,
            after=event.after,
            fields_changed=tuple(fields),
            ip_address=actor.ip_address if actor else None,
            user_agent=actor.user_agent if actor else None,
        )
        return _with_checksum(entry)

    @staticmethod
    def _default_action(event: ChangeEvent) -> str:
        verb = _VERBS.get(event.operation, event.operation.value.capitalize())
        return f"{verb} {event.entity_type.value} record"


def _with_checksum(entry: AuditEntry) -> AuditEntry:
    return replace(entry, checksum=compute_checksum(entry))
