from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import AuditOperation, EntityType
from ..users.model import Actor


@dataclass(frozen=True)
class ChangeEvent:
    """A committed change to a tracked entity.

    `before`/`after` are plain-dict snapshots (see common.serialization.snapshot);
    `before` is None for creates and `after` is None for deletes.
    """

    entity_type: EntityType
    entity_id: Any
    operation: AuditOperation
    actor: Optional[Actor] = None
    before: Optional[dict] = None
    after: Optional[dict] = None
    action: Optional[str] = None
