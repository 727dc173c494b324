from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AuditCategory, AuditOperation, AuditSeverity, EntityType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, load_json
from .model import AuditEntry
from .repository import AuditRepository

_SELECT = """
    SELECT audit_id, action, operation, entity_type, entity_id, performed_by, timestamp,
           before_value, after_value, fields_changed, severity, category, compliance,
           checksum, ip_address, user_agent
    FROM audit_logs
"""


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, entry: AuditEntry) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(
                    action, operation, entity_type, entity_id, performed_by, timestamp,
                    before_value, after_value, fields_changed, severity, category, compliance,
                    checksum, ip_address, user_agent
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.action,
                    entry.operation.value,
                    entry.entity_type.value,
                    entry.entity_id,
                    entry.performed_by,
                    entry.timestamp,
                    dump_json(entry.before),
                    dump_json(entry.after),
                    dump_json(list(entry.fields_changed)),
                    entry.severity.value,
                    entry.category.value,
                    int(entry.compliance),
                    entry.checksum,
                    entry.ip_address,
                    entry.user_agent,
                ),
            )
            return int(cur.lastrowid)

    def list_for_entity(self, *, entity_type: EntityType, entity_id: str, limit: int = 200) -> Sequence[AuditEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE entity_type=%s AND entity_id=%s ORDER BY timestamp DESC LIMIT %s",
                (entity_type.value, str(entity_id), int(limit)),
            )
            return [self._to_entry(r) for r in fetchall(cur)]

    def list_recent(self, *, performed_by: Optional[int] = None, limit: int = 200) -> Sequence[AuditEntry]:
        clauses = ["1=1"]
        params: list[object] = []
        if performed_by is not None:
            clauses.append("performed_by=%s")
            params.append(int(performed_by))
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY timestamp DESC LIMIT %s",
                tuple(params),
            )
            return [self._to_entry(r) for r in fetchall(cur)]

    @staticmethod
    def _to_entry(r: dict) -> AuditEntry:
        return AuditEntry(
            audit_id=int(r["audit_id"]),
            action=r["action"],
            operation=AuditOperation(r["operation"]),
            entity_type=EntityType(r["entity_type"]),
            entity_id=r.get("entity_id"),
            performed_by=r.get("performed_by"),
            timestamp=r["timestamp"],
            before=load_json(r.get("before_value")),
            after=load_json(r.get("after_value")),
            fields_changed=tuple(load_json(r.get("fields_changed")) or ()),
            severity=AuditSeverity(r["severity"]),
            category=AuditCategory(r["category"]),
            compliance=bool(r.get("compliance")),
            checksum=r["checksum"],
            ip_address=r.get("ip_address"),
            user_agent=r.get("user_agent"),
        )
