"""Fixed severity/category tables for audit entries."""

from __future__ import annotations

from ..core.enums import AuditCategory, AuditOperation, AuditSeverity, EntityType

_E = EntityType
_O = AuditOperation
_S = AuditSeverity

SEVERITY_TABLE: dict[tuple[EntityType, AuditOperation], AuditSeverity] = {
    (_E.USER, _O.DELETE): _S.CRITICAL,
    (_E.AUDIT_LOG, _O.DELETE): _S.CRITICAL,
    (_E.USER, _O.UPDATE): _S.HIGH,
    (_E.ATTENDANCE, _O.UPDATE): _S.HIGH,
    (_E.ATTENDANCE, _O.DELETE): _S.HIGH,
    (_E.LEAVE_REQUEST, _O.DELETE): _S.HIGH,
    (_E.SQUAD, _O.DELETE): _S.HIGH,
    (_E.SPRINT, _O.DELETE): _S.HIGH,
    (_E.REPORT, _O.DELETE): _S.HIGH,
    (_E.NOTIFICATION, _O.DELETE): _S.HIGH,
    (_E.LEAVE_REQUEST, _O.APPROVE): _S.HIGH,
    (_E.LEAVE_REQUEST, _O.REJECT): _S.HIGH,
    (_E.ATTENDANCE, _O.CREATE): _S.MEDIUM,
    (_E.SQUAD, _O.CREATE): _S.MEDIUM,
    (_E.SQUAD, _O.UPDATE): _S.MEDIUM,
    (_E.SPRINT, _O.CREATE): _S.MEDIUM,
    (_E.SPRINT, _O.UPDATE): _S.MEDIUM,
    (_E.LEAVE_REQUEST, _O.CREATE): _S.MEDIUM,
    (_E.LEAVE_REQUEST, _O.UPDATE): _S.MEDIUM,
}

CATEGORY_TABLE: dict[EntityType, AuditCategory] = {
    _E.ATTENDANCE: AuditCategory.ATTENDANCE,
    _E.LEAVE_REQUEST: AuditCategory.LEAVE,
    _E.USER: AuditCategory.USER,
    _E.SQUAD: AuditCategory.SQUAD,
    _E.REPORT: AuditCategory.REPORT,
    _E.AUDIT_LOG: AuditCategory.SECURITY,
}

_COMPLIANCE_ENTITIES = {_E.ATTENDANCE, _E.LEAVE_REQUEST, _E.USER, _E.AUDIT_LOG}
_COMPLIANCE_OPERATIONS = {_O.UPDATE, _O.DELETE}


def determine_severity(entity_type: EntityType, operation: AuditOperation) -> AuditSeverity:
    return SEVERITY_TABLE.get((entity_type, operation), AuditSeverity.LOW)


def determine_category(entity_type: EntityType) -> AuditCategory:
    return CATEGORY_TABLE.get(entity_type, AuditCategory.SYSTEM)


def is_compliance_relevant(entity_type: EntityType, operation: AuditOperation) -> bool:
    return entity_type in _COMPLIANCE_ENTITIES or operation in _COMPLIANCE_OPERATIONS
