from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..compliance.evaluator import ComplianceEvaluator
from ..core.enums import ComplianceStatus
from ..policies.resolver import PolicyResolver
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


class ComplianceHook:
    """Attach derived compliance fields to a record right before it is written.

    Runs on every create and update. If the policy lookup or the evaluation
    fails the write still goes ahead, with the record marked pending.
    """

    def __init__(self, resolver: PolicyResolver, evaluator: Optional[ComplianceEvaluator] = None):
        self._resolver = resolver
        self._evaluator = evaluator or ComplianceEvaluator()

    def apply(self, record: AttendanceRecord) -> AttendanceRecord:
        try:
            policy = self._resolver.resolve_for_squad(record.squad_id)
            result = self._evaluator.evaluate(record.check_in_time, record.check_out_time, policy)
        except Exception:
            logger.exception(
                "Compliance evaluation failed for user %s on %s, storing as pending",
                record.user_id,
                record.work_date,
            )
            return replace(
                record,
                total_hours=0.0,
                compliance_status=ComplianceStatus.PENDING,
                compliance_notes=None,
                late_minutes=0,
                early_checkout_minutes=0,
            )

        return replace(
            record,
            total_hours=result.total_hours,
            compliance_status=result.status,
            compliance_notes=result.notes,
            late_minutes=result.late_minutes,
            early_checkout_minutes=result.early_checkout_minutes,
        )
