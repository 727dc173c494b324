"""Aggregate attendance rows into report metrics."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ..attendance.model import AttendanceReportRow
from ..core.constants import TOP_SQUADS_LIMIT
from ..core.enums import ComplianceStatus
from .model import ReportMetrics, SquadPerformance

UNKNOWN_SQUAD = "Unknown Squad"


def calculate_metrics(rows: list[AttendanceReportRow], *, start_date: date, end_date: date) -> ReportMetrics:
    total = len(rows)
    compliant = sum(1 for r in rows if r.compliance_status == ComplianceStatus.COMPLIANT)
    total_hours = sum(r.total_hours or 0 for r in rows)

    # Days with no attendance at all, counted over the span between the two dates.
    total_days = (end_date - start_date).days
    attended_days = {r.work_date for r in rows}

    return ReportMetrics(
        total_members=len({r.user_id for r in rows}),
        total_attendance_logs=total,
        compliance_rate=compliant / total if total else 0.0,
        average_working_hours=total_hours / total if total else 0.0,
        absence_days=max(0, total_days - len(attended_days)),
        top_performing_squads=tuple(top_squads(rows)),
    )


def top_squads(rows: Iterable[AttendanceReportRow], *, limit: int = TOP_SQUADS_LIMIT) -> list[SquadPerformance]:
    stats: dict[int, dict] = {}
    for r in rows:
        if r.squad_id is None:
            continue
        s = stats.get(r.squad_id)
        if not s:
            s = {"name": r.squad_name or UNKNOWN_SQUAD, "hours": 0.0, "compliant": 0, "logs": 0}
            stats[r.squad_id] = s
        s["hours"] += r.total_hours or 0
        s["logs"] += 1
        if r.compliance_status == ComplianceStatus.COMPLIANT:
            s["compliant"] += 1

    ranked = [
        SquadPerformance(
            name=s["name"],
            score=s["compliant"] / s["logs"],
            average_hours=s["hours"] / s["logs"],
        )
        for s in stats.values()
    ]
    ranked.sort(key=lambda p: p.score, reverse=True)
    return ranked[:limit]
