from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ReportStatus
from .model import ReportConfig, ReportMetrics


class ReportRepository(Protocol):
    def get_by_id(self, report_id: int) -> Optional[ReportConfig]:
        raise NotImplementedError

    def create(self, report: ReportConfig) -> int:
        raise NotImplementedError

    def save_generation(self, report_id: int, *, metrics: ReportMetrics, generated_at: datetime) -> bool:
        """Store metrics and mark the report as generated."""

        raise NotImplementedError

    def update_status(self, report_id: int, status: ReportStatus) -> bool:
        raise NotImplementedError

    def update_next_run(self, report_id: int, next_run: datetime) -> bool:
        raise NotImplementedError

    def list_due(self, now: datetime) -> Sequence[ReportConfig]:
        """Automated, non-archived reports whose next run is at or before `now`."""

        raise NotImplementedError

    def list_automated(self) -> Sequence[ReportConfig]:
        raise NotImplementedError
