from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import add_months
from ..core.constants import SPRINT_LENGTH_DAYS
from ..core.enums import ReportFrequency

_FIXED_STEPS = {
    ReportFrequency.DAILY: timedelta(days=1),
    ReportFrequency.WEEKLY: timedelta(days=7),
    ReportFrequency.SPRINT: timedelta(days=SPRINT_LENGTH_DAYS),
}


def next_run_time(frequency: Optional[ReportFrequency], now: datetime) -> datetime:
    """When an automated report runs next; unknown frequencies run weekly."""

    if frequency == ReportFrequency.MONTHLY:
        return add_months(now, 1)
    return now + _FIXED_STEPS.get(frequency, timedelta(days=7))
