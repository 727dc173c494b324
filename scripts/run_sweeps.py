"""Run the scheduled jobs without going through HTTP.

    python scripts/run_sweeps.py reminders
    python scripts/run_sweeps.py reports
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.squad_attendance.squad_attendance.container import build_container

logger = logging.getLogger("scripts.run_sweeps")


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if len(argv) != 1 or argv[0] not in {"reminders", "reports"}:
        logger.error("usage: run_sweeps.py reminders|reports")
        return 2

    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        policy_defaults=getattr(settings, "ATTENDANCE_POLICY_DEFAULTS", None),
        reminder_deduplicate=bool(getattr(settings, "REMINDER_DEDUPLICATE", False)),
    )

    if argv[0] == "reminders":
        result = container.checkout_reminder_sweep.run()
        logger.info(result.message)
    else:
        result = container.report_service.run_scheduled()
        logger.info("Processed %d scheduled reports, %d failed", result.processed_reports, len(result.failures))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
