from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json
from ..policies.model import AttendanceRules
from .model import Squad
from .repository import SquadRepository

_SELECT = """
    SELECT squad_id, name, description, lead_id, project, time_zone, workdays, active_sprint_id,
           min_work_hours, standard_check_in, standard_check_out,
           late_threshold_minutes, early_checkout_threshold_minutes, flexible_hours
    FROM squads
"""


class MySQLSquadRepository(SquadRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, squad_id: int) -> Optional[Squad]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE squad_id=%s", (int(squad_id),))
            r = fetchone(cur)
            return self._to_squad(r) if r else None

    def list_all(self) -> Sequence[Squad]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY name ASC")
            return [self._to_squad(r) for r in fetchall(cur)]

    @staticmethod
    def _to_squad(r: dict) -> Squad:
        flexible = r.get("flexible_hours")
        return Squad(
            squad_id=int(r["squad_id"]),
            name=r["name"],
            description=r.get("description"),
            lead_id=r.get("lead_id"),
            project=r.get("project"),
            time_zone=r.get("time_zone") or "UTC",
            workdays=tuple(load_json(r.get("workdays")) or ()),
            active_sprint_id=r.get("active_sprint_id"),
            attendance_rules=AttendanceRules(
                minimum_work_hours=float(r["min_work_hours"]) if r.get("min_work_hours") is not None else None,
                standard_check_in_time=r.get("standard_check_in"),
                standard_check_out_time=r.get("standard_check_out"),
                late_threshold_minutes=r.get("late_threshold_minutes"),
                early_checkout_threshold_minutes=r.get("early_checkout_threshold_minutes"),
                flexible_hours=bool(flexible) if flexible is not None else None,
            ),
        )
