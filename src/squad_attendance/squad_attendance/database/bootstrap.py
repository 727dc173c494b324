"""Schema/seed helpers used by create_app and the scripts/ entry points."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_SQUAD = "Platform"

# (name, email, password, role)
DEMO_USERS = (
    ("Admin Demo", "admin@example.com", "admin123", "admin"),
    ("Lead Demo", "lead@example.com", "lead123", "squad_lead"),
    ("Member Demo", "member@example.com", "member123", "member"),
)


@contextmanager
def _connection(db_config: dict, *, with_database: bool = True):
    cfg = DBConfig.from_dict(db_config)
    kwargs = dict(host=cfg.host, port=cfg.port, user=cfg.user, password=cfg.password, use_pure=True)
    if with_database:
        kwargs["database"] = cfg.database
    conn = mysql.connector.connect(**kwargs)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # The target database name comes from DB_CONFIG, not from the file.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    return re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings; `--` comment lines are dropped."""

    buf: list[str] = []
    quote = None
    escaped = False

    for line in sql.splitlines(keepends=True):
        if quote is None and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif quote:
                if ch == quote:
                    quote = None
            elif ch in ("'", '"'):
                quote = ch
            elif ch == ";":
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> int:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    count = 0
    with _connection(db_config) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    return count


def ensure_database_exists(db_config: dict) -> None:
    name = DBConfig.from_dict(db_config).database
    with _connection(db_config, with_database=False) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.info("Applied %d schema statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_script(db_config, seed_path)
    logger.info("Applied %d seed statements from %s", count, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) the demo accounts and make the lead own the demo squad."""

    with _connection(db_config) as conn:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT squad_id FROM squads WHERE name=%s", (DEMO_SQUAD,))
        row = cur.fetchone()
        if not row:
            raise RuntimeError(f"Missing squads row for name={DEMO_SQUAD}; run the seed first")
        squad_id = int(row["squad_id"])

        for name, email, password, role in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    "UPDATE users SET name=%s, password_hash=%s, role=%s, squad_id=%s, is_active=1 WHERE email=%s",
                    (name, password_hash, role, squad_id, email),
                )
            else:
                cur.execute(
                    "INSERT INTO users (name, email, password_hash, role, squad_id) VALUES (%s, %s, %s, %s, %s)",
                    (name, email, password_hash, role, squad_id),
                )

        cur.execute(
            "UPDATE squads SET lead_id=(SELECT user_id FROM users WHERE email=%s) WHERE squad_id=%s",
            ("lead@example.com", squad_id),
        )


def list_tables(db_config: dict) -> list[str]:
    with _connection(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
