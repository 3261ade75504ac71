from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_ANNUAL_LEAVE_DAYS
from ..core.enums import Role
from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.strip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        count = 0
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
        logger.info("Applied %d schema statements from %s", count, schema_path)
    finally:
        conn.close()


def upsert_employee(
    cur,
    *,
    name: str,
    email: str,
    password: str,
    role: Role,
    position: str,
    team: str,
) -> bool:
    """Create the account if missing. Returns True when a row was inserted."""

    cur.execute("SELECT id FROM employees WHERE email=%s", (email,))
    if cur.fetchone():
        return False
    cur.execute(
        """
        INSERT INTO employees (name, email, password_hash, role, position, team,
                               total_annual_leave, remaining_annual_leave)
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
        """,
        (
            name,
            email,
            generate_password_hash(password),
            role.value,
            position,
            team,
            DEFAULT_ANNUAL_LEAVE_DAYS,
            DEFAULT_ANNUAL_LEAVE_DAYS,
        ),
    )
    return True


def ensure_default_admin(db_config: dict, *, admin: dict) -> None:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        created = upsert_employee(
            cur,
            name=str(admin.get("name", "Super Admin")),
            email=str(admin["email"]).lower(),
            password=str(admin["password"]),
            role=Role.ADMIN,
            position="Administrator",
            team="Management",
        )
        conn.commit()
        if created:
            logger.info("Default admin account created: %s", admin["email"])
        else:
            logger.info("Default admin account already exists: %s", admin["email"])
    finally:
        conn.close()


def ensure_demo_employees(db_config: dict) -> None:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        upsert_employee(
            cur,
            name="Demo Employee",
            email="employee@system.com",
            password="Employee@123",
            role=Role.EMPLOYEE,
            position="Developer",
            team="Engineering",
        )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
