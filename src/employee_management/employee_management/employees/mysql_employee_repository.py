from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, join_teams, split_teams
from .repository import EmployeeRepository

_COLUMNS = """
    id, name, email, password_hash, role, position, team,
    total_annual_leave, remaining_annual_leave, is_active
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        position=row.get("position"),
        teams=split_teams(row.get("team")),
        total_annual_leave=int(row.get("total_annual_leave") or 0),
        remaining_annual_leave=int(row.get("remaining_annual_leave") or 0),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY id DESC")
            return [_to_employee(r) for r in fetchall(cur)]

    def create_employee(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        position: Optional[str],
        teams: tuple[str, ...],
        total_annual_leave: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, email, password_hash, role, position, team,
                                      total_annual_leave, remaining_annual_leave, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (
                    name,
                    email,
                    password_hash,
                    role.value,
                    position,
                    join_teams(teams),
                    int(total_annual_leave),
                    int(total_annual_leave),
                ),
            )
            return int(cur.lastrowid)

    def update_employee(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        position: Optional[str] = None,
        teams: Optional[tuple[str, ...]] = None,
        password_hash: Optional[str] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[object] = []
        for column, value in (
            ("name", name),
            ("email", email),
            ("position", position),
            ("password_hash", password_hash),
        ):
            if value is not None:
                sets.append(f"{column}=%s")
                params.append(value)
        if teams is not None:
            sets.append("team=%s")
            params.append(join_teams(teams))
        if not sets:
            return False

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {', '.join(sets)} WHERE id=%s",
                tuple(params + [int(employee_id)]),
            )
            return cur.rowcount > 0

    def set_remaining_annual_leave(self, employee_id: int, remaining: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET remaining_annual_leave=%s WHERE id=%s",
                (int(remaining), int(employee_id)),
            )
            return cur.rowcount > 0

    def delete_with_history(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leaves WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM reports WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM employees WHERE id=%s", (int(employee_id),))
            return cur.rowcount > 0
