from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import LeaveInterval, LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT l.id, l.employee_id, l.leave_type, l.requested_leave_type,
           l.start_date, l.end_date, l.reason, l.status, l.created_at,
           l.supporting_document_url, l.decided_by, l.decided_at, l.admin_note,
           e.name AS employee_name
    FROM leaves l
    LEFT JOIN employees e ON e.id = l.employee_id
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        requested_leave_type=LeaveType(r.get("requested_leave_type") or r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason") or "",
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        supporting_document_url=r.get("supporting_document_url"),
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
        admin_note=r.get("admin_note"),
        employee_name=r.get("employee_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        requested_leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        supporting_document_url: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(employee_id, leave_type, requested_leave_type, start_date, end_date,
                                   reason, status, supporting_document_url)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type.value,
                    requested_leave_type.value,
                    start_date,
                    end_date,
                    reason,
                    RequestStatus.PENDING.value,
                    supporting_document_url,
                ),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def get_by_document_url(self, *, url: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.supporting_document_url=%s LIMIT 1", (url,))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_leaves(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[LeaveRequest]:
        clauses: list[str] = []
        params: list[object] = []

        if status is not None:
            clauses.append("l.status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("l.employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {build_where(clauses)} ORDER BY l.created_at DESC, l.id DESC LIMIT %s",
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_approved_annual_intervals(self, *, employee_id: int, year: int) -> Sequence[LeaveInterval]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT start_date, end_date
                FROM leaves
                WHERE employee_id=%s AND leave_type=%s AND status=%s
                  AND start_date BETWEEN %s AND %s
                """,
                (
                    int(employee_id),
                    LeaveType.ANNUAL_LEAVE.value,
                    RequestStatus.APPROVED.value,
                    date(int(year), 1, 1),
                    date(int(year), 12, 31),
                ),
            )
            return [LeaveInterval(start_date=r["start_date"], end_date=r["end_date"]) for r in fetchall(cur)]

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        leave_type: Optional[LeaveType] = None,
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, leave_type=COALESCE(%s, leave_type),
                    decided_by=%s, decided_at=NOW(), admin_note=%s
                WHERE id=%s AND status=%s
                """,
                (
                    status.value,
                    leave_type.value if leave_type else None,
                    int(decided_by),
                    admin_note,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
