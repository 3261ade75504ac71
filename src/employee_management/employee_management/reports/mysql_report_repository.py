from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import ComplianceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import DailyReport
from .repository import ReportRepository

_SELECT = """
    SELECT r.id, r.employee_id, r.report_date, r.submission_time, r.compliance_status,
           r.report_text, r.created_at, e.name AS employee_name
    FROM reports r
    LEFT JOIN employees e ON e.id = r.employee_id
"""


def _to_report(r: dict) -> DailyReport:
    return DailyReport(
        report_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        report_date=r["report_date"],
        submission_time=r["submission_time"],
        compliance_status=ComplianceStatus(r["compliance_status"]),
        report_text=r.get("report_text") or "",
        created_at=r.get("created_at"),
        employee_name=r.get("employee_name"),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_report(
        self,
        *,
        employee_id: int,
        report_date: date,
        submission_time: datetime,
        compliance_status: ComplianceStatus,
        report_text: str,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO reports(employee_id, report_text, submission_time, report_date, compliance_status)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), report_text, submission_time, report_date, compliance_status.value),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ConflictError("A report for this date has already been submitted.") from e
            raise

    def get_for_employee_and_date(self, *, employee_id: int, report_date: date) -> Optional[DailyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE r.employee_id=%s AND r.report_date=%s",
                (int(employee_id), report_date),
            )
            r = fetchone(cur)
            return _to_report(r) if r else None

    def list_reports(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[ComplianceStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[DailyReport]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("r.employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("r.compliance_status=%s")
            params.append(status.value)
        if date_from is not None:
            clauses.append("r.report_date >= %s")
            params.append(date_from)
        if date_to is not None:
            clauses.append("r.report_date <= %s")
            params.append(date_to)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {build_where(clauses)} ORDER BY r.report_date DESC, r.id DESC LIMIT %s",
                tuple(params + [int(limit)]),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def count_by_status(self, *, employee_id: int) -> Dict[ComplianceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT compliance_status, COUNT(*) AS total
                FROM reports
                WHERE employee_id=%s
                GROUP BY compliance_status
                """,
                (int(employee_id),),
            )
            return {ComplianceStatus(r["compliance_status"]): int(r["total"]) for r in fetchall(cur)}
