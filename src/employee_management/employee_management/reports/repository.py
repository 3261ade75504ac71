from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import ComplianceStatus
from .model import DailyReport


class ReportRepository(Protocol):
    def create_report(
        self,
        *,
        employee_id: int,
        report_date: date,
        submission_time: datetime,
        compliance_status: ComplianceStatus,
        report_text: str,
    ) -> int:
        """Raises ConflictError when the employee already reported that day."""

        raise NotImplementedError

    def get_for_employee_and_date(self, *, employee_id: int, report_date: date) -> Optional[DailyReport]:
        raise NotImplementedError

    def list_reports(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[ComplianceStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[DailyReport]:
        """Newest report date first, joined with the employee name."""

        raise NotImplementedError

    def count_by_status(self, *, employee_id: int) -> Dict[ComplianceStatus, int]:
        raise NotImplementedError
