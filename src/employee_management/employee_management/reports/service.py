from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import DateLike, coerce_date, now_local
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import ComplianceStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .classifier import ComplianceClassifier
from .model import DailyReport
from .repository import ReportRepository

logger = logging.getLogger(__name__)


def to_dict(report: DailyReport) -> dict:
    return {
        "id": report.report_id,
        "employee_id": report.employee_id,
        "employee_name": report.employee_name,
        "report_date": report.report_date.isoformat(),
        "submission_time": report.submission_time.isoformat(),
        "compliance_status": report.compliance_status.value,
        "report_text": report.report_text,
    }


def _optional_date(value: DateLike, field: str) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    parsed = coerce_date(value)
    if parsed is None:
        raise ValidationError(f"{field} must be a date (YYYY-MM-DD)")
    return parsed


def _optional_status(value: Optional[str]) -> Optional[ComplianceStatus]:
    if not value:
        return None
    try:
        return ComplianceStatus(value.upper())
    except ValueError:
        raise ValidationError(f"Invalid compliance status: {value}")


class ReportService:
    def __init__(self, reports: ReportRepository, *, classifier: Optional[ComplianceClassifier] = None):
        self._reports = reports
        self._classifier = classifier or ComplianceClassifier()

    def submit_report(self, *, employee_id: int, report_text: str, now: Optional[datetime] = None) -> dict:
        """Store today's report; the compliance bucket comes from the server clock."""

        text = (report_text or "").strip()
        if not text:
            raise ValidationError("Report text is required")

        submitted_at = (now or now_local()).replace(microsecond=0)
        report_date = submitted_at.date()
        if self._reports.get_for_employee_and_date(employee_id=int(employee_id), report_date=report_date):
            raise ConflictError("A report for this date has already been submitted.")

        status = self._classifier.classify(submitted_at)
        report_id = self._reports.create_report(
            employee_id=int(employee_id),
            report_date=report_date,
            submission_time=submitted_at,
            compliance_status=status,
            report_text=text,
        )
        logger.info("Report %s from employee %s classified %s", report_id, employee_id, status.value)
        return {
            "id": report_id,
            "report_date": report_date.isoformat(),
            "submission_time": submitted_at.isoformat(),
            "compliance_status": status.value,
        }

    def list_all(
        self,
        *,
        current_role: Role,
        employee_id: Optional[int] = None,
        status: Optional[str] = None,
        date_from: DateLike = None,
        date_to: DateLike = None,
    ) -> list[dict]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Forbidden: admin only.")
        reports = self._reports.list_reports(
            employee_id=employee_id,
            status=_optional_status(status),
            date_from=_optional_date(date_from, "from"),
            date_to=_optional_date(date_to, "to"),
            limit=DEFAULT_LIST_LIMIT,
        )
        return [to_dict(r) for r in reports]

    def list_mine(
        self,
        *,
        employee_id: int,
        status: Optional[str] = None,
        date_from: DateLike = None,
        date_to: DateLike = None,
    ) -> list[dict]:
        reports = self._reports.list_reports(
            employee_id=int(employee_id),
            status=_optional_status(status),
            date_from=_optional_date(date_from, "from"),
            date_to=_optional_date(date_to, "to"),
            limit=DEFAULT_LIST_LIMIT,
        )
        return [to_dict(r) for r in reports]

    def get_today(self, *, employee_id: int, now: Optional[datetime] = None) -> dict:
        today = (now or now_local()).date()
        report = self._reports.get_for_employee_and_date(employee_id=int(employee_id), report_date=today)
        if not report:
            raise NotFoundError("No report submitted today.")
        return to_dict(report)

    def report_stats(self, *, employee_id: int) -> dict:
        counts = self._reports.count_by_status(employee_id=int(employee_id))
        stats = {status.value: int(counts.get(status, 0)) for status in ComplianceStatus}
        stats["total_reports"] = sum(stats.values())
        return stats
