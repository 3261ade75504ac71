from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ComplianceStatus


@dataclass(frozen=True)
class DailyReport:
    """Domain entity: one end-of-day report per employee and calendar day."""

    report_id: int
    employee_id: int
    report_date: date
    submission_time: datetime
    compliance_status: ComplianceStatus
    report_text: str
    created_at: Optional[datetime] = None
    employee_name: Optional[str] = None
