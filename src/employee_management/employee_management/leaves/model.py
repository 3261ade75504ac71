from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_days
from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveInterval:
    """Inclusive date range of an already approved leave."""

    start_date: date
    end_date: date

    @property
    def days(self) -> int:
        return inclusive_days(self.start_date, self.end_date)


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: leave request.

    `leave_type` is the effective type recorded after evaluation and may
    differ from `requested_leave_type` (AL downgraded to UPL).
    """

    request_id: int
    employee_id: int
    leave_type: LeaveType
    requested_leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: RequestStatus
    created_at: datetime
    supporting_document_url: Optional[str] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None
    employee_name: Optional[str] = None

    @property
    def days(self) -> int:
        return inclusive_days(self.start_date, self.end_date)
