from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType, RequestStatus
from .model import LeaveInterval, LeaveRequest


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def get_by_document_url(self, *, url: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leaves(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[LeaveRequest]:
        """Newest first, joined with the employee name."""

        raise NotImplementedError

    def list_approved_annual_intervals(self, *, employee_id: int, year: int) -> Sequence[LeaveInterval]:
        """Approved AL leaves of the employee whose start date lies in `year`."""

        raise NotImplementedError

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        leave_type: Optional[LeaveType] = None,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Only PENDING requests transition; returns False otherwise."""

        raise NotImplementedError
