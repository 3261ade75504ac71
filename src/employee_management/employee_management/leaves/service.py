from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Iterable, Optional

from werkzeug.datastructures import FileStorage

from ..common.datetime_utils import DateLike, coerce_date, now_local
from ..core.constants import DEFAULT_ANNUAL_LEAVE_DAYS, DEFAULT_LIST_LIMIT, HALF_DAY_LEAVE_WEIGHT
from ..core.enums import LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .evaluator import LeaveEligibilityEvaluator
from .model import LeaveRequest
from .repository import LeaveRepository
from .uploads import UploadStore

logger = logging.getLogger(__name__)


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def to_dict(leave: LeaveRequest) -> dict:
    return {
        "id": leave.request_id,
        "employee_id": leave.employee_id,
        "employee_name": leave.employee_name,
        "leave_type": leave.leave_type.value,
        "requested_leave_type": leave.requested_leave_type.value,
        "start_date": _iso(leave.start_date),
        "end_date": _iso(leave.end_date),
        "days": leave.days,
        "reason": leave.reason,
        "status": leave.status.value,
        "supporting_document_url": leave.supporting_document_url,
        "created_at": _iso(leave.created_at),
        "decided_by": leave.decided_by,
        "decided_at": _iso(leave.decided_at),
        "admin_note": leave.admin_note or "",
    }


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        *,
        evaluator: Optional[LeaveEligibilityEvaluator] = None,
        accepted_types: Optional[Iterable[LeaveType | str]] = None,
        annual_leave_days: int = DEFAULT_ANNUAL_LEAVE_DAYS,
        uploads: Optional[UploadStore] = None,
    ):
        self._leaves = leaves
        self._employees = employees
        self._evaluator = evaluator or LeaveEligibilityEvaluator()
        self._accepted_types = frozenset(LeaveType(t) for t in (accepted_types or list(LeaveType)))
        self._annual_leave_days = int(annual_leave_days)
        self._uploads = uploads

        # Prior-quota read and insert must not interleave for one employee.
        # One lock per employee id, kept for the life of the service (bounded by headcount).
        self._locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, employee_id: int) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(int(employee_id), threading.Lock())

    def _parse_leave_type(self, value, *, accepted_only: bool) -> LeaveType:
        try:
            leave_type = LeaveType(value)
        except ValueError:
            raise ValidationError(f"Invalid leave type: {value}")
        if accepted_only and leave_type not in self._accepted_types:
            raise ValidationError(f"Invalid leave type: {value}")
        return leave_type

    def submit_leave(
        self,
        *,
        employee_id: int,
        leave_type: str | LeaveType,
        start_date: DateLike,
        end_date: DateLike,
        reason: str = "",
        document: Optional[FileStorage] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        now = now or now_local()
        requested = self._parse_leave_type(leave_type, accepted_only=True)

        start = coerce_date(start_date)
        end = coerce_date(end_date)
        if start is None or end is None:
            raise ValidationError("start_date and end_date must be dates (YYYY-MM-DD)")
        # Inverted AL ranges are downgraded by the evaluator rather than refused.
        if end < start and requested != LeaveType.ANNUAL_LEAVE:
            raise ValidationError("end_date must be on or after start_date")

        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found.")

        with self._lock_for(employee_id):
            prior = []
            if requested == LeaveType.ANNUAL_LEAVE:
                prior = self._leaves.list_approved_annual_intervals(employee_id=int(employee_id), year=start.year)

            decision = self._evaluator.decide(
                leave_type=requested,
                start_date=start,
                end_date=end,
                now=now,
                prior_intervals=prior,
            )
            effective = LeaveType(decision.effective_type)
            if decision.downgraded:
                logger.info(
                    "Leave for employee %s downgraded %s -> %s by %s (%s)",
                    employee_id,
                    requested.value,
                    effective.value,
                    decision.failed_policy,
                    decision.reason,
                )

            document_url = None
            if document is not None and document.filename:
                if self._uploads is None:
                    raise ValidationError("File uploads are not enabled")
                document_url = self._uploads.save(document, now=now)

            try:
                request_id = self._leaves.create_leave(
                    employee_id=int(employee_id),
                    leave_type=effective,
                    requested_leave_type=requested,
                    start_date=start,
                    end_date=end,
                    reason=(reason or "").strip(),
                    supporting_document_url=document_url,
                )
            except Exception:
                if document_url:
                    self._uploads.discard(document_url)
                raise

        return {
            "id": request_id,
            "requested_leave_type": requested.value,
            "effective_leave_type": effective.value,
            "downgraded": decision.downgraded,
            "reason": decision.reason,
            "supporting_document_url": document_url,
        }

    def list_all(self, *, current_role: Role, status: Optional[str] = None) -> list[dict]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Forbidden: admin only.")
        status_filter = None
        if status:
            try:
                status_filter = RequestStatus(status.upper())
            except ValueError:
                raise ValidationError(f"Invalid status: {status}")
        return [to_dict(r) for r in self._leaves.list_leaves(status=status_filter, limit=DEFAULT_LIST_LIMIT)]

    def list_mine(self, *, employee_id: int) -> list[dict]:
        return [to_dict(r) for r in self._leaves.list_leaves(employee_id=int(employee_id), limit=DEFAULT_LIST_LIMIT)]

    def get_leave(self, *, current_role: Role, current_id: int, request_id: int) -> dict:
        leave = self._leaves.get_leave(request_id=int(request_id))
        if not leave:
            raise NotFoundError("Leave not found.")
        if current_role != Role.ADMIN and leave.employee_id != int(current_id):
            raise AuthorizationError("Forbidden: you cannot view other employees' leaves.")
        return to_dict(leave)

    def decide_leave(
        self,
        *,
        current_role: Role,
        admin_id: int,
        request_id: int,
        status: str,
        leave_type: Optional[str] = None,
        admin_note: str = "",
    ) -> dict:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Forbidden: admin only.")

        try:
            new_status = RequestStatus((status or "").upper())
        except ValueError:
            raise ValidationError(f"Invalid status: {status}")
        if new_status == RequestStatus.PENDING:
            raise ValidationError("Status must be APPROVED or REJECTED")
        override = self._parse_leave_type(leave_type, accepted_only=False) if leave_type else None

        leave = self._leaves.get_leave(request_id=int(request_id))
        if not leave:
            raise NotFoundError("Leave not found.")
        if leave.status != RequestStatus.PENDING:
            raise ConflictError("Leave request has already been decided.")

        ok = self._leaves.decide_leave(
            request_id=int(request_id),
            status=new_status,
            decided_by=int(admin_id),
            leave_type=override,
            admin_note=(admin_note or "").strip() or None,
        )
        if not ok:
            raise ConflictError("Leave request has already been decided.")

        effective = override or leave.leave_type
        logger.info("Leave %s %s by admin %s as %s", request_id, new_status.value, admin_id, effective.value)
        if new_status == RequestStatus.APPROVED and effective == LeaveType.ANNUAL_LEAVE:
            self._deduct_annual_leave(leave.employee_id, leave.days)

        return self.get_leave(current_role=current_role, current_id=admin_id, request_id=request_id)

    def _deduct_annual_leave(self, employee_id: int, days: int) -> None:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            logger.warning("Approved AL for missing employee %s; balance not updated", employee_id)
            return
        remaining = max(0, employee.remaining_annual_leave - max(days, 0))
        self._employees.set_remaining_annual_leave(employee_id, remaining)
        logger.info("Deducted %s AL days from employee %s, remaining %s", days, employee_id, remaining)

    def leave_stats(self, *, employee_id: int, now: Optional[datetime] = None) -> dict:
        """Annual leave usage for the current calendar year.

        `used_al` and `remaining_al` are derived from approved history:
        AL counts its inclusive days, half-day leaves count 0.5 each.
        `total_annual_leave` and `remaining_annual_leave` are the balance
        stored on the employee record, which is what approvals deduct from
        and the figure to trust for entitlement.
        """

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found.")

        year = (now or now_local()).year
        used = 0.0
        for leave in self._leaves.list_leaves(
            status=RequestStatus.APPROVED, employee_id=int(employee_id), limit=DEFAULT_LIST_LIMIT
        ):
            if leave.start_date.year != year:
                continue
            if leave.leave_type == LeaveType.ANNUAL_LEAVE:
                used += leave.days
            elif leave.leave_type.is_half_day:
                used += HALF_DAY_LEAVE_WEIGHT

        return {
            "total_al": self._annual_leave_days,
            "used_al": used,
            "remaining_al": max(0.0, self._annual_leave_days - used),
            "total_annual_leave": employee.total_annual_leave,
            "remaining_annual_leave": employee.remaining_annual_leave,
        }

    def document_for(self, *, current_role: Role, current_id: int, filename: str) -> str:
        """Stored file name of a supporting document the caller may read."""

        if self._uploads is None:
            raise NotFoundError("Document not found.")
        leave = self._leaves.get_by_document_url(url=self._uploads.url_for(filename))
        if not leave:
            raise NotFoundError("Document not found.")
        if current_role != Role.ADMIN and leave.employee_id != int(current_id):
            raise AuthorizationError("Forbidden: you cannot view other employees' documents.")
        return filename
