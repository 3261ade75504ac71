from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class LeaveType(str, Enum):
    ANNUAL_LEAVE = "AL"
    SICK_LEAVE = "SL"
    CASUAL_LEAVE = "CL"
    UNPAID_LEAVE = "UPL"
    HALF_MORNING_LEAVE = "HML"
    HALF_EVENING_LEAVE = "HEL"

    @property
    def is_half_day(self) -> bool:
        return self in {LeaveType.HALF_MORNING_LEAVE, LeaveType.HALF_EVENING_LEAVE}


class ComplianceStatus(str, Enum):
    """Daily report bucket derived from the submission time of day."""

    ON_TIME = "ON_TIME"
    LATE_FINE = "LATE_FINE"
    HALF_UNPAID_LEAVE = "HALF_UNPAID_LEAVE"
    FULL_UNPAID_LEAVE = "FULL_UNPAID_LEAVE"


class RequestStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
