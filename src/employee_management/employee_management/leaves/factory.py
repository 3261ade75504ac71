from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import (
    DEFAULT_ADVANCE_NOTICE_HOURS,
    DEFAULT_ANNUAL_LEAVE_DAYS,
    DEFAULT_MONTHLY_CONSECUTIVE_DAYS,
)
from .policies.advance_notice_policy import AdvanceNoticePolicy
from .policies.annual_quota_policy import AnnualQuotaPolicy
from .policies.base import LeavePolicy
from .policies.monthly_cap_policy import MonthlyConsecutiveCapPolicy


@dataclass
class LeavePolicyFactory:
    """Factory Pattern: build the ordered annual-leave policy chain from settings."""

    advance_notice_hours: int = DEFAULT_ADVANCE_NOTICE_HOURS
    monthly_consecutive_days: int = DEFAULT_MONTHLY_CONSECUTIVE_DAYS
    annual_quota_days: int = DEFAULT_ANNUAL_LEAVE_DAYS

    @classmethod
    def from_settings(cls, policy: dict | None) -> "LeavePolicyFactory":
        policy = policy or {}
        return cls(
            advance_notice_hours=int(policy.get("advance_notice_hours", DEFAULT_ADVANCE_NOTICE_HOURS)),
            monthly_consecutive_days=int(policy.get("monthly_consecutive_days", DEFAULT_MONTHLY_CONSECUTIVE_DAYS)),
            annual_quota_days=int(policy.get("annual_quota_days", DEFAULT_ANNUAL_LEAVE_DAYS)),
        )

    def annual_leave_policies(self) -> list[LeavePolicy]:
        # Order matters: the first failing policy decides.
        return [
            AdvanceNoticePolicy(self.advance_notice_hours),
            MonthlyConsecutiveCapPolicy(self.monthly_consecutive_days),
            AnnualQuotaPolicy(self.annual_quota_days),
        ]
