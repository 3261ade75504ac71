from __future__ import annotations

from ...common.datetime_utils import inclusive_days
from ...core.constants import DEFAULT_ANNUAL_LEAVE_DAYS
from .base import PASSED, LeavePolicy, PolicyContext, PolicyResult


class AnnualQuotaPolicy(LeavePolicy):
    """Approved AL days starting in the request's year plus the request must fit the quota."""

    name = "annual_quota"

    def __init__(self, quota_days: int = DEFAULT_ANNUAL_LEAVE_DAYS):
        self.quota_days = int(quota_days)

    def used_days(self, ctx: PolicyContext) -> int:
        year = ctx.start.year
        return sum(i.days for i in ctx.prior_intervals if i.start_date.year == year)

    def check(self, ctx: PolicyContext) -> PolicyResult:
        used = self.used_days(ctx)
        requested = inclusive_days(ctx.start, ctx.end)
        if used + requested > self.quota_days:
            return PolicyResult(
                passed=False,
                reason=f"quota exceeded ({used} used + {requested} requested > {self.quota_days})",
            )
        return PASSED
