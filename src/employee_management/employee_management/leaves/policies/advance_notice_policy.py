from __future__ import annotations

from datetime import timedelta

from ...common.datetime_utils import start_of_day
from ...core.constants import DEFAULT_ADVANCE_NOTICE_HOURS
from .base import PASSED, LeavePolicy, PolicyContext, PolicyResult


class AdvanceNoticePolicy(LeavePolicy):
    """Start must not be after end, and must begin at least N hours from now."""

    name = "advance_notice"

    def __init__(self, hours: int = DEFAULT_ADVANCE_NOTICE_HOURS):
        self.hours = int(hours)

    def check(self, ctx: PolicyContext) -> PolicyResult:
        if ctx.start > ctx.end:
            return PolicyResult(passed=False, reason="start date is after end date")

        try:
            earliest = ctx.now + timedelta(hours=self.hours)
        except OverflowError:
            return PolicyResult(passed=False, reason=f"less than {self.hours}h notice")
        if start_of_day(ctx.start) < earliest:
            return PolicyResult(passed=False, reason=f"less than {self.hours}h notice")
        return PASSED
