from __future__ import annotations

from datetime import timedelta

from ...common.datetime_utils import end_of_month, inclusive_days
from ...core.constants import DEFAULT_MONTHLY_CONSECUTIVE_DAYS
from .base import PASSED, LeavePolicy, PolicyContext, PolicyResult


class MonthlyConsecutiveCapPolicy(LeavePolicy):
    """No calendar-month segment of the request may exceed `max_days`.

    The interval is cut at month boundaries, so 30th..2nd of the next month
    is two segments, each checked on its own.
    """

    name = "monthly_consecutive_cap"

    def __init__(self, max_days: int = DEFAULT_MONTHLY_CONSECUTIVE_DAYS):
        self.max_days = int(max_days)

    def check(self, ctx: PolicyContext) -> PolicyResult:
        cursor = ctx.start
        while cursor <= ctx.end:
            segment_end = min(ctx.end, end_of_month(cursor))
            if inclusive_days(cursor, segment_end) > self.max_days:
                return PolicyResult(
                    passed=False,
                    reason=f"more than {self.max_days} consecutive days in {cursor:%Y-%m}",
                )
            if segment_end == ctx.end:
                break
            cursor = segment_end + timedelta(days=1)
        return PASSED
