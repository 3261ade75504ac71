"""Annual-leave eligibility rule engine.

Only Annual Leave requests are evaluated. Any failing policy downgrades the
request to Unpaid Leave instead of rejecting it; every other leave type is
returned unchanged. The evaluator never raises for malformed dates: they
count as a failed date check and downgrade as well.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import DateLike, coerce_date, to_local_naive
from ..core.enums import LeaveType
from .factory import LeavePolicyFactory
from .model import LeaveInterval
from .policies.base import LeavePolicy, PolicyContext

logger = logging.getLogger(__name__)

LeaveTypeLike = Union[LeaveType, str]


@dataclass(frozen=True)
class EligibilityDecision:
    requested_type: LeaveTypeLike
    effective_type: LeaveTypeLike
    failed_policy: Optional[str] = None
    reason: Optional[str] = None

    @property
    def downgraded(self) -> bool:
        return self.effective_type != self.requested_type


def _as_leave_type(value: LeaveTypeLike) -> Optional[LeaveType]:
    try:
        return LeaveType(value)
    except ValueError:
        return None


class LeaveEligibilityEvaluator:
    def __init__(self, policies: Optional[Sequence[LeavePolicy]] = None):
        self._policies = list(policies) if policies is not None else LeavePolicyFactory().annual_leave_policies()

    @property
    def policies(self) -> Sequence[LeavePolicy]:
        return tuple(self._policies)

    def decide(
        self,
        *,
        leave_type: LeaveTypeLike,
        start_date: DateLike,
        end_date: DateLike,
        now: datetime,
        prior_intervals: Iterable[LeaveInterval] = (),
    ) -> EligibilityDecision:
        if _as_leave_type(leave_type) != LeaveType.ANNUAL_LEAVE:
            return EligibilityDecision(requested_type=leave_type, effective_type=leave_type)

        requested = LeaveType.ANNUAL_LEAVE
        start = coerce_date(start_date)
        end = coerce_date(end_date)
        if start is None or end is None:
            return EligibilityDecision(
                requested_type=requested,
                effective_type=LeaveType.UNPAID_LEAVE,
                failed_policy="date_sanity",
                reason="start or end date could not be parsed",
            )

        ctx = PolicyContext(start=start, end=end, now=to_local_naive(now), prior_intervals=tuple(prior_intervals))
        for policy in self._policies:
            result = policy.check(ctx)
            if not result.passed:
                return EligibilityDecision(
                    requested_type=requested,
                    effective_type=LeaveType.UNPAID_LEAVE,
                    failed_policy=policy.name,
                    reason=result.reason,
                )

        return EligibilityDecision(requested_type=requested, effective_type=requested)

    def evaluate(
        self,
        *,
        leave_type: LeaveTypeLike,
        start_date: DateLike,
        end_date: DateLike,
        now: datetime,
        prior_intervals: Iterable[LeaveInterval] = (),
    ) -> LeaveTypeLike:
        return self.decide(
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            now=now,
            prior_intervals=prior_intervals,
        ).effective_type


def evaluate_leave_eligibility(
    leave_type: LeaveTypeLike,
    start_date: DateLike,
    end_date: DateLike,
    employee_id: int,
    now: datetime,
    prior_approved_annual_intervals: Iterable[LeaveInterval] = (),
    *,
    evaluator: Optional[LeaveEligibilityEvaluator] = None,
) -> LeaveTypeLike:
    """Effective leave type for a request, given the employee's approved AL history."""

    decision = (evaluator or LeaveEligibilityEvaluator()).decide(
        leave_type=leave_type,
        start_date=start_date,
        end_date=end_date,
        now=now,
        prior_intervals=prior_approved_annual_intervals,
    )
    if decision.downgraded:
        logger.info(
            "Employee %s: %s downgraded to %s by %s (%s)",
            employee_id,
            decision.requested_type,
            decision.effective_type,
            decision.failed_policy,
            decision.reason,
        )
    return decision.effective_type
