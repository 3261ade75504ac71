from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..model import LeaveInterval


@dataclass(frozen=True)
class PolicyContext:
    start: date
    end: date
    now: datetime
    prior_intervals: Sequence[LeaveInterval] = ()


@dataclass(frozen=True)
class PolicyResult:
    passed: bool
    reason: Optional[str] = None


PASSED = PolicyResult(passed=True)


class LeavePolicy(ABC):
    """Strategy Pattern: one annual-leave eligibility rule."""

    name: str = "policy"

    @abstractmethod
    def check(self, ctx: PolicyContext) -> PolicyResult:
        raise NotImplementedError
