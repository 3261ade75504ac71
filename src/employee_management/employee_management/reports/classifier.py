"""Daily report compliance classification.

The bucket depends only on the time of day of the submission instant. Each
cutoff is inclusive: a submission exactly at 09:30:00 is still on time,
09:30:01 is not.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional, Sequence, Union

from ..core.constants import HALF_UNPAID_CUTOFF, LATE_FINE_CUTOFF, ON_TIME_CUTOFF
from ..core.enums import ComplianceStatus


def _parse_cutoff(value: Union[str, time]) -> time:
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        return datetime.strptime(value.strip(), "%H:%M:%S").time()


@dataclass(frozen=True)
class ComplianceCutoffs:
    on_time: time = ON_TIME_CUTOFF
    late_fine: time = LATE_FINE_CUTOFF
    half_unpaid: time = HALF_UNPAID_CUTOFF

    def __post_init__(self):
        if not (self.on_time < self.late_fine < self.half_unpaid):
            raise ValueError("Compliance cutoffs must be strictly increasing")

    @classmethod
    def from_strings(cls, values: Optional[Sequence[Union[str, time]]]) -> "ComplianceCutoffs":
        if not values:
            return cls()
        if len(values) != 3:
            raise ValueError("Expected exactly three compliance cutoffs")
        on_time, late_fine, half_unpaid = (_parse_cutoff(v) for v in values)
        return cls(on_time=on_time, late_fine=late_fine, half_unpaid=half_unpaid)


class ComplianceClassifier:
    def __init__(self, cutoffs: Optional[ComplianceCutoffs] = None):
        self.cutoffs = cutoffs or ComplianceCutoffs()

    def classify(self, submitted_at: Union[datetime, time]) -> ComplianceStatus:
        t = submitted_at.time() if isinstance(submitted_at, datetime) else submitted_at
        # Microseconds are ignored so 09:30:00.5 is still 09:30:00.
        t = t.replace(microsecond=0, tzinfo=None)

        if t <= self.cutoffs.on_time:
            return ComplianceStatus.ON_TIME
        if t <= self.cutoffs.late_fine:
            return ComplianceStatus.LATE_FINE
        if t <= self.cutoffs.half_unpaid:
            return ComplianceStatus.HALF_UNPAID_LEAVE
        return ComplianceStatus.FULL_UNPAID_LEAVE


def classify_report_submission(
    timestamp: Union[datetime, time], cutoffs: Optional[ComplianceCutoffs] = None
) -> ComplianceStatus:
    return ComplianceClassifier(cutoffs).classify(timestamp)
