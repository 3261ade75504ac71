from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_local_naive(value: datetime) -> datetime:
    """Aware datetimes are converted to local time; naive ones are returned as is."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def coerce_date(value: DateLike) -> Optional[date]:
    """Best-effort conversion to date. Returns None instead of raising.

    The whole string must parse: `2025-03-10` and ISO timestamps such as
    `2025-03-10T08:00:00Z` are accepted, `2025-03-10garbage` is not.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        v = value.strip()
        if not v:
            return None
        try:
            return parse_iso_date(v)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def end_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def inclusive_days(start: date, end: date) -> int:
    """Calendar days in [start, end], both endpoints counted."""
    return (end - start).days + 1


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
