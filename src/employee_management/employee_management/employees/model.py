from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import DEFAULT_ANNUAL_LEAVE_DAYS
from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Plain data object, no DB access. `teams` is stored as a comma separated
    string in the `team` column.
    """

    employee_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    position: Optional[str] = None
    teams: tuple[str, ...] = field(default_factory=tuple)
    total_annual_leave: int = DEFAULT_ANNUAL_LEAVE_DAYS
    remaining_annual_leave: int = DEFAULT_ANNUAL_LEAVE_DAYS
    is_active: bool = True


def split_teams(value) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [str(v) for v in value]
    return tuple(p.strip() for p in parts if p and p.strip())


def join_teams(teams) -> Optional[str]:
    items = split_teams(teams)
    return ",".join(items) if items else None
