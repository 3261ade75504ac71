from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create_employee(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        position: Optional[str],
        teams: tuple[str, ...],
        total_annual_leave: int,
    ) -> int:
        raise NotImplementedError

    def update_employee(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        position: Optional[str] = None,
        teams: Optional[tuple[str, ...]] = None,
        password_hash: Optional[str] = None,
    ) -> bool:
        """Only non-None fields are written."""

        raise NotImplementedError

    def set_remaining_annual_leave(self, employee_id: int, remaining: int) -> bool:
        raise NotImplementedError

    def delete_with_history(self, employee_id: int) -> bool:
        """Delete the employee together with their leaves and reports."""

        raise NotImplementedError
