from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_ANNUAL_LEAVE_DAYS, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import Employee, split_teams
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionEmployee:
    """What we store into the Flask session after login."""

    employee_id: int
    name: str
    email: str
    role: Role


def to_public(employee: Employee) -> dict:
    """JSON view of an employee (never includes the password hash)."""

    return {
        "id": employee.employee_id,
        "name": employee.name,
        "email": employee.email,
        "role": employee.role.value,
        "position": employee.position,
        "teams": list(employee.teams),
        "total_annual_leave": employee.total_annual_leave,
        "remaining_annual_leave": employee.remaining_annual_leave,
        "is_active": employee.is_active,
    }


class AuthService:
    """Use case: authenticate employee (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, email: str, password: str) -> SessionEmployee:
        employee = self._employees.get_by_email((email or "").strip().lower())
        if not employee or not employee.is_active:
            raise AuthenticationError("Invalid credentials.")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials.")

        logger.info("Employee %s logged in", employee.employee_id)
        return SessionEmployee(
            employee_id=employee.employee_id,
            name=employee.name,
            email=employee.email,
            role=employee.role,
        )


class EmployeeService:
    """Use case: manage employees (admin, or self for read/update)."""

    def __init__(self, employees: EmployeeRepository, *, annual_leave_days: int = DEFAULT_ANNUAL_LEAVE_DAYS):
        self._employees = employees
        self._annual_leave_days = int(annual_leave_days)

    @staticmethod
    def _require_admin_or_self(current_role: Role, current_id: int, employee_id: int) -> None:
        if current_role != Role.ADMIN and int(current_id) != int(employee_id):
            raise AuthorizationError("Forbidden: you cannot access other employees' records.")

    def _require_existing(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found.")
        return employee

    def list_employees(self, *, current_role: Role) -> list[dict]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Forbidden: admin only.")
        return [to_public(e) for e in self._employees.list_all()]

    def get_employee(self, *, current_role: Role, current_id: int, employee_id: int) -> dict:
        self._require_admin_or_self(current_role, current_id, employee_id)
        return to_public(self._require_existing(employee_id))

    def create_employee(
        self,
        *,
        current_role: Role,
        name: str,
        email: str,
        password: str,
        role: str | Role = Role.EMPLOYEE,
        position: Optional[str] = None,
        teams=None,
    ) -> dict:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Forbidden: admin only.")

        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        try:
            role = Role(role or Role.EMPLOYEE)
        except ValueError:
            raise ValidationError(f"Invalid role: {role}")

        if self._employees.get_by_email(email):
            raise ConflictError("An employee with this email already exists.")

        employee_id = self._employees.create_employee(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            position=(position or "").strip() or None,
            teams=split_teams(teams),
            total_annual_leave=self._annual_leave_days,
        )
        logger.info("Created employee %s (%s)", employee_id, role.value)
        return to_public(self._require_existing(employee_id))

    def update_employee(
        self,
        *,
        current_role: Role,
        current_id: int,
        employee_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        position: Optional[str] = None,
        teams=None,
    ) -> dict:
        self._require_admin_or_self(current_role, current_id, employee_id)
        self._require_existing(employee_id)

        changes: dict = {}
        if name and name.strip():
            changes["name"] = name.strip()
        if email and email.strip():
            email = require_email(email)
            other = self._employees.get_by_email(email)
            if other and other.employee_id != int(employee_id):
                raise ConflictError("Another employee with this email already exists.")
            changes["email"] = email
        if position and position.strip():
            changes["position"] = position.strip()
        if teams is not None:
            changes["teams"] = split_teams(teams)
        if password and password.strip():
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            changes["password_hash"] = generate_password_hash(password)

        if not changes:
            raise ValidationError("No fields provided for update.")

        self._employees.update_employee(int(employee_id), **changes)
        logger.info("Updated employee %s fields=%s", employee_id, sorted(changes))
        return to_public(self._require_existing(employee_id))

    def delete_employee(self, *, current_role: Role, current_id: int, employee_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Forbidden: admin only.")
        if int(current_id) == int(employee_id):
            raise ValidationError("You cannot delete your own account.")

        self._require_existing(employee_id)
        if not self._employees.delete_with_history(int(employee_id)):
            raise NotFoundError("Employee not found.")
        logger.info("Deleted employee %s with leave and report history", employee_id)
