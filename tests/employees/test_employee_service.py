import pytest

from src.employee_management.employee_management.core.enums import Role
from src.employee_management.employee_management.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.employee_management.employee_management.employees.service import AuthService, EmployeeService

ADMIN_ID = 1
EMPLOYEE_ID = 2


@pytest.fixture
def service(employees_repo):
    return EmployeeService(employees_repo)


def test_authenticate_ok(employees_repo):
    s_emp = AuthService(employees_repo).authenticate(" Employee@System.com ", "Employee@123")

    assert s_emp.employee_id == EMPLOYEE_ID
    assert s_emp.role == Role.EMPLOYEE


def test_authenticate_wrong_password(employees_repo):
    with pytest.raises(AuthenticationError):
        AuthService(employees_repo).authenticate("employee@system.com", "nope")


def test_authenticate_inactive_employee(employees_repo):
    employees_repo.add(name="Gone", email="gone@system.com", password="secret1", is_active=False)

    with pytest.raises(AuthenticationError):
        AuthService(employees_repo).authenticate("gone@system.com", "secret1")


def test_authenticate_with_placeholder_hash(employees_repo):
    employees_repo.add(name="Legacy", email="legacy@system.com", password="", password_hash="CHANGE_ME")

    with pytest.raises(AuthenticationError):
        AuthService(employees_repo).authenticate("legacy@system.com", "CHANGE_ME")


def test_create_employee(service):
    created = service.create_employee(
        current_role=Role.ADMIN,
        name="  Lan Pham ",
        email="Lan@Example.com",
        password="secret1",
        position="QA",
        teams="Mobile, Web",
    )

    assert created["name"] == "Lan Pham"
    assert created["email"] == "lan@example.com"
    assert created["role"] == "employee"
    assert created["teams"] == ["Mobile", "Web"]
    assert created["total_annual_leave"] == 6
    assert created["remaining_annual_leave"] == 6
    assert "password_hash" not in created


def test_create_employee_requires_admin(service):
    with pytest.raises(AuthorizationError):
        service.create_employee(current_role=Role.EMPLOYEE, name="X", email="x@example.com", password="secret1")


@pytest.mark.parametrize(
    "name, email, password, role",
    [
        ("", "x@example.com", "secret1", "employee"),
        ("X", "not-an-email", "secret1", "employee"),
        ("X", "x@example.com", "short", "employee"),
        ("X", "x@example.com", "secret1", "owner"),
    ],
)
def test_create_employee_validation(service, name, email, password, role):
    with pytest.raises(ValidationError):
        service.create_employee(current_role=Role.ADMIN, name=name, email=email, password=password, role=role)


def test_create_employee_duplicate_email(service):
    with pytest.raises(ConflictError):
        service.create_employee(
            current_role=Role.ADMIN, name="Again", email="employee@system.com", password="secret1"
        )


def test_employee_can_read_self_but_not_others(service):
    me = service.get_employee(current_role=Role.EMPLOYEE, current_id=EMPLOYEE_ID, employee_id=EMPLOYEE_ID)
    assert me["email"] == "employee@system.com"

    with pytest.raises(AuthorizationError):
        service.get_employee(current_role=Role.EMPLOYEE, current_id=EMPLOYEE_ID, employee_id=ADMIN_ID)


def test_list_employees_requires_admin(service):
    assert len(service.list_employees(current_role=Role.ADMIN)) == 2
    with pytest.raises(AuthorizationError):
        service.list_employees(current_role=Role.EMPLOYEE)


def test_update_self(service, employees_repo):
    updated = service.update_employee(
        current_role=Role.EMPLOYEE,
        current_id=EMPLOYEE_ID,
        employee_id=EMPLOYEE_ID,
        name="Renamed",
        teams=["Platform"],
        password="newsecret",
    )

    assert updated["name"] == "Renamed"
    assert updated["teams"] == ["Platform"]
    AuthService(employees_repo).authenticate("employee@system.com", "newsecret")


def test_update_without_fields(service):
    with pytest.raises(ValidationError):
        service.update_employee(current_role=Role.ADMIN, current_id=ADMIN_ID, employee_id=EMPLOYEE_ID, name="  ")


def test_update_to_taken_email(service):
    with pytest.raises(ConflictError):
        service.update_employee(
            current_role=Role.ADMIN, current_id=ADMIN_ID, employee_id=EMPLOYEE_ID, email="admin@system.com"
        )


def test_update_someone_else_as_employee(service):
    with pytest.raises(AuthorizationError):
        service.update_employee(current_role=Role.EMPLOYEE, current_id=EMPLOYEE_ID, employee_id=ADMIN_ID, name="X")


def test_delete_employee(service, employees_repo):
    service.delete_employee(current_role=Role.ADMIN, current_id=ADMIN_ID, employee_id=EMPLOYEE_ID)

    assert employees_repo.get_by_id(EMPLOYEE_ID) is None
    with pytest.raises(NotFoundError):
        service.delete_employee(current_role=Role.ADMIN, current_id=ADMIN_ID, employee_id=EMPLOYEE_ID)


def test_delete_self_is_rejected(service):
    with pytest.raises(ValidationError):
        service.delete_employee(current_role=Role.ADMIN, current_id=ADMIN_ID, employee_id=ADMIN_ID)
