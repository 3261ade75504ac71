from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from types import SimpleNamespace

import pytest
from werkzeug.security import generate_password_hash

from src.employee_management.employee_management.container import build_services
from src.employee_management.employee_management.core.enums import ComplianceStatus, LeaveType, RequestStatus, Role
from src.employee_management.employee_management.core.exceptions import ConflictError
from src.employee_management.employee_management.employees.model import Employee
from src.employee_management.employee_management.leaves.model import LeaveInterval, LeaveRequest
from src.employee_management.employee_management.main import build_app
from src.employee_management.employee_management.reports.model import DailyReport

ADMIN_PASSWORD = "Admin@123"
EMPLOYEE_PASSWORD = "Employee@123"


class FakeEmployeesRepo:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[int, Employee] = {}

    def add(self, *, name, email, password, role=Role.EMPLOYEE, remaining=6, is_active=True, password_hash=None):
        eid = self._next_id
        self._next_id += 1
        self._rows[eid] = Employee(
            employee_id=eid,
            name=name,
            email=email,
            password_hash=password_hash or generate_password_hash(password),
            role=role,
            remaining_annual_leave=remaining,
            is_active=is_active,
        )
        return self._rows[eid]

    def get_by_id(self, employee_id):
        return self._rows.get(int(employee_id))

    def get_by_email(self, email):
        return next((e for e in self._rows.values() if e.email == email), None)

    def list_all(self):
        return list(self._rows.values())

    def create_employee(self, *, name, email, password_hash, role, position, teams, total_annual_leave):
        eid = self._next_id
        self._next_id += 1
        self._rows[eid] = Employee(
            employee_id=eid,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            position=position,
            teams=tuple(teams),
            total_annual_leave=total_annual_leave,
            remaining_annual_leave=total_annual_leave,
        )
        return eid

    def update_employee(self, employee_id, **changes):
        emp = self._rows.get(int(employee_id))
        if not emp:
            return False
        self._rows[int(employee_id)] = replace(emp, **{k: v for k, v in changes.items() if v is not None})
        return True

    def set_remaining_annual_leave(self, employee_id, remaining):
        emp = self._rows[int(employee_id)]
        self._rows[int(employee_id)] = replace(emp, remaining_annual_leave=int(remaining))
        return True

    def delete_with_history(self, employee_id):
        return self._rows.pop(int(employee_id), None) is not None


class FakeLeavesRepo:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[int, LeaveRequest] = {}

    def create_leave(
        self,
        *,
        employee_id,
        leave_type,
        requested_leave_type,
        start_date,
        end_date,
        reason,
        supporting_document_url=None,
        status=RequestStatus.PENDING,
    ):
        rid = self._next_id
        self._next_id += 1
        self._rows[rid] = LeaveRequest(
            request_id=rid,
            employee_id=int(employee_id),
            leave_type=LeaveType(leave_type),
            requested_leave_type=LeaveType(requested_leave_type),
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=status,
            created_at=datetime(2025, 1, 1, 8, 0, 0),
            supporting_document_url=supporting_document_url,
        )
        return rid

    def add_approved(self, *, employee_id, start_date, end_date, leave_type=LeaveType.ANNUAL_LEAVE):
        return self.create_leave(
            employee_id=employee_id,
            leave_type=leave_type,
            requested_leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason="",
            status=RequestStatus.APPROVED,
        )

    def get_leave(self, *, request_id):
        return self._rows.get(int(request_id))

    def get_by_document_url(self, *, url):
        return next((r for r in self._rows.values() if r.supporting_document_url == url), None)

    def list_leaves(self, *, status=None, employee_id=None, limit=500):
        rows = sorted(self._rows.values(), key=lambda r: r.request_id, reverse=True)
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == int(employee_id)]
        return rows[:limit]

    def list_approved_annual_intervals(self, *, employee_id, year):
        return [
            LeaveInterval(r.start_date, r.end_date)
            for r in self._rows.values()
            if r.employee_id == int(employee_id)
            and r.status == RequestStatus.APPROVED
            and r.leave_type == LeaveType.ANNUAL_LEAVE
            and date(year, 1, 1) <= r.start_date <= date(year, 12, 31)
        ]

    def decide_leave(self, *, request_id, status, decided_by, leave_type=None, admin_note=None):
        req = self._rows.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self._rows[int(request_id)] = replace(
            req,
            status=status,
            leave_type=leave_type or req.leave_type,
            decided_by=decided_by,
            decided_at=datetime(2025, 1, 2, 10, 0, 0),
            admin_note=admin_note,
        )
        return True


class FakeReportsRepo:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[int, DailyReport] = {}

    def create_report(self, *, employee_id, report_date, submission_time, compliance_status, report_text):
        if self.get_for_employee_and_date(employee_id=employee_id, report_date=report_date):
            raise ConflictError("A report for this date has already been submitted.")
        rid = self._next_id
        self._next_id += 1
        self._rows[rid] = DailyReport(
            report_id=rid,
            employee_id=int(employee_id),
            report_date=report_date,
            submission_time=submission_time,
            compliance_status=ComplianceStatus(compliance_status),
            report_text=report_text,
        )
        return rid

    def get_for_employee_and_date(self, *, employee_id, report_date):
        return next(
            (r for r in self._rows.values() if r.employee_id == int(employee_id) and r.report_date == report_date),
            None,
        )

    def list_reports(self, *, employee_id=None, status=None, date_from=None, date_to=None, limit=500):
        rows = sorted(self._rows.values(), key=lambda r: (r.report_date, r.report_id), reverse=True)
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == int(employee_id)]
        if status is not None:
            rows = [r for r in rows if r.compliance_status == status]
        if date_from is not None:
            rows = [r for r in rows if r.report_date >= date_from]
        if date_to is not None:
            rows = [r for r in rows if r.report_date <= date_to]
        return rows[:limit]

    def count_by_status(self, *, employee_id):
        counts: dict[ComplianceStatus, int] = {}
        for r in self._rows.values():
            if r.employee_id == int(employee_id):
                counts[r.compliance_status] = counts.get(r.compliance_status, 0) + 1
        return counts


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    # Monday morning, before the on-time cutoff
    return datetime(2025, 3, 3, 9, 0, 0)


@pytest.fixture
def employees_repo():
    repo = FakeEmployeesRepo()
    repo.add(name="Super Admin", email="admin@system.com", password=ADMIN_PASSWORD, role=Role.ADMIN)
    repo.add(name="Demo Employee", email="employee@system.com", password=EMPLOYEE_PASSWORD)
    return repo


@pytest.fixture
def leaves_repo():
    return FakeLeavesRepo()


@pytest.fixture
def reports_repo():
    return FakeReportsRepo()


@pytest.fixture
def settings(tmp_path):
    return SimpleNamespace(
        SECRET_KEY="test-secret",
        DEBUG=False,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        MAX_UPLOAD_BYTES=1024 * 1024,
        ACCEPTED_LEAVE_TYPES=["AL", "SL", "CL", "UPL", "HML", "HEL"],
        LEAVE_POLICY={"advance_notice_hours": 48, "monthly_consecutive_days": 2, "annual_quota_days": 6},
        COMPLIANCE_CUTOFFS=["09:30", "10:00", "12:30"],
    )


@pytest.fixture
def clock(fixed_now):
    return FakeClock(fixed_now)


@pytest.fixture
def container(employees_repo, leaves_repo, reports_repo, settings, clock):
    return build_services(
        employees_repo=employees_repo,
        leaves_repo=leaves_repo,
        reports_repo=reports_repo,
        settings=settings,
        clock=clock,
    )


@pytest.fixture
def app(container, settings):
    app = build_app(container, settings=settings)
    app.config["TESTING"] = True
    return app


def _login(app, email, password):
    client = app.test_client()
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    return _login(app, "admin@system.com", ADMIN_PASSWORD)


@pytest.fixture
def employee_client(app):
    return _login(app, "employee@system.com", EMPLOYEE_PASSWORD)
