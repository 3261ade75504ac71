from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .common.datetime_utils import now_local
from .core.constants import DEFAULT_ANNUAL_LEAVE_DAYS
from .core.enums import LeaveType
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .leaves.evaluator import LeaveEligibilityEvaluator
from .leaves.factory import LeavePolicyFactory
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .leaves.uploads import UploadStore
from .reports.classifier import ComplianceClassifier, ComplianceCutoffs
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    leaves_repo: LeaveRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    employee_service: EmployeeService
    leave_service: LeaveService
    report_service: ReportService

    upload_dir: Path
    clock: Callable[[], datetime] = field(default=now_local)
    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    employees_repo: EmployeeRepository,
    leaves_repo: LeaveRepository,
    reports_repo: ReportRepository,
    settings,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services around already constructed repositories."""

    policy = getattr(settings, "LEAVE_POLICY", None) or {}
    annual_days = int(policy.get("annual_quota_days", DEFAULT_ANNUAL_LEAVE_DAYS))
    upload_dir = Path(getattr(settings, "UPLOAD_DIR", "uploads")).resolve()

    evaluator = LeaveEligibilityEvaluator(LeavePolicyFactory.from_settings(policy).annual_leave_policies())
    classifier = ComplianceClassifier(ComplianceCutoffs.from_strings(getattr(settings, "COMPLIANCE_CUTOFFS", None)))

    return Container(
        employees_repo=employees_repo,
        leaves_repo=leaves_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo, annual_leave_days=annual_days),
        leave_service=LeaveService(
            leaves_repo,
            employees_repo,
            evaluator=evaluator,
            accepted_types=getattr(settings, "ACCEPTED_LEAVE_TYPES", None) or list(LeaveType),
            annual_leave_days=annual_days,
            uploads=UploadStore(upload_dir),
        ),
        report_service=ReportService(reports_repo, classifier=classifier),
        upload_dir=upload_dir,
        clock=clock,
        conn=conn,
    )


def build_container(*, db_config: dict, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        settings=settings,
        conn=conn,
    )
