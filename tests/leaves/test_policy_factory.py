from src.employee_management.employee_management.leaves.factory import LeavePolicyFactory
from src.employee_management.employee_management.leaves.policies.advance_notice_policy import AdvanceNoticePolicy
from src.employee_management.employee_management.leaves.policies.annual_quota_policy import AnnualQuotaPolicy
from src.employee_management.employee_management.leaves.policies.monthly_cap_policy import (
    MonthlyConsecutiveCapPolicy,
)


def test_factory_builds_policies_in_check_order():
    policies = LeavePolicyFactory().annual_leave_policies()

    assert [type(p) for p in policies] == [AdvanceNoticePolicy, MonthlyConsecutiveCapPolicy, AnnualQuotaPolicy]
    assert policies[0].hours == 48
    assert policies[1].max_days == 2
    assert policies[2].quota_days == 6


def test_factory_from_settings_overrides_and_defaults():
    factory = LeavePolicyFactory.from_settings({"advance_notice_hours": "72"})

    assert factory.advance_notice_hours == 72
    assert factory.monthly_consecutive_days == 2
    assert factory.annual_quota_days == 6


def test_factory_from_missing_settings():
    assert LeavePolicyFactory.from_settings(None) == LeavePolicyFactory()
