"""Example: the rule engine used directly, without Flask or a database."""

from datetime import date, datetime, time

from src.employee_management.employee_management.leaves.evaluator import evaluate_leave_eligibility
from src.employee_management.employee_management.leaves.model import LeaveInterval
from src.employee_management.employee_management.reports.classifier import classify_report_submission


def main():
    for t in (time(9, 15), time(9, 45), time(11, 0), time(14, 0)):
        print(t.isoformat(), classify_report_submission(t).value)

    now = datetime(2025, 3, 3, 9, 0)
    prior = [LeaveInterval(date(2025, 1, 30), date(2025, 1, 31))]
    print(evaluate_leave_eligibility("AL", "2025-03-10", "2025-03-11", 1, now, prior).value)
    print(evaluate_leave_eligibility("AL", "2025-03-04", "2025-03-04", 1, now, prior).value)


if __name__ == "__main__":
    main()
