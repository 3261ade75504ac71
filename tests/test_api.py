from datetime import date, datetime
from io import BytesIO

from src.employee_management.employee_management.core.enums import LeaveType


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "OK"


def test_login_with_bad_credentials(client):
    resp = client.post("/api/auth/login", json={"email": "admin@system.com", "password": "wrong"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid credentials."}


def test_login_requires_both_fields(client):
    assert client.post("/api/auth/login", json={"email": "admin@system.com"}).status_code == 400


def test_me_and_logout(employee_client):
    me = employee_client.get("/api/auth/me").get_json()
    assert me["employee"]["email"] == "employee@system.com"

    assert employee_client.post("/api/auth/logout").status_code == 200
    assert employee_client.get("/api/auth/me").status_code == 401


def test_routes_require_login(client):
    assert client.get("/api/leaves/me").status_code == 401
    assert client.post("/api/reports", json={"report_text": "x"}).status_code == 401


def test_admin_routes_reject_employees(employee_client):
    assert employee_client.get("/api/employees").status_code == 403
    assert employee_client.get("/api/leaves").status_code == 403
    assert employee_client.get("/api/reports").status_code == 403


def test_admin_creates_employee(admin_client):
    payload = {"name": "New Hire", "email": "new@system.com", "password": "secret1", "teams": ["Ops"]}

    created = admin_client.post("/api/employees", json=payload)
    duplicate = admin_client.post("/api/employees", json=payload)

    assert created.status_code == 201
    assert created.get_json()["employee"]["teams"] == ["Ops"]
    assert duplicate.status_code == 409


def test_admin_cannot_delete_self(admin_client):
    resp = admin_client.delete("/api/employees/1")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_daily_report_flow(employee_client, admin_client, clock):
    assert employee_client.get("/api/reports/me/today").status_code == 404

    clock.now = datetime(2025, 3, 3, 10, 0, 1)
    first = employee_client.post("/api/reports", json={"report_text": "Shipped the release"})
    again = employee_client.post("/api/reports", json={"report_text": "Second try"})

    assert first.status_code == 201
    assert first.get_json()["report"]["compliance_status"] == "HALF_UNPAID_LEAVE"
    assert again.status_code == 409
    assert employee_client.get("/api/reports/me/today").get_json()["report"]["report_text"] == "Shipped the release"

    stats = employee_client.get("/api/stats/employee/me/reports").get_json()["stats"]
    assert stats["HALF_UNPAID_LEAVE"] == 1
    assert stats["total_reports"] == 1

    listed = admin_client.get("/api/reports?employee_id=2&status=HALF_UNPAID_LEAVE").get_json()["reports"]
    assert len(listed) == 1


def test_report_without_text(employee_client):
    assert employee_client.post("/api/reports", json={"report_text": ""}).status_code == 400


def test_leave_submission_and_approval(employee_client, admin_client, employees_repo):
    submitted = employee_client.post(
        "/api/leaves",
        json={"leave_type": "AL", "start_date": "2025-03-10", "end_date": "2025-03-11", "reason": "family"},
    )
    assert submitted.status_code == 201
    leave = submitted.get_json()["leave"]
    assert leave["effective_leave_type"] == "AL"

    decided = admin_client.put(f"/api/leaves/{leave['id']}", json={"status": "APPROVED"})
    assert decided.status_code == 200
    assert decided.get_json()["leave"]["status"] == "APPROVED"
    assert employees_repo.get_by_id(2).remaining_annual_leave == 4

    assert admin_client.put(f"/api/leaves/{leave['id']}", json={"status": "REJECTED"}).status_code == 409

    stats = employee_client.get("/api/stats/employee/me/leaves").get_json()["stats"]
    assert stats == {
        "total_al": 6,
        "used_al": 2.0,
        "remaining_al": 4.0,
        "total_annual_leave": 6,
        "remaining_annual_leave": 4,
    }


def test_short_notice_leave_is_downgraded(employee_client):
    resp = employee_client.post(
        "/api/leaves", json={"leave_type": "AL", "start_date": "2025-03-04", "end_date": "2025-03-04"}
    )

    body = resp.get_json()["leave"]
    assert resp.status_code == 201
    assert body["effective_leave_type"] == "UPL"
    assert body["downgraded"] is True


def test_leave_with_invalid_type(employee_client):
    resp = employee_client.post(
        "/api/leaves", json={"leave_type": "BEACH", "start_date": "2025-03-10", "end_date": "2025-03-10"}
    )
    assert resp.status_code == 400


def test_employee_sees_only_own_leaves(employee_client, leaves_repo):
    other = leaves_repo.add_approved(employee_id=1, start_date=date(2025, 1, 6), end_date=date(2025, 1, 6))
    mine = leaves_repo.add_approved(
        employee_id=2, start_date=date(2025, 1, 8), end_date=date(2025, 1, 8), leave_type=LeaveType.SICK_LEAVE
    )

    listed = employee_client.get("/api/leaves/me").get_json()["leaves"]

    assert [r["id"] for r in listed] == [mine]
    assert employee_client.get(f"/api/leaves/{other}").status_code == 403


def test_leave_with_supporting_document(employee_client):
    resp = employee_client.post(
        "/api/leaves",
        data={
            "leave_type": "SL",
            "start_date": "2025-03-03",
            "end_date": "2025-03-03",
            "reason": "flu",
            "supporting_document": (BytesIO(b"doctor note"), "note.txt"),
        },
        content_type="multipart/form-data",
    )

    assert resp.status_code == 201
    url = resp.get_json()["leave"]["supporting_document_url"]

    served = employee_client.get(url)
    assert served.status_code == 200
    assert served.data == b"doctor note"
    served.close()


def test_supporting_document_hidden_from_other_employees(app, employee_client, admin_client, employees_repo):
    employees_repo.add(name="Colleague", email="colleague@system.com", password="Colleague@1")
    colleague = app.test_client()
    assert colleague.post(
        "/api/auth/login", json={"email": "colleague@system.com", "password": "Colleague@1"}
    ).status_code == 200

    resp = employee_client.post(
        "/api/leaves",
        data={
            "leave_type": "SL",
            "start_date": "2025-03-03",
            "end_date": "2025-03-03",
            "supporting_document": (BytesIO(b"private"), "scan.pdf"),
        },
        content_type="multipart/form-data",
    )
    url = resp.get_json()["leave"]["supporting_document_url"]

    assert colleague.get(url).status_code == 403
    served = admin_client.get(url)
    assert served.status_code == 200
    served.close()
    assert employee_client.get("/uploads/0-unknown.pdf").status_code == 404
