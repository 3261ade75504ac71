from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import (
    admin_required,
    current_employee_id,
    current_role,
    error_response,
    handle_errors,
    login_required,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @handle_errors("logging in")
    def login():
        data = request.get_json(silent=True) or request.form.to_dict()
        email = data.get("email", "")
        password = data.get("password", "")
        if not email or not password:
            return error_response("Email and password are required.", 400)

        s_emp = container.auth_service.authenticate(email, password)

        session.clear()
        session["employee_id"] = s_emp.employee_id
        session["name"] = s_emp.name
        session["role"] = s_emp.role.value

        employee = container.employee_service.get_employee(
            current_role=s_emp.role, current_id=s_emp.employee_id, employee_id=s_emp.employee_id
        )
        return jsonify({"success": True, "message": "Logged in.", "employee": employee})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out."})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    @handle_errors("fetching current employee")
    def me():
        employee_id = current_employee_id()
        employee = container.employee_service.get_employee(
            current_role=current_role(), current_id=employee_id, employee_id=employee_id
        )
        return jsonify({"success": True, "employee": employee})

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @admin_required
    @handle_errors("fetching employees")
    def list_employees():
        employees = container.employee_service.list_employees(current_role=current_role())
        return jsonify({"success": True, "employees": employees})

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    @handle_errors("creating employee")
    def create_employee():
        data = request.get_json(silent=True) or {}
        employee = container.employee_service.create_employee(
            current_role=current_role(),
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=data.get("role") or "employee",
            position=data.get("position"),
            teams=data.get("teams"),
        )
        return jsonify({"success": True, "message": "Employee created.", "employee": employee}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    @handle_errors("fetching employee")
    def get_employee(employee_id: int):
        employee = container.employee_service.get_employee(
            current_role=current_role(), current_id=current_employee_id(), employee_id=employee_id
        )
        return jsonify({"success": True, "employee": employee})

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    @login_required
    @handle_errors("updating employee")
    def update_employee(employee_id: int):
        data = request.get_json(silent=True) or {}
        employee = container.employee_service.update_employee(
            current_role=current_role(),
            current_id=current_employee_id(),
            employee_id=employee_id,
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            position=data.get("position"),
            teams=data.get("teams"),
        )
        if employee_id == current_employee_id():
            session["name"] = employee["name"]
        return jsonify({"success": True, "message": "Employee updated.", "employee": employee})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    @handle_errors("deleting employee")
    def delete_employee(employee_id: int):
        container.employee_service.delete_employee(
            current_role=current_role(), current_id=current_employee_id(), employee_id=employee_id
        )
        return jsonify({"success": True, "message": "Employee and related records deleted."})
