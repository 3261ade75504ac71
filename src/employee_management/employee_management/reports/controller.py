from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_employee_id, current_role, handle_errors, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports", methods=["POST"], endpoint="submit_report")
    @login_required
    @handle_errors("submitting report")
    def submit_report():
        data = request.get_json(silent=True) or request.form.to_dict()
        report = container.report_service.submit_report(
            employee_id=current_employee_id(),
            report_text=data.get("report_text") or "",
            now=container.clock(),
        )
        return jsonify({"success": True, "message": "Report submitted.", "report": report}), 201

    @app.route("/api/reports", methods=["GET"], endpoint="list_reports")
    @admin_required
    @handle_errors("fetching reports")
    def list_reports():
        reports = container.report_service.list_all(
            current_role=current_role(),
            employee_id=request.args.get("employee_id", type=int),
            status=request.args.get("status"),
            date_from=request.args.get("from"),
            date_to=request.args.get("to"),
        )
        return jsonify({"success": True, "reports": reports})

    @app.route("/api/reports/me", methods=["GET"], endpoint="my_reports")
    @login_required
    @handle_errors("fetching reports")
    def my_reports():
        reports = container.report_service.list_mine(
            employee_id=current_employee_id(),
            status=request.args.get("status"),
            date_from=request.args.get("from"),
            date_to=request.args.get("to"),
        )
        return jsonify({"success": True, "reports": reports})

    @app.route("/api/reports/me/today", methods=["GET"], endpoint="my_report_today")
    @login_required
    @handle_errors("fetching today's report")
    def my_report_today():
        report = container.report_service.get_today(employee_id=current_employee_id(), now=container.clock())
        return jsonify({"success": True, "report": report})

    @app.route("/api/stats/employee/me/reports", methods=["GET"], endpoint="my_report_stats")
    @login_required
    @handle_errors("computing report statistics")
    def my_report_stats():
        stats = container.report_service.report_stats(employee_id=current_employee_id())
        return jsonify({"success": True, "stats": stats})
