from __future__ import annotations

from flask import Flask, jsonify, request, send_from_directory

from ..common.web import admin_required, current_employee_id, current_role, handle_errors, login_required
from ..container import Container


def _form_or_json() -> dict:
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="submit_leave")
    @login_required
    @handle_errors("submitting leave")
    def submit_leave():
        data = _form_or_json()
        result = container.leave_service.submit_leave(
            employee_id=current_employee_id(),
            leave_type=data.get("leave_type") or "",
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            reason=data.get("reason", ""),
            document=request.files.get("supporting_document"),
            now=container.clock(),
        )
        return jsonify({"success": True, "message": "Leave request submitted.", "leave": result}), 201

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @admin_required
    @handle_errors("fetching leaves")
    def list_leaves():
        leaves = container.leave_service.list_all(current_role=current_role(), status=request.args.get("status"))
        return jsonify({"success": True, "leaves": leaves})

    @app.route("/api/leaves/me", methods=["GET"], endpoint="my_leaves")
    @login_required
    @handle_errors("fetching leaves")
    def my_leaves():
        leaves = container.leave_service.list_mine(employee_id=current_employee_id())
        return jsonify({"success": True, "leaves": leaves})

    @app.route("/api/leaves/<int:request_id>", methods=["GET"], endpoint="get_leave")
    @login_required
    @handle_errors("fetching leave")
    def get_leave(request_id: int):
        leave = container.leave_service.get_leave(
            current_role=current_role(), current_id=current_employee_id(), request_id=request_id
        )
        return jsonify({"success": True, "leave": leave})

    @app.route("/api/leaves/<int:request_id>", methods=["PUT"], endpoint="decide_leave")
    @admin_required
    @handle_errors("updating leave")
    def decide_leave(request_id: int):
        data = request.get_json(silent=True) or {}
        leave = container.leave_service.decide_leave(
            current_role=current_role(),
            admin_id=current_employee_id(),
            request_id=request_id,
            status=data.get("status") or "",
            leave_type=data.get("leave_type"),
            admin_note=data.get("admin_note", ""),
        )
        return jsonify({"success": True, "message": f"Leave {leave['status'].lower()}.", "leave": leave})

    @app.route("/api/stats/employee/me/leaves", methods=["GET"], endpoint="my_leave_stats")
    @login_required
    @handle_errors("computing leave statistics")
    def my_leave_stats():
        stats = container.leave_service.leave_stats(employee_id=current_employee_id(), now=container.clock())
        return jsonify({"success": True, "stats": stats})

    @app.route("/uploads/<path:filename>", methods=["GET"], endpoint="uploaded_file")
    @login_required
    @handle_errors("fetching document")
    def uploaded_file(filename: str):
        stored = container.leave_service.document_for(
            current_role=current_role(), current_id=current_employee_id(), filename=filename
        )
        return send_from_directory(str(container.upload_dir), stored)
