"""Shared helpers for the JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(e: DomainError):
    return error_response(str(e), e.http_status)


def current_employee_id() -> int:
    return int(session["employee_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return error_response("Authentication required.", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return error_response("Authentication required.", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("Forbidden: you do not have permission to access this resource.", 403)
        return view(*args, **kwargs)

    return wrapper


def handle_errors(action: str):
    """Map domain errors to JSON responses; log anything else as a 500."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return domain_error_response(e)
            except HTTPException:
                raise
            except Exception:
                logger.exception("Unexpected error while %s", action)
                return error_response(f"Server error while {action}.", 500)

        return wrapper

    return decorator
