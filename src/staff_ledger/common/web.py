"""Shared Flask helpers: session identity, access decorators, JSON errors."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError
from ..users.service import SessionUser
from .validators import optional_iso_date

logger = logging.getLogger(__name__)


def current_user() -> Optional[SessionUser]:
    if "user_id" not in session:
        return None
    try:
        role = Role(session.get("role"))
    except ValueError:
        return None
    return SessionUser(user_id=int(session["user_id"]), full_name=session.get("name") or "", role=role)


def error_response(code: str, message: str, status: int):
    return jsonify({"success": False, "code": code, "message": message}), status


def domain_error_response(e: DomainError):
    return error_response(e.code, str(e), e.http_status)


def unexpected_error_response(e: Exception, action: str):
    logger.exception("Unexpected error while %s", action)
    if current_app.config.get("DEBUG", False):
        return error_response("INTERNAL_SERVER_ERROR", f"System error while {action}: {e}", 500)
    return error_response("INTERNAL_SERVER_ERROR", f"System error while {action}", 500)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return error_response("UNAUTHORIZED", "Please login to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return error_response("UNAUTHORIZED", "Please login to continue", 401)
        if not user.is_admin:
            logger.info("Admin-only %s denied for user_id=%s", request.path, user.user_id)
            return error_response("FORBIDDEN", "Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def query_arg(name: str) -> Optional[str]:
    value = request.args.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def int_arg(name: str) -> Optional[int]:
    value = query_arg(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be a whole number")


def date_range_args() -> dict:
    return {
        "start_date": optional_iso_date(query_arg("startDate"), "startDate"),
        "end_date": optional_iso_date(query_arg("endDate"), "endDate"),
    }
