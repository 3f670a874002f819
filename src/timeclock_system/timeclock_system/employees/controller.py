from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import token_required
from ..common.datetime_utils import to_iso
from ..common.http import json_api, json_body, parse_bool
from ..common.validators import optional_text, require_non_empty
from ..core.constants import ADMIN_TOKEN_COOKIE, ADMIN_TOKEN_MAX_AGE_SECONDS
from ..core.enums import TokenKind
from ..container import Container
from .model import EmployeeProfile


def profile_json(p: EmployeeProfile) -> dict:
    return {
        "id": p.employee_id,
        "name": p.name,
        "isActive": p.is_active,
        "currentStatus": p.current_status.value,
        "lastClockIn": to_iso(p.last_clock_in) if p.last_clock_in else "",
        "lastClockOut": to_iso(p.last_clock_out) if p.last_clock_out else "",
    }


def register(app: Flask, container: Container) -> None:
    secure_cookies = not (container.settings.debug or container.settings.testing)
    admin_required = token_required(container.session_gate, TokenKind.ADMIN)

    @app.route("/api/admin/auth", methods=["POST"], endpoint="admin_login")
    @json_api
    def admin_login():
        body = json_body()
        login = container.auth_service.login_admin(str(body.get("password") or ""))
        resp = jsonify({"success": True, "message": "Authentication successful", "token": login.token})
        resp.set_cookie(
            ADMIN_TOKEN_COOKIE,
            login.token,
            max_age=ADMIN_TOKEN_MAX_AGE_SECONDS,
            httponly=True,
            secure=secure_cookies,
            samesite="Lax",
        )
        return resp

    @app.route("/api/admin/auth", methods=["DELETE"], endpoint="admin_logout")
    def admin_logout():
        resp = jsonify({"success": True, "message": "Logged out successfully"})
        resp.delete_cookie(ADMIN_TOKEN_COOKIE)
        return resp

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_list_employees")
    @json_api
    @admin_required
    def admin_list_employees():
        employees = container.employee_service.list_active()
        return jsonify({"employees": [profile_json(p) for p in employees]})

    @app.route("/api/admin/employees", methods=["POST"], endpoint="admin_add_employee")
    @json_api
    @admin_required
    def admin_add_employee():
        body = json_body()
        profile = container.employee_service.create(name=str(body.get("name") or ""), password=str(body.get("password") or ""))
        return jsonify(
            {"success": True, "message": "Employee added successfully", "employeeId": profile.employee_id, "name": profile.name}
        )

    @app.route("/api/admin/employees", methods=["PUT"], endpoint="admin_update_employee")
    @json_api
    @admin_required
    def admin_update_employee():
        body = json_body()
        profile = container.employee_service.update(
            employee_id=require_non_empty(str(body.get("employeeId") or ""), "Employee ID"),
            name=optional_text(body.get("name"), "Name"),
            password=optional_text(body.get("password"), "Password") or None,
            is_active=parse_bool(body.get("isActive")),
        )
        return jsonify({"success": True, "message": "Employee updated successfully", "employee": profile_json(profile)})

    @app.route("/api/admin/employees/<employee_id>", methods=["GET"], endpoint="admin_get_employee")
    @json_api
    @admin_required
    def admin_get_employee(employee_id: str):
        return jsonify({"employee": profile_json(container.employee_service.get(employee_id))})

    @app.route("/api/admin/employees/<employee_id>", methods=["DELETE"], endpoint="admin_deactivate_employee")
    @json_api
    @admin_required
    def admin_deactivate_employee(employee_id: str):
        profile = container.employee_service.deactivate(employee_id)
        return jsonify({"success": True, "message": "Employee deactivated", "employee": profile_json(profile)})
