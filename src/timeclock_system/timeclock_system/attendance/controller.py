from __future__ import annotations

import logging

from flask import Flask, g, jsonify, request

from ..auth.guards import token_required
from ..common.datetime_utils import to_iso
from ..common.http import json_api, json_body
from ..common.validators import optional_coordinate
from ..core.constants import EMPLOYEE_TOKEN_COOKIE, EMPLOYEE_TOKEN_MAX_AGE_SECONDS
from ..core.enums import TokenKind
from ..core.exceptions import UpstreamUnavailableError
from ..container import Container
from .model import Coordinates, entry_snapshot

logger = logging.getLogger(__name__)


def _coordinates_from(body: dict) -> Coordinates | None:
    lat = optional_coordinate(body.get("latitude"), "latitude")
    lng = optional_coordinate(body.get("longitude"), "longitude")
    if lat is None or lng is None:
        return None
    return Coordinates(latitude=lat, longitude=lng)


def register(app: Flask, container: Container) -> None:
    secure_cookies = not (container.settings.debug or container.settings.testing)

    employee_required = token_required(container.session_gate, TokenKind.EMPLOYEE)

    @app.route("/api/auth", methods=["POST"], endpoint="employee_login")
    @json_api
    def employee_login():
        body = json_body()
        login = container.auth_service.login_employee(str(body.get("employeeId") or ""), str(body.get("password") or ""))
        profile = login.profile
        resp = jsonify(
            {
                "success": True,
                "message": "Login successful",
                "employee": {"id": profile.employee_id, "name": profile.name, "currentStatus": profile.current_status.value},
                "token": login.token,
            }
        )
        resp.set_cookie(
            EMPLOYEE_TOKEN_COOKIE,
            login.token,
            max_age=EMPLOYEE_TOKEN_MAX_AGE_SECONDS,
            httponly=True,
            secure=secure_cookies,
            samesite="Lax",
        )
        return resp

    @app.route("/api/auth", methods=["DELETE"], endpoint="employee_logout")
    def employee_logout():
        resp = jsonify({"success": True, "message": "Logged out successfully"})
        resp.delete_cookie(EMPLOYEE_TOKEN_COOKIE)
        return resp

    @app.route("/api/clockin", methods=["POST"], endpoint="clock_in")
    @json_api
    @employee_required
    def clock_in():
        body = json_body()
        coordinates = _coordinates_from(body)
        try:
            client_ip = container.ip_resolver.resolve(request.headers, request.remote_addr)
        except UpstreamUnavailableError:
            if coordinates is None:
                raise
            # GPS can still verify presence without the network check.
            logger.warning("IP lookup failed for %s; falling back to GPS verification", g.subject_id)
            client_ip = None

        result = container.attendance_service.clock_in(g.subject_id, coordinates=coordinates, client_ip=client_ip)
        on_network = result.client_ip is not None
        return jsonify(
            {
                "success": True,
                "message": "Clocked in successfully (Office Network)" if on_network else "Clocked in successfully",
                "clockInTime": to_iso(result.timestamp),
                "verifiedBy": result.verified_by.value,
                "location": {
                    "latitude": coordinates.latitude if coordinates else None,
                    "longitude": coordinates.longitude if coordinates else None,
                    "verifiedBy": result.verified_by.value,
                    "clientIp": result.client_ip,
                },
            }
        )

    @app.route("/api/clockout", methods=["POST"], endpoint="clock_out")
    @json_api
    @employee_required
    def clock_out():
        body = json_body()
        result = container.attendance_service.clock_out(g.subject_id, coordinates=_coordinates_from(body))
        return jsonify(
            {
                "success": True,
                "message": "Clocked out successfully",
                "clockOutTime": to_iso(result.timestamp),
                "hoursWorked": result.hours_worked,
                "clockInTime": to_iso(result.clock_in),
            }
        )

    @app.route("/api/status", methods=["GET"], endpoint="clock_status")
    @json_api
    @employee_required
    def clock_status():
        report = container.attendance_service.status(g.subject_id)
        return jsonify(
            {
                "employeeId": report.employee_id,
                "status": report.status.value,
                "openEntry": entry_snapshot(report.open_entry) if report.open_entry else None,
                "openEntryCount": report.open_entry_count,
                "consistent": report.consistent,
            }
        )

    @app.route("/api/timesheet", methods=["GET"], endpoint="employee_timesheet")
    @json_api
    @employee_required
    def employee_timesheet():
        data = container.report_service.employee_timesheet(g.subject_id)
        return jsonify(
            {
                "employeeId": data.employee_id,
                "todayHours": data.today_hours,
                "weekHours": data.week_hours,
                "totalEntries": data.total_entries,
                "recentEntries": data.recent_entries,
                "currentEntry": data.current_entry,
            }
        )

    @app.route("/api/get-ip", methods=["GET"], endpoint="get_ip")
    @json_api
    def get_ip():
        ip = container.ip_resolver.resolve(request.headers, request.remote_addr)
        return jsonify({"ip": ip, "onAllowedNetwork": container.network_verifier.is_allowed(ip)})
