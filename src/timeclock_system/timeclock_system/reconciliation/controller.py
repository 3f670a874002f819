from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..attendance.model import entry_snapshot
from ..audit.model import AuditLogEntry
from ..auth.guards import token_required
from ..common.datetime_utils import to_iso
from ..common.http import json_api, json_body
from ..core.enums import TokenKind
from ..core.exceptions import ValidationError
from ..container import Container


def audit_json(a: AuditLogEntry) -> dict:
    return {
        "timestamp": to_iso(a.timestamp),
        "adminUser": a.admin_user,
        "action": a.action.value,
        "employeeId": a.employee_id,
        "employeeName": a.employee_name,
        "details": a.details,
        "originalData": a.original_data,
        "newData": a.new_data,
    }


def register(app: Flask, container: Container) -> None:
    admin_required = token_required(container.session_gate, TokenKind.ADMIN)

    @app.route("/api/admin/audit-log", methods=["GET"], endpoint="admin_audit_log")
    @json_api
    @admin_required
    def admin_audit_log():
        employee_id = (request.args.get("employeeId") or "").strip() or None
        log = container.reconciliation_service.audit_log(employee_id)
        return jsonify({"entries": [audit_json(a) for a in log]})

    @app.route("/api/admin/employees/<employee_id>/timecard", methods=["GET"], endpoint="admin_timecard")
    @json_api
    @admin_required
    def admin_timecard(employee_id: str):
        entries = container.reconciliation_service.timecard(employee_id)
        return jsonify({"entries": [entry_snapshot(e) for e in entries]})

    @app.route("/api/admin/employees/<employee_id>/timecard", methods=["PUT"], endpoint="admin_update_timecard")
    @json_api
    @admin_required
    def admin_update_timecard(employee_id: str):
        body = json_body()
        action = str(body.get("action") or "").strip().lower()
        entry_data = body.get("entryData") or {}
        if not isinstance(entry_data, dict):
            raise ValidationError("entryData must be an object")

        service = container.reconciliation_service
        if action == "edit":
            updates = {k: v for k, v in entry_data.items() if k != "originalClockInTime"}
            entry = service.edit(
                admin_user=g.subject_id,
                employee_id=employee_id,
                original_clock_in=entry_data.get("originalClockInTime"),
                updates=updates,
            )
            return jsonify({"success": True, "message": "Time entry updated successfully", "entry": entry_snapshot(entry)})

        if action == "add":
            entry = service.add(admin_user=g.subject_id, employee_id=employee_id, fields=entry_data)
            return jsonify({"success": True, "message": "Time entry added successfully", "entry": entry_snapshot(entry)})

        if action == "delete":
            service.delete(admin_user=g.subject_id, employee_id=employee_id, clock_in=entry_data.get("clockInTime"))
            return jsonify({"success": True, "message": "Time entry deleted successfully"})

        raise ValidationError("Invalid action")
