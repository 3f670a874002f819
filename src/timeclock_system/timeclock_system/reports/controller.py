from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..auth.guards import token_required
from ..common.datetime_utils import local_date, now_utc, parse_iso_date
from ..common.http import json_api
from ..core.enums import TokenKind
from ..core.exceptions import ValidationError
from ..container import Container
from .service import PAYROLL_COLUMNS


def register(app: Flask, container: Container) -> None:
    admin_required = token_required(container.session_gate, TokenKind.ADMIN)

    def _parse_date(value: str, name: str):
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{name} must be YYYY-MM-DD")

    @app.route("/api/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @json_api
    @admin_required
    def admin_dashboard():
        data = container.report_service.dashboard()
        return jsonify(
            {
                "stats": data.stats,
                "clockedInEmployees": data.clocked_in,
                "employeeSummaries": data.employee_summaries,
                "recentEntries": data.recent_entries,
            }
        )

    @app.route("/api/admin/export-csv", methods=["GET"], endpoint="admin_export_csv")
    @json_api
    @admin_required
    def admin_export_csv():
        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")
        start = _parse_date(start_s, "startDate") if start_s else None
        end = _parse_date(end_s, "endDate") if end_s else None

        rows = container.report_service.payroll_export(start=start, end=end)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=list(PAYROLL_COLUMNS))
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        today = local_date(now_utc(), container.settings.tz)
        filename = f"timesheet_{today.isoformat()}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
