from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Callable, Mapping, Optional, Sequence

from ..attendance.model import TimeEntry, entry_snapshot
from ..attendance.repository import TimeEntryRepository
from ..audit.model import AuditLogEntry
from ..audit.repository import AuditLogRepository
from ..common.datetime_utils import (
    hours_between,
    local_date,
    now_utc,
    parse_iso_date,
    parse_iso_datetime,
    to_iso,
    truncate_to_millis,
)
from ..common.validators import optional_coordinate
from ..core.enums import AuditAction
from ..core.exceptions import (
    InvalidClockOutRequiredError,
    InvalidDurationError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Use case: admin add/edit/delete of historical time entries.

    Every successful mutation is followed by exactly one audit log append. The
    audit append is best-effort: its failure is logged and the mutation stands.
    These operations ignore the employee's live clock status, but never leave
    two open entries for the same employee.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        employees: EmployeeRepository,
        audit: AuditLogRepository,
        *,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._entries = entries
        self._employees = employees
        self._audit = audit
        self._tz = tz
        self._clock = clock

    def _parse_ts(self, value: Any, field_name: str) -> Optional[datetime]:
        if isinstance(value, datetime):
            return truncate_to_millis(value if value.tzinfo else value.replace(tzinfo=self._tz))
        try:
            parsed = parse_iso_datetime(str(value or ""), default_tz=self._tz)
            return truncate_to_millis(parsed) if parsed else None
        except ValueError:
            raise ValidationError(f"{field_name} is not a valid ISO timestamp")

    @staticmethod
    def _parse_date(value: Any) -> Optional[date]:
        v = str(value or "").strip()
        if not v:
            return None
        try:
            return parse_iso_date(v)
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")

    @staticmethod
    def _hours(clock_in: datetime, clock_out: datetime) -> float:
        if clock_out < clock_in:
            raise InvalidDurationError("Clock-out time is before clock-in time")
        return hours_between(clock_in, clock_out)

    def _employee_name(self, employee_id: str, fallback: str = "") -> str:
        employee = self._employees.get_by_id(employee_id)
        if employee:
            return employee.name
        return fallback or "Unknown"

    def _record_audit(
        self,
        *,
        admin_user: str,
        action: AuditAction,
        employee_id: str,
        employee_name: str,
        details: str,
        prior: Optional[TimeEntry],
        new: Optional[TimeEntry],
    ) -> bool:
        entry = AuditLogEntry(
            timestamp=self._clock(),
            admin_user=admin_user,
            action=action,
            employee_id=employee_id,
            employee_name=employee_name,
            details=details,
            original_data=json.dumps(entry_snapshot(prior)) if prior else None,
            new_data=json.dumps(entry_snapshot(new)) if new else None,
        )
        try:
            self._audit.append(entry)
            return True
        except StoreError:
            logger.exception("Audit log append failed after %s for %s", action.value, employee_id)
            return False

    def _other_open_entries(self, employee_id: str, *, exclude: Optional[datetime] = None) -> Sequence[TimeEntry]:
        return [e for e in self._entries.list_open_for_employee(employee_id) if e.clock_in != exclude]

    def timecard(self, employee_id: str) -> Sequence[TimeEntry]:
        entries = list(self._entries.list_for_employee(employee_id))
        entries.sort(key=lambda e: e.clock_in, reverse=True)
        return entries

    def audit_log(self, employee_id: Optional[str] = None) -> Sequence[AuditLogEntry]:
        """Audit trail, newest first; optionally narrowed to one employee."""
        log = [a for a in self._audit.list_all() if not employee_id or a.employee_id == employee_id]
        log.sort(key=lambda a: a.timestamp, reverse=True)
        return log

    def edit(
        self,
        *,
        admin_user: str,
        employee_id: str,
        original_clock_in: Any,
        updates: Mapping[str, Any],
    ) -> TimeEntry:
        original_ci = self._parse_ts(original_clock_in, "originalClockInTime")
        if original_ci is None:
            raise ValidationError("originalClockInTime is required")

        existing = self._entries.find(employee_id, original_ci)
        if not existing:
            raise NotFoundError("Time entry not found")

        clock_in = existing.clock_in
        if str(updates.get("clockInTime") or "").strip():
            clock_in = self._parse_ts(updates["clockInTime"], "clockInTime")

        clock_out = existing.clock_out
        if "clockOutTime" in updates:
            clock_out = self._parse_ts(updates["clockOutTime"], "clockOutTime")

        if clock_out is None:
            if self._other_open_entries(employee_id, exclude=existing.clock_in):
                raise InvalidClockOutRequiredError("Employee already has an open time entry; clock-out is required")
            hours = None
        else:
            hours = self._hours(clock_in, clock_out)

        if clock_in != existing.clock_in and self._entries.find(employee_id, clock_in):
            raise ValidationError("Another time entry already starts at that time")

        work_date = self._parse_date(updates.get("date"))
        if work_date is None:
            work_date = local_date(clock_in, self._tz) if clock_in != existing.clock_in else existing.work_date

        merged = replace(
            existing,
            clock_in=clock_in,
            clock_out=clock_out,
            work_date=work_date,
            hours_worked=hours,
            notes=str(updates["notes"]) if updates.get("notes") is not None else existing.notes,
            is_edited=True,
            edited_by=admin_user,
        )

        prior = self._entries.replace(employee_id, original_ci, merged)
        logger.info("Admin %s edited entry %s/%s", admin_user, employee_id, to_iso(original_ci))

        self._record_audit(
            admin_user=admin_user,
            action=AuditAction.EDIT_TIME_ENTRY,
            employee_id=employee_id,
            employee_name=self._employee_name(employee_id, prior.employee_name),
            details=f"Modified time entry for {prior.work_date.isoformat()}",
            prior=prior,
            new=merged,
        )
        return merged

    def add(self, *, admin_user: str, employee_id: str, fields: Mapping[str, Any]) -> TimeEntry:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        clock_in = self._parse_ts(fields.get("clockInTime"), "clockInTime")
        if clock_in is None:
            raise InvalidDurationError("clockInTime is required")
        clock_out = self._parse_ts(fields.get("clockOutTime"), "clockOutTime")
        if clock_out is None:
            raise InvalidClockOutRequiredError("Manual entries must include a clock-out time")

        hours = self._hours(clock_in, clock_out)

        if self._entries.find(employee_id, clock_in):
            raise ValidationError("Another time entry already starts at that time")

        entry = TimeEntry(
            employee_id=employee_id,
            employee_name=employee.name,
            clock_in=clock_in,
            clock_out=clock_out,
            work_date=self._parse_date(fields.get("date")) or local_date(clock_in, self._tz),
            location_lat=optional_coordinate(fields.get("locationLat"), "locationLat"),
            location_lng=optional_coordinate(fields.get("locationLng"), "locationLng"),
            hours_worked=hours,
            is_edited=True,
            edited_by=admin_user,
            notes=str(fields.get("notes") or ""),
        )
        self._entries.append(entry)
        logger.info("Admin %s added entry %s/%s", admin_user, employee_id, to_iso(clock_in))

        self._record_audit(
            admin_user=admin_user,
            action=AuditAction.ADD_TIME_ENTRY,
            employee_id=employee_id,
            employee_name=employee.name,
            details=f"Added manual time entry for {entry.work_date.isoformat()}",
            prior=None,
            new=entry,
        )
        return entry

    def delete(self, *, admin_user: str, employee_id: str, clock_in: Any) -> TimeEntry:
        clock_in_dt = self._parse_ts(clock_in, "clockInTime")
        if clock_in_dt is None:
            raise ValidationError("clockInTime is required")

        prior = self._entries.clear(employee_id, clock_in_dt)
        logger.info("Admin %s deleted entry %s/%s", admin_user, employee_id, to_iso(clock_in_dt))
        if prior.is_open:
            logger.warning("Deleted an open entry for %s; clock status may now be inconsistent", employee_id)

        self._record_audit(
            admin_user=admin_user,
            action=AuditAction.DELETE_TIME_ENTRY,
            employee_id=employee_id,
            employee_name=self._employee_name(employee_id, prior.employee_name),
            details=f"Deleted time entry for {prior.work_date.isoformat()}",
            prior=prior,
            new=None,
        )
        return prior
