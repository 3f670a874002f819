from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, Iterable, Optional

from ..attendance.model import TimeEntry, entry_snapshot
from ..attendance.repository import TimeEntryRepository
from ..common.datetime_utils import local_date, now_utc, to_iso, week_start
from ..core.constants import DEFAULT_DASHBOARD_RECENT_LIMIT, DEFAULT_RECENT_DAYS, DEFAULT_RECENT_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository

PAY_CODE_REGULAR = "REG"
PAYROLL_COLUMNS = ("Employee Name", "Date", "Clock In", "Clock Out", "Hours Worked", "Pay Code")


@dataclass(frozen=True)
class TimesheetData:
    employee_id: str
    today_hours: float
    week_hours: float
    total_entries: int
    recent_entries: list[dict]
    current_entry: Optional[dict]


@dataclass(frozen=True)
class DashboardData:
    stats: dict
    clocked_in: list[dict]
    employee_summaries: list[dict]
    recent_entries: list[dict]


def _sum_hours(entries: Iterable[TimeEntry]) -> float:
    return round(sum(e.hours_worked or 0.0 for e in entries), 2)


class ReportService:
    """Read-only aggregations (safe to run concurrently: scan + filter only)."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        employees: EmployeeRepository,
        *,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._entries = entries
        self._employees = employees
        self._tz = tz
        self._clock = clock

    def _week_bounds(self, today: date) -> tuple[date, date]:
        start = week_start(today)
        return start, start + timedelta(days=6)

    def employee_timesheet(self, employee_id: str, *, now: Optional[datetime] = None) -> TimesheetData:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        today = local_date(now or self._clock(), self._tz)
        start, end = self._week_bounds(today)
        entries = list(self._entries.list_for_employee(employee_id))

        cutoff = today - timedelta(days=DEFAULT_RECENT_DAYS)
        recent = sorted((e for e in entries if e.work_date >= cutoff), key=lambda e: e.clock_in, reverse=True)
        current = next((e for e in entries if e.is_open), None)

        return TimesheetData(
            employee_id=employee_id,
            today_hours=_sum_hours(e for e in entries if e.work_date == today),
            week_hours=_sum_hours(e for e in entries if start <= e.work_date <= end),
            total_entries=len(entries),
            recent_entries=[entry_snapshot(e) for e in recent[:DEFAULT_RECENT_LIMIT]],
            current_entry=entry_snapshot(current) if current else None,
        )

    def dashboard(self, *, now: Optional[datetime] = None) -> DashboardData:
        today = local_date(now or self._clock(), self._tz)
        start, end = self._week_bounds(today)

        employees = [e for e in self._employees.list_all() if e.is_active]
        entries = list(self._entries.list_all())
        today_entries = [e for e in entries if e.work_date == today]
        week_entries = [e for e in entries if start <= e.work_date <= end]

        clocked_in = [e for e in employees if e.is_clocked_in]
        summaries = []
        for emp in employees:
            summaries.append(
                {
                    "id": emp.employee_id,
                    "name": emp.name,
                    "status": emp.current_status.value,
                    "lastClockIn": to_iso(emp.last_clock_in) if emp.last_clock_in else "",
                    "lastClockOut": to_iso(emp.last_clock_out) if emp.last_clock_out else "",
                    "todayHours": _sum_hours(e for e in today_entries if e.employee_id == emp.employee_id),
                    "weekHours": _sum_hours(e for e in week_entries if e.employee_id == emp.employee_id),
                }
            )

        recent = sorted(entries, key=lambda e: e.clock_in, reverse=True)[:DEFAULT_DASHBOARD_RECENT_LIMIT]
        return DashboardData(
            stats={
                "totalEmployees": len(employees),
                "currentlyClockedIn": len(clocked_in),
                "todayTotalHours": _sum_hours(today_entries),
                "weekTotalHours": _sum_hours(week_entries),
            },
            clocked_in=[
                {
                    "id": e.employee_id,
                    "name": e.name,
                    "clockInTime": to_iso(e.last_clock_in) if e.last_clock_in else "",
                }
                for e in clocked_in
            ],
            employee_summaries=summaries,
            recent_entries=[entry_snapshot(e) for e in recent],
        )

    def payroll_export(self, *, start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
        """Completed entries as payroll rows (local times, regular pay code).

        Both bounds are inclusive; the filter applies only when both are given.
        """
        entries = [e for e in self._entries.list_all() if not e.is_open]
        if start and end:
            if end < start:
                raise ValidationError("endDate must not be before startDate")
            entries = [e for e in entries if start <= e.work_date <= end]
        entries.sort(key=lambda e: (e.work_date, e.employee_name, e.clock_in))

        rows = []
        for e in entries:
            rows.append(
                {
                    "Employee Name": e.employee_name,
                    "Date": e.work_date.strftime("%m/%d/%Y"),
                    "Clock In": e.clock_in.astimezone(self._tz).strftime("%H:%M"),
                    "Clock Out": e.clock_out.astimezone(self._tz).strftime("%H:%M"),
                    "Hours Worked": f"{(e.hours_worked or 0.0):.2f}",
                    "Pay Code": PAY_CODE_REGULAR,
                }
            )
        return rows
