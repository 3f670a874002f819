from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.timeclock_system.timeclock_system.attendance.sheet_time_entry_repository import SheetTimeEntryRepository
from src.timeclock_system.timeclock_system.common.datetime_utils import week_start
from src.timeclock_system.timeclock_system.core.exceptions import NotFoundError, ValidationError
from src.timeclock_system.timeclock_system.employees.sheet_employee_repository import SheetEmployeeRepository
from src.timeclock_system.timeclock_system.reports.service import ReportService
from src.timeclock_system.timeclock_system.store import schema
from src.timeclock_system.timeclock_system.store.bootstrap import ensure_sheets
from src.timeclock_system.timeclock_system.store.memory import InMemoryRecordStore

# Wednesday; the week runs Sunday 2026-03-08 .. Saturday 2026-03-14.
NOW = datetime(2026, 3, 11, 20, 0, tzinfo=timezone.utc)


def _row(emp: str, name: str, day: str, start: str, end: str = "", hours: str = "") -> list[str]:
    return [emp, name, f"{day}T{start}:00.000Z", f"{day}T{end}:00.000Z" if end else "", day, "", "", hours, "false", "", ""]


def _service() -> ReportService:
    store = InMemoryRecordStore()
    ensure_sheets(store)
    store.append_rows(
        schema.EMPLOYEES,
        [
            ["john-smith", "John Smith", "true", "clocked_in", "2026-03-11T18:00:00.000Z", "", "x"],
            ["jane-doe", "Jane Doe", "true", "clocked_out", "", "2026-03-10T17:00:00.000Z", "x"],
            ["old-timer", "Old Timer", "false", "clocked_out", "", "", "x"],
        ],
    )
    store.append_rows(
        schema.TIME_ENTRIES,
        [
            _row("john-smith", "John Smith", "2026-03-11", "13:00", "17:00", "4.00"),
            _row("john-smith", "John Smith", "2026-03-11", "18:00"),
            _row("john-smith", "John Smith", "2026-03-09", "13:00", "21:00", "8.00"),
            _row("john-smith", "John Smith", "2026-03-07", "13:00", "15:30", "2.50"),
            _row("jane-doe", "Jane Doe", "2026-03-10", "09:00", "17:00", "8.00"),
        ],
    )
    return ReportService(
        SheetTimeEntryRepository(store),
        SheetEmployeeRepository(store),
        clock=lambda: NOW,
    )


def test_weeks_start_on_sunday():
    assert week_start(date(2026, 3, 11)) == date(2026, 3, 8)
    assert week_start(date(2026, 3, 8)) == date(2026, 3, 8)
    assert week_start(date(2026, 3, 14)) == date(2026, 3, 8)


def test_employee_timesheet_totals():
    data = _service().employee_timesheet("john-smith")

    assert data.today_hours == 4.0
    assert data.week_hours == 12.0
    assert data.total_entries == 4
    assert data.current_entry["clockInTime"] == "2026-03-11T18:00:00.000Z"
    assert data.recent_entries[0]["clockInTime"] == "2026-03-11T18:00:00.000Z"


def test_timesheet_for_unknown_employee():
    with pytest.raises(NotFoundError):
        _service().employee_timesheet("ghost")


def test_dashboard_counts_active_employees_only():
    data = _service().dashboard()

    assert data.stats == {
        "totalEmployees": 2,
        "currentlyClockedIn": 1,
        "todayTotalHours": 4.0,
        "weekTotalHours": 20.0,
    }
    assert [e["id"] for e in data.clocked_in] == ["john-smith"]
    by_id = {s["id"]: s for s in data.employee_summaries}
    assert by_id["jane-doe"]["weekHours"] == 8.0
    assert len(data.recent_entries) == 5


def test_payroll_export_only_completed_entries_in_range():
    rows = _service().payroll_export(start=date(2026, 3, 8), end=date(2026, 3, 14))

    assert [r["Employee Name"] for r in rows] == ["John Smith", "Jane Doe", "John Smith"]
    assert rows[0] == {
        "Employee Name": "John Smith",
        "Date": "03/09/2026",
        "Clock In": "13:00",
        "Clock Out": "21:00",
        "Hours Worked": "8.00",
        "Pay Code": "REG",
    }


def test_payroll_export_rejects_inverted_range():
    with pytest.raises(ValidationError):
        _service().payroll_export(start=date(2026, 3, 14), end=date(2026, 3, 8))
