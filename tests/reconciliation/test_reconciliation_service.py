from __future__ import annotations

import json
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.timeclock_system.timeclock_system.attendance.sheet_time_entry_repository import SheetTimeEntryRepository
from src.timeclock_system.timeclock_system.audit.sheet_audit_repository import SheetAuditLogRepository
from src.timeclock_system.timeclock_system.core.enums import AuditAction
from src.timeclock_system.timeclock_system.core.exceptions import (
    InvalidClockOutRequiredError,
    InvalidDurationError,
    NotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from src.timeclock_system.timeclock_system.employees.sheet_employee_repository import SheetEmployeeRepository
from src.timeclock_system.timeclock_system.reconciliation.service import ReconciliationService
from src.timeclock_system.timeclock_system.store import schema
from src.timeclock_system.timeclock_system.store.bootstrap import ensure_sheets
from src.timeclock_system.timeclock_system.store.memory import InMemoryRecordStore

NOW = datetime(2026, 3, 10, 18, 0, tzinfo=timezone.utc)


def _entry_row(clock_in: str, clock_out: str = "", hours: str = "", day: str = "2026-03-09") -> list[str]:
    return ["john-smith", "John Smith", clock_in, clock_out, day, "", "", hours, "false", "", ""]


def _build(store: InMemoryRecordStore | None = None):
    store = store or InMemoryRecordStore()
    ensure_sheets(store)
    store.append_rows(schema.EMPLOYEES, [["john-smith", "John Smith", "true", "clocked_out", "", "", "x"]])
    entries = SheetTimeEntryRepository(store)
    audit = SheetAuditLogRepository(store)
    svc = ReconciliationService(entries, SheetEmployeeRepository(store), audit, clock=lambda: NOW)
    return store, entries, audit, svc


def test_edit_sets_clock_out_and_recomputes_hours():
    store, entries, audit, svc = _build()
    store.append_rows(schema.TIME_ENTRIES, [_entry_row("2026-03-09T13:00:00.000Z")])

    edited = svc.edit(
        admin_user="admin",
        employee_id="john-smith",
        original_clock_in="2026-03-09T13:00:00.000Z",
        updates={"clockOutTime": "2026-03-09T21:30:00.000Z"},
    )

    assert edited.hours_worked == 8.5
    assert edited.is_edited
    assert edited.edited_by == "admin"

    stored = entries.list_for_employee("john-smith")
    assert len(stored) == 1
    assert stored[0].hours_worked == 8.5
    assert stored[0].clock_out == datetime(2026, 3, 9, 21, 30, tzinfo=timezone.utc)

    log = audit.list_all()
    assert len(log) == 1
    assert log[0].action == AuditAction.EDIT_TIME_ENTRY
    assert json.loads(log[0].original_data)["clockOutTime"] == ""
    assert json.loads(log[0].new_data)["clockOutTime"] == "2026-03-09T21:30:00.000Z"
    assert json.loads(log[0].new_data)["hoursWorked"] == 8.5


def test_edit_recomputes_hours_when_only_clock_in_moves():
    store, entries, audit, svc = _build()
    store.append_rows(
        schema.TIME_ENTRIES, [_entry_row("2026-03-09T13:00:00.000Z", "2026-03-09T21:00:00.000Z", "8.00")]
    )

    edited = svc.edit(
        admin_user="admin",
        employee_id="john-smith",
        original_clock_in="2026-03-09T13:00:00.000Z",
        updates={"clockInTime": "2026-03-09T14:00:00.000Z"},
    )

    assert edited.hours_worked == 7.0
    assert entries.find("john-smith", datetime(2026, 3, 9, 13, tzinfo=timezone.utc)) is None
    assert entries.find("john-smith", datetime(2026, 3, 9, 14, tzinfo=timezone.utc)) is not None


def test_edit_missing_entry_is_not_found_and_not_audited():
    _, _, audit, svc = _build()

    with pytest.raises(NotFoundError):
        svc.edit(
            admin_user="admin",
            employee_id="john-smith",
            original_clock_in="2026-03-09T13:00:00.000Z",
            updates={"notes": "x"},
        )
    assert audit.list_all() == []


def test_edit_rejects_clock_out_before_clock_in():
    store, _, audit, svc = _build()
    store.append_rows(schema.TIME_ENTRIES, [_entry_row("2026-03-09T13:00:00.000Z")])

    with pytest.raises(InvalidDurationError):
        svc.edit(
            admin_user="admin",
            employee_id="john-smith",
            original_clock_in="2026-03-09T13:00:00.000Z",
            updates={"clockOutTime": "2026-03-09T12:00:00.000Z"},
        )
    assert audit.list_all() == []


def test_edit_cannot_reopen_entry_when_another_is_open():
    store, _, _, svc = _build()
    store.append_rows(
        schema.TIME_ENTRIES,
        [
            _entry_row("2026-03-09T13:00:00.000Z", "2026-03-09T17:00:00.000Z", "4.00"),
            _entry_row("2026-03-10T13:00:00.000Z", day="2026-03-10"),
        ],
    )

    with pytest.raises(InvalidClockOutRequiredError):
        svc.edit(
            admin_user="admin",
            employee_id="john-smith",
            original_clock_in="2026-03-09T13:00:00.000Z",
            updates={"clockOutTime": ""},
        )


def test_add_writes_closed_entry_and_audits_without_prior():
    _, entries, audit, svc = _build()

    added = svc.add(
        admin_user="admin",
        employee_id="john-smith",
        fields={
            "clockInTime": "2026-03-08T13:00:00Z",
            "clockOutTime": "2026-03-08T17:45:00Z",
            "date": "2026-03-08",
            "notes": "forgot to clock in",
        },
    )

    assert added.hours_worked == 4.75
    assert added.work_date == date(2026, 3, 8)
    assert added.is_edited
    assert [e.clock_in for e in entries.list_for_employee("john-smith")] == [added.clock_in]

    log = audit.list_all()
    assert len(log) == 1
    assert log[0].action == AuditAction.ADD_TIME_ENTRY
    assert log[0].original_data is None
    assert json.loads(log[0].new_data)["notes"] == "forgot to clock in"


def test_add_requires_both_times():
    _, _, audit, svc = _build()

    with pytest.raises(InvalidDurationError):
        svc.add(admin_user="admin", employee_id="john-smith", fields={"clockOutTime": "2026-03-08T17:00:00Z"})
    with pytest.raises(InvalidClockOutRequiredError):
        svc.add(admin_user="admin", employee_id="john-smith", fields={"clockInTime": "2026-03-08T13:00:00Z"})
    assert audit.list_all() == []


def test_add_rejects_duplicate_start():
    store, _, _, svc = _build()
    store.append_rows(
        schema.TIME_ENTRIES, [_entry_row("2026-03-09T13:00:00.000Z", "2026-03-09T17:00:00.000Z", "4.00")]
    )

    with pytest.raises(ValidationError):
        svc.add(
            admin_user="admin",
            employee_id="john-smith",
            fields={"clockInTime": "2026-03-09T13:00:00Z", "clockOutTime": "2026-03-09T15:00:00Z"},
        )


def test_naive_admin_input_uses_configured_timezone():
    store = InMemoryRecordStore()
    ensure_sheets(store)
    store.append_rows(schema.EMPLOYEES, [["john-smith", "John Smith", "true", "clocked_out", "", "", "x"]])
    svc = ReconciliationService(
        SheetTimeEntryRepository(store),
        SheetEmployeeRepository(store),
        SheetAuditLogRepository(store),
        tz=ZoneInfo("America/New_York"),
        clock=lambda: NOW,
    )

    added = svc.add(
        admin_user="admin",
        employee_id="john-smith",
        fields={"clockInTime": "2026-03-09T09:00:00", "clockOutTime": "2026-03-09T17:00:00"},
    )

    assert added.clock_in == datetime(2026, 3, 9, 13, 0, tzinfo=timezone.utc)
    assert added.work_date == date(2026, 3, 9)


def test_delete_blanks_row_and_audits_prior():
    store, entries, audit, svc = _build()
    store.append_rows(
        schema.TIME_ENTRIES,
        [
            _entry_row("2026-03-09T13:00:00.000Z", "2026-03-09T17:00:00.000Z", "4.00"),
            _entry_row("2026-03-10T13:00:00.000Z", "2026-03-10T15:00:00.000Z", "2.00", day="2026-03-10"),
        ],
    )

    svc.delete(admin_user="admin", employee_id="john-smith", clock_in="2026-03-09T13:00:00.000Z")

    raw = store.raw_values(schema.TIME_ENTRIES)
    assert len(raw) == 3  # header + tombstone + surviving row
    assert raw[1] == [""] * len(schema.TIME_ENTRY_COLUMNS)
    assert [e.work_date for e in entries.list_all()] == [date(2026, 3, 10)]

    log = audit.list_all()
    assert len(log) == 1
    assert log[0].action == AuditAction.DELETE_TIME_ENTRY
    assert log[0].new_data is None
    assert json.loads(log[0].original_data)["hoursWorked"] == 4.0


def test_delete_missing_entry_is_not_found_and_not_audited():
    _, _, audit, svc = _build()

    with pytest.raises(NotFoundError):
        svc.delete(admin_user="admin", employee_id="john-smith", clock_in="2026-03-09T13:00:00.000Z")
    assert audit.list_all() == []


class AuditDownStore(InMemoryRecordStore):
    def append_rows(self, name, rows):
        if name == schema.AUDIT_LOG:
            raise UpstreamUnavailableError("audit down", operation="append")
        super().append_rows(name, rows)


def test_audit_failure_does_not_undo_mutation():
    store, entries, _, svc = _build(AuditDownStore())

    svc.add(
        admin_user="admin",
        employee_id="john-smith",
        fields={"clockInTime": "2026-03-08T13:00:00Z", "clockOutTime": "2026-03-08T14:00:00Z"},
    )

    assert len(entries.list_for_employee("john-smith")) == 1


def test_timecard_is_newest_first():
    store, _, _, svc = _build()
    store.append_rows(
        schema.TIME_ENTRIES,
        [
            _entry_row("2026-03-08T13:00:00.000Z", "2026-03-08T14:00:00.000Z", "1.00", day="2026-03-08"),
            _entry_row("2026-03-09T13:00:00.000Z", "2026-03-09T14:00:00.000Z", "1.00"),
        ],
    )

    card = svc.timecard("john-smith")
    assert [e.work_date for e in card] == [date(2026, 3, 9), date(2026, 3, 8)]


def test_audit_log_skips_undecodable_rows_and_lists_newest_first():
    store, _, audit, svc = _build()
    store.append_rows(
        schema.AUDIT_LOG,
        [
            ["2026-03-08T10:00:00.000Z", "admin", "add_time_entry", "john-smith", "John Smith", "added", "", "{}"],
            ["2026-03-08T11:00:00.000Z", "admin", "rename_employee", "john-smith", "John Smith", "?", "", ""],
            ["not-a-time", "admin", "edit_time_entry", "john-smith", "John Smith", "?", "", ""],
            ["2026-03-09T10:00:00.000Z", "admin", "delete_time_entry", "jane-doe", "Jane Doe", "deleted", "{}", ""],
        ],
    )

    assert [a.action for a in audit.list_all()] == [AuditAction.ADD_TIME_ENTRY, AuditAction.DELETE_TIME_ENTRY]
    assert [a.employee_id for a in svc.audit_log()] == ["jane-doe", "john-smith"]
    assert [a.action for a in svc.audit_log("john-smith")] == [AuditAction.ADD_TIME_ENTRY]
