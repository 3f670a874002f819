from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime, to_iso
from ..core.exceptions import NotFoundError
from ..store import schema
from ..store.record_store import Record, RecordStore, append_record, clear_row, is_blank, write_record
from .model import TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


def _float_or_none(value: str) -> Optional[float]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return float(v)
    except ValueError:
        return None


def decode_time_entry(r: Record) -> Optional[TimeEntry]:
    """Decode one row; returns None for tombstones and rows without a valid clock-in."""
    if is_blank(r) or not r.get("employeeId", "").strip():
        return None
    try:
        clock_in = parse_iso_datetime(r.get("clockInTime", ""))
        clock_out = parse_iso_datetime(r.get("clockOutTime", ""))
    except ValueError:
        logger.warning("Skipping time entry with unparseable timestamps for %s: %r", r.get("employeeId"), r)
        return None
    if clock_in is None:
        logger.warning("Skipping time entry without clock-in for %s", r.get("employeeId"))
        return None

    raw_date = r.get("date", "").strip()
    try:
        work_date = parse_iso_date(raw_date) if raw_date else clock_in.date()
    except ValueError:
        work_date = clock_in.date()

    return TimeEntry(
        employee_id=r["employeeId"].strip(),
        employee_name=r.get("employeeName", ""),
        clock_in=clock_in,
        clock_out=clock_out,
        work_date=work_date,
        location_lat=_float_or_none(r.get("locationLat", "")),
        location_lng=_float_or_none(r.get("locationLng", "")),
        hours_worked=_float_or_none(r.get("hoursWorked", "")) if clock_out else None,
        is_edited=r.get("isEdited", "").strip().lower() == "true",
        edited_by=r.get("editedBy", "").strip() or None,
        notes=r.get("notes", ""),
    )


def encode_time_entry(e: TimeEntry) -> dict:
    return {
        "employeeId": e.employee_id,
        "employeeName": e.employee_name,
        "clockInTime": to_iso(e.clock_in),
        "clockOutTime": to_iso(e.clock_out) if e.clock_out else "",
        "date": e.work_date.strftime("%Y-%m-%d"),
        "locationLat": "" if e.location_lat is None else e.location_lat,
        "locationLng": "" if e.location_lng is None else e.location_lng,
        "hoursWorked": "" if e.hours_worked is None else f"{e.hours_worked:.2f}",
        "isEdited": e.is_edited,
        "editedBy": e.edited_by or "",
        "notes": e.notes or "",
    }


class SheetTimeEntryRepository(TimeEntryRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def _scan(self) -> List[Tuple[int, TimeEntry]]:
        out = []
        for index, record in enumerate(self._store.read_sheet(schema.TIME_ENTRIES)):
            entry = decode_time_entry(record)
            if entry is not None:
                out.append((index + 2, entry))
        return out

    def _locate(self, employee_id: str, clock_in: datetime) -> Optional[Tuple[int, TimeEntry]]:
        for row_number, entry in self._scan():
            if entry.employee_id == employee_id and entry.clock_in == clock_in:
                return row_number, entry
        return None

    def list_for_employee(self, employee_id: str) -> Sequence[TimeEntry]:
        return [e for _, e in self._scan() if e.employee_id == employee_id]

    def list_all(self) -> Sequence[TimeEntry]:
        return [e for _, e in self._scan()]

    def list_open_for_employee(self, employee_id: str) -> Sequence[TimeEntry]:
        return [e for e in self.list_for_employee(employee_id) if e.is_open]

    def find(self, employee_id: str, clock_in: datetime) -> Optional[TimeEntry]:
        found = self._locate(employee_id, clock_in)
        return found[1] if found else None

    def append(self, entry: TimeEntry) -> None:
        append_record(self._store, schema.TIME_ENTRIES, encode_time_entry(entry))

    def replace(self, employee_id: str, original_clock_in: datetime, entry: TimeEntry) -> TimeEntry:
        found = self._locate(employee_id, original_clock_in)
        if not found:
            raise NotFoundError("Time entry not found")
        row_number, prior = found
        write_record(self._store, schema.TIME_ENTRIES, row_number, encode_time_entry(entry))
        return prior

    def clear(self, employee_id: str, clock_in: datetime) -> TimeEntry:
        found = self._locate(employee_id, clock_in)
        if not found:
            raise NotFoundError("Time entry not found")
        row_number, prior = found
        clear_row(self._store, schema.TIME_ENTRIES, row_number)
        return prior
