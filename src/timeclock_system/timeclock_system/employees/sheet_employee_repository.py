from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime, to_iso
from ..core.enums import ClockStatus
from ..core.exceptions import NotFoundError
from ..store import schema
from ..store.record_store import Record, RecordStore, append_record, is_blank, locate, write_record
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _parse_ts(value: str, *, employee_id: str, column: str) -> Optional[datetime]:
    try:
        return parse_iso_datetime(value)
    except ValueError:
        logger.warning("Unparseable %s %r for employee %s", column, value, employee_id)
        return None


def decode_employee(r: Record) -> Employee:
    employee_id = r.get("id", "").strip()
    status = r.get("currentStatus", "").strip()
    return Employee(
        employee_id=employee_id,
        name=r.get("name", ""),
        is_active=r.get("isActive", "").strip().lower() == "true",
        current_status=ClockStatus.CLOCKED_IN if status == ClockStatus.CLOCKED_IN.value else ClockStatus.CLOCKED_OUT,
        last_clock_in=_parse_ts(r.get("lastClockIn", ""), employee_id=employee_id, column="lastClockIn"),
        last_clock_out=_parse_ts(r.get("lastClockOut", ""), employee_id=employee_id, column="lastClockOut"),
        password_hash=r.get("passwordHash", ""),
    )


def encode_employee(e: Employee) -> dict:
    return {
        "id": e.employee_id,
        "name": e.name,
        "isActive": e.is_active,
        "currentStatus": e.current_status.value,
        "lastClockIn": to_iso(e.last_clock_in) if e.last_clock_in else "",
        "lastClockOut": to_iso(e.last_clock_out) if e.last_clock_out else "",
        "passwordHash": e.password_hash,
    }


class SheetEmployeeRepository(EmployeeRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def _locate(self, employee_id: str):
        return locate(self._store, schema.EMPLOYEES, lambda r: r.get("id", "").strip() == employee_id)

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        found = self._locate(employee_id)
        if not found:
            return None
        return decode_employee(found[1])

    def list_all(self) -> Sequence[Employee]:
        return [decode_employee(r) for r in self._store.read_sheet(schema.EMPLOYEES) if not is_blank(r)]

    def create(self, employee: Employee) -> None:
        append_record(self._store, schema.EMPLOYEES, encode_employee(employee))

    def update_profile(
        self,
        employee_id: str,
        *,
        name: Optional[str] = None,
        password_hash: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Employee:
        found = self._locate(employee_id)
        if not found:
            raise NotFoundError(f"Employee not found: {employee_id}")
        row_number, record = found
        current = decode_employee(record)
        updated = replace(
            current,
            name=current.name if name is None else name,
            password_hash=current.password_hash if password_hash is None else password_hash,
            is_active=current.is_active if is_active is None else is_active,
        )
        write_record(self._store, schema.EMPLOYEES, row_number, encode_employee(updated))
        return updated

    def set_clock_status(self, employee_id: str, *, status: ClockStatus, timestamp: datetime) -> Employee:
        # Re-read the row right before writing so the other columns are as fresh as possible.
        found = self._locate(employee_id)
        if not found:
            raise NotFoundError(f"Employee not found: {employee_id}")
        row_number, record = found
        current = decode_employee(record)
        if status == ClockStatus.CLOCKED_IN:
            updated = replace(current, current_status=status, last_clock_in=timestamp)
        else:
            updated = replace(current, current_status=status, last_clock_out=timestamp)
        write_record(self._store, schema.EMPLOYEES, row_number, encode_employee(updated))
        return updated
