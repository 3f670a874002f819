from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import ClockStatus, VerificationChannel


@dataclass(frozen=True)
class TimeEntry:
    """Thực thể miền (domain): Bản ghi chấm công.

    Khoá tự nhiên: (employee_id, clock_in). clock_out rỗng nghĩa là bản ghi đang mở.
    """

    employee_id: str
    employee_name: str
    clock_in: datetime
    clock_out: Optional[datetime]
    work_date: date
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    hours_worked: Optional[float] = None
    is_edited: bool = False
    edited_by: Optional[str] = None
    notes: str = ""

    @property
    def is_open(self) -> bool:
        return self.clock_out is None


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ClockInResult:
    timestamp: datetime
    verified_by: VerificationChannel
    client_ip: Optional[str] = None


@dataclass(frozen=True)
class ClockOutResult:
    timestamp: datetime
    clock_in: datetime
    hours_worked: float


@dataclass(frozen=True)
class StatusReport:
    """Trạng thái hiện tại kèm kiểm tra nhất quán giữa Employees và TimeEntries."""

    employee_id: str
    status: ClockStatus
    open_entry: Optional[TimeEntry]
    open_entry_count: int

    @property
    def consistent(self) -> bool:
        if self.open_entry_count > 1:
            return False
        return (self.status == ClockStatus.CLOCKED_IN) == (self.open_entry_count == 1)


def entry_snapshot(entry: TimeEntry) -> dict:
    """JSON-ready image of an entry, used for audit snapshots and API responses."""
    return {
        "employeeId": entry.employee_id,
        "employeeName": entry.employee_name,
        "clockInTime": to_iso(entry.clock_in),
        "clockOutTime": to_iso(entry.clock_out) if entry.clock_out else "",
        "date": entry.work_date.isoformat(),
        "locationLat": entry.location_lat,
        "locationLng": entry.location_lng,
        "hoursWorked": entry.hours_worked,
        "isEdited": entry.is_edited,
        "editedBy": entry.edited_by or "",
        "notes": entry.notes,
    }
