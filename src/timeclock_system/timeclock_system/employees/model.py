from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ClockStatus


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Employee.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập kho dữ liệu).
    Không bao giờ xoá vật lý, chỉ tắt cờ is_active.
    """

    employee_id: str
    name: str
    is_active: bool
    current_status: ClockStatus
    last_clock_in: Optional[datetime]
    last_clock_out: Optional[datetime]
    password_hash: str = ""

    @property
    def is_clocked_in(self) -> bool:
        return self.current_status == ClockStatus.CLOCKED_IN


@dataclass(frozen=True)
class EmployeeProfile:
    """Read-model trả về cho client (không chứa mật khẩu)."""

    employee_id: str
    name: str
    is_active: bool
    current_status: ClockStatus
    last_clock_in: Optional[datetime]
    last_clock_out: Optional[datetime]

    @classmethod
    def of(cls, employee: Employee) -> "EmployeeProfile":
        return cls(
            employee_id=employee.employee_id,
            name=employee.name,
            is_active=employee.is_active,
            current_status=employee.current_status,
            last_clock_in=employee.last_clock_in,
            last_clock_out=employee.last_clock_out,
        )
