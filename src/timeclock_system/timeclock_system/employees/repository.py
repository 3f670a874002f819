from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ClockStatus
from .model import Employee


class EmployeeRepository(Protocol):
    """Giao diện repository cho Employee.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp kho dữ liệu cụ thể.
    """

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, employee: Employee) -> None:
        raise NotImplementedError

    def update_profile(
        self,
        employee_id: str,
        *,
        name: Optional[str] = None,
        password_hash: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Employee:
        """Admin-owned columns only; clock status columns are written back as freshly read."""

        raise NotImplementedError

    def set_clock_status(self, employee_id: str, *, status: ClockStatus, timestamp: datetime) -> Employee:
        raise NotImplementedError
