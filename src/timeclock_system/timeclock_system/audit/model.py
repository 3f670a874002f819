from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AuditAction


@dataclass(frozen=True)
class AuditLogEntry:
    """Nhật ký kiểm toán: chỉ ghi thêm, không bao giờ sửa hay xoá.

    original_data / new_data là snapshot JSON (None cho add / delete tương ứng).
    """

    timestamp: datetime
    admin_user: str
    action: AuditAction
    employee_id: str
    employee_name: str
    details: str
    original_data: Optional[str] = None
    new_data: Optional[str] = None
