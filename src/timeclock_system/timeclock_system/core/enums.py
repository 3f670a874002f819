from __future__ import annotations

from enum import Enum


class ClockStatus(str, Enum):
    """Trạng thái chấm công hiện tại của nhân viên."""

    CLOCKED_IN = "clocked_in"
    CLOCKED_OUT = "clocked_out"


class VerificationChannel(str, Enum):
    """Kênh xác minh có mặt khi chấm công vào ca."""

    NETWORK = "network"
    GPS = "gps"


class AuditAction(str, Enum):
    ADD_TIME_ENTRY = "add_time_entry"
    EDIT_TIME_ENTRY = "edit_time_entry"
    DELETE_TIME_ENTRY = "delete_time_entry"


class TokenKind(str, Enum):
    """Loại principal mà token đại diện."""

    ADMIN = "admin"
    EMPLOYEE = "employee"
