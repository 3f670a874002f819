from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NetworkRule:
    """Mạng văn phòng được phép thay thế cho xác minh GPS (so khớp IP chính xác)."""

    network_id: str
    name: str
    ip_address: str
    is_active: bool = True
    notes: str = ""
