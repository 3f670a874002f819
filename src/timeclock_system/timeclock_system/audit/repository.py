from __future__ import annotations

from typing import Protocol, Sequence

from .model import AuditLogEntry


class AuditLogRepository(Protocol):
    def append(self, entry: AuditLogEntry) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[AuditLogEntry]:
        raise NotImplementedError
