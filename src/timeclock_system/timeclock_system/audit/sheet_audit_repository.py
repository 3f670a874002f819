from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime, to_iso
from ..core.enums import AuditAction
from ..core.exceptions import SheetNotFoundError
from ..store import schema
from ..store.record_store import Record, RecordStore, append_record, is_blank
from .model import AuditLogEntry
from .repository import AuditLogRepository

logger = logging.getLogger(__name__)


def decode_audit_entry(r: Record) -> Optional[AuditLogEntry]:
    """Decode one audit row; rows with an unknown action or timestamp are skipped."""
    if is_blank(r):
        return None
    try:
        timestamp = parse_iso_datetime(r.get("timestamp", ""))
        action = AuditAction(r.get("action", "").strip())
    except ValueError:
        logger.warning("Skipping undecodable audit row: %r", r)
        return None
    if timestamp is None:
        logger.warning("Skipping audit row without timestamp: %r", r)
        return None
    return AuditLogEntry(
        timestamp=timestamp,
        admin_user=r.get("adminUser", ""),
        action=action,
        employee_id=r.get("employeeId", ""),
        employee_name=r.get("employeeName", ""),
        details=r.get("details", ""),
        original_data=r.get("originalData") or None,
        new_data=r.get("newData") or None,
    )


class SheetAuditLogRepository(AuditLogRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def append(self, entry: AuditLogEntry) -> None:
        if self._store.ensure_sheet(schema.AUDIT_LOG, schema.AUDIT_COLUMNS):
            logger.info("%s sheet was missing and has been created", schema.AUDIT_LOG)
        append_record(
            self._store,
            schema.AUDIT_LOG,
            {
                "timestamp": to_iso(entry.timestamp),
                "adminUser": entry.admin_user,
                "action": entry.action.value,
                "employeeId": entry.employee_id,
                "employeeName": entry.employee_name,
                "details": entry.details,
                "originalData": entry.original_data or "",
                "newData": entry.new_data or "",
            },
        )

    def list_all(self) -> Sequence[AuditLogEntry]:
        try:
            records = self._store.read_sheet(schema.AUDIT_LOG)
        except SheetNotFoundError:
            return []
        decoded = (decode_audit_entry(r) for r in records)
        return [e for e in decoded if e is not None]
