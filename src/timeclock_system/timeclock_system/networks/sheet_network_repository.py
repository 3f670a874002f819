from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..core.exceptions import NotFoundError, SheetNotFoundError
from ..store import schema
from ..store.record_store import Record, RecordStore, append_record, is_blank, locate, write_record
from .model import NetworkRule
from .repository import NetworkRuleRepository

logger = logging.getLogger(__name__)


def decode_network(r: Record) -> NetworkRule:
    return NetworkRule(
        network_id=r.get("id", "").strip(),
        name=r.get("name", ""),
        ip_address=r.get("ipAddress", "").strip(),
        is_active=r.get("isActive", "").strip().lower() == "true",
        notes=r.get("notes", ""),
    )


def encode_network(n: NetworkRule) -> dict:
    return {
        "id": n.network_id,
        "name": n.name,
        "ipAddress": n.ip_address,
        "isActive": n.is_active,
        "notes": n.notes,
    }


class SheetNetworkRuleRepository(NetworkRuleRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> Sequence[NetworkRule]:
        try:
            records = self._store.read_sheet(schema.ALLOWED_NETWORKS)
        except SheetNotFoundError:
            # No collection yet means no networks configured.
            logger.info("%s sheet missing; treating as no allowed networks", schema.ALLOWED_NETWORKS)
            return []
        return [decode_network(r) for r in records if not is_blank(r)]

    def list_active(self) -> Sequence[NetworkRule]:
        return [n for n in self.list_all() if n.is_active]

    def create(self, rule: NetworkRule) -> None:
        self._store.ensure_sheet(schema.ALLOWED_NETWORKS, schema.NETWORK_COLUMNS)
        append_record(self._store, schema.ALLOWED_NETWORKS, encode_network(rule))

    def set_active(self, network_id: str, *, is_active: bool) -> NetworkRule:
        try:
            found = locate(self._store, schema.ALLOWED_NETWORKS, lambda r: r.get("id", "").strip() == network_id)
        except SheetNotFoundError:
            found = None
        if not found:
            raise NotFoundError(f"Network not found: {network_id}")
        row_number, record = found
        updated = replace(decode_network(record), is_active=is_active)
        write_record(self._store, schema.ALLOWED_NETWORKS, row_number, encode_network(updated))
        return updated
