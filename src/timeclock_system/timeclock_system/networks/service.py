from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import require_ip_address, require_non_empty, slugify
from ..core.exceptions import ValidationError
from .model import NetworkRule
from .repository import NetworkRuleRepository


class NetworkService:
    """Use case: manage allow-listed office networks (admin)."""

    def __init__(self, networks: NetworkRuleRepository):
        self._networks = networks

    def list_all(self) -> Sequence[NetworkRule]:
        return self._networks.list_all()

    def add(self, *, name: str, ip_address: str) -> NetworkRule:
        name = require_non_empty(name, "Name")
        ip_address = require_ip_address(ip_address)

        network_id = slugify(name)
        if any(n.network_id == network_id for n in self._networks.list_all()):
            raise ValidationError(f"Network already exists: {network_id}")

        rule = NetworkRule(
            network_id=network_id,
            name=name,
            ip_address=ip_address,
            is_active=True,
            notes=f"Added {to_iso(now_utc())}",
        )
        self._networks.create(rule)
        return rule

    def set_active(self, *, network_id: str, is_active: bool) -> NetworkRule:
        network_id = require_non_empty(network_id, "Network ID")
        return self._networks.set_active(network_id, is_active=bool(is_active))
