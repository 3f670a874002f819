from __future__ import annotations

from typing import Protocol, Sequence

from .model import NetworkRule


class NetworkRuleRepository(Protocol):
    def list_all(self) -> Sequence[NetworkRule]:
        raise NotImplementedError

    def list_active(self) -> Sequence[NetworkRule]:
        raise NotImplementedError

    def create(self, rule: NetworkRule) -> None:
        raise NotImplementedError

    def set_active(self, network_id: str, *, is_active: bool) -> NetworkRule:
        raise NotImplementedError
