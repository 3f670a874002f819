from __future__ import annotations

import pytest

from src.timeclock_system.timeclock_system.core.exceptions import NotFoundError, ValidationError
from src.timeclock_system.timeclock_system.networks.service import NetworkService
from src.timeclock_system.timeclock_system.networks.sheet_network_repository import SheetNetworkRuleRepository
from src.timeclock_system.timeclock_system.store import schema
from src.timeclock_system.timeclock_system.store.memory import InMemoryRecordStore
from src.timeclock_system.timeclock_system.verification.network import NetworkVerifier


def test_missing_sheet_means_no_networks():
    repo = SheetNetworkRuleRepository(InMemoryRecordStore())

    assert repo.list_all() == []
    assert not NetworkVerifier(repo).is_allowed("203.0.113.5")


def test_add_creates_sheet_and_allows_ip():
    store = InMemoryRecordStore()
    repo = SheetNetworkRuleRepository(store)
    svc = NetworkService(repo)

    rule = svc.add(name="Main Office", ip_address=" 203.0.113.5 ")

    assert rule.network_id == "main-office"
    assert rule.notes.startswith("Added ")
    assert store.raw_values(schema.ALLOWED_NETWORKS)[0] == list(schema.NETWORK_COLUMNS)
    assert NetworkVerifier(repo).is_allowed("203.0.113.5")


def test_add_validates_input():
    svc = NetworkService(SheetNetworkRuleRepository(InMemoryRecordStore()))

    with pytest.raises(ValidationError):
        svc.add(name="Office", ip_address="not-an-ip")
    with pytest.raises(ValidationError):
        svc.add(name="", ip_address="203.0.113.5")

    svc.add(name="Office", ip_address="203.0.113.5")
    with pytest.raises(ValidationError):
        svc.add(name="office", ip_address="203.0.113.9")


def test_deactivate_rule():
    repo = SheetNetworkRuleRepository(InMemoryRecordStore())
    svc = NetworkService(repo)
    svc.add(name="Office", ip_address="203.0.113.5")

    updated = svc.set_active(network_id="office", is_active=False)

    assert updated.is_active is False
    assert not NetworkVerifier(repo).is_allowed("203.0.113.5")
    assert [n.ip_address for n in svc.list_all()] == ["203.0.113.5"]


def test_set_active_unknown_network():
    svc = NetworkService(SheetNetworkRuleRepository(InMemoryRecordStore()))
    with pytest.raises(NotFoundError):
        svc.set_active(network_id="nope", is_active=True)
