from __future__ import annotations

from typing import Sequence

import pytest
import requests

from src.timeclock_system.timeclock_system.core.exceptions import UpstreamUnavailableError
from src.timeclock_system.timeclock_system.networks.model import NetworkRule
from src.timeclock_system.timeclock_system.verification.network import (
    ClientIpResolver,
    NetworkVerifier,
    PublicIpLookup,
    client_ip_from_headers,
)


class InMemoryNetworks:
    def __init__(self, rules: Sequence[NetworkRule]):
        self._rules = list(rules)

    def list_all(self):
        return list(self._rules)

    def list_active(self):
        return [r for r in self._rules if r.is_active]


class FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code}")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, error: Exception | None = None):
        self._response = response
        self._error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self._error:
            raise self._error
        return self._response


def test_exact_ip_match_only():
    verifier = NetworkVerifier(InMemoryNetworks([NetworkRule("office", "Office", "203.0.113.5")]))

    assert verifier.is_allowed("203.0.113.5")
    assert not verifier.is_allowed("203.0.113.6")
    assert not verifier.is_allowed("203.0.113.0/24")
    assert not verifier.is_allowed(None)
    assert not verifier.is_allowed("")


def test_inactive_rules_do_not_allow():
    verifier = NetworkVerifier(InMemoryNetworks([NetworkRule("office", "Office", "203.0.113.5", is_active=False)]))
    assert not verifier.is_allowed("203.0.113.5")


def test_forwarded_for_first_hop_wins():
    headers = {"X-Forwarded-For": "198.51.100.1, 10.0.0.2", "X-Real-IP": "10.0.0.9"}
    assert client_ip_from_headers(headers, "127.0.0.1") == "198.51.100.1"


def test_header_fallback_order():
    assert client_ip_from_headers({"CF-Connecting-IP": "198.51.100.2", "X-Real-IP": "10.0.0.9"}) == "198.51.100.2"
    assert client_ip_from_headers({"X-Real-IP": "10.0.0.9"}) == "10.0.0.9"
    assert client_ip_from_headers({}, "192.0.2.10") == "192.0.2.10"
    assert client_ip_from_headers({}) == "unknown"


def test_loopback_resolves_through_public_lookup():
    session = FakeSession(FakeResponse({"ip": "203.0.113.5"}))
    resolver = ClientIpResolver(PublicIpLookup(url="https://ip.example/json", timeout_seconds=2, session=session))

    assert resolver.resolve({}, "127.0.0.1") == "203.0.113.5"
    assert session.calls == [("https://ip.example/json", 2)]


def test_non_loopback_skips_public_lookup():
    session = FakeSession(FakeResponse({"ip": "203.0.113.5"}))
    resolver = ClientIpResolver(PublicIpLookup(session=session))

    assert resolver.resolve({"X-Forwarded-For": "198.51.100.1"}, "127.0.0.1") == "198.51.100.1"
    assert session.calls == []


def test_lookup_disabled_returns_loopback_as_is():
    assert ClientIpResolver(None).resolve({}, "::1") == "::1"


def test_lookup_failure_is_upstream_unavailable():
    lookup = PublicIpLookup(session=FakeSession(error=requests.exceptions.Timeout("slow")))
    with pytest.raises(UpstreamUnavailableError):
        lookup.lookup()


def test_lookup_without_ip_field_is_upstream_unavailable():
    lookup = PublicIpLookup(session=FakeSession(FakeResponse({})))
    with pytest.raises(UpstreamUnavailableError):
        lookup.lookup()
