from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests

from ..core.constants import DEFAULT_IP_LOOKUP_TIMEOUT_SECONDS, DEFAULT_IP_LOOKUP_URL, LOOPBACK_ADDRESSES
from ..core.exceptions import UpstreamUnavailableError
from ..networks.repository import NetworkRuleRepository

logger = logging.getLogger(__name__)


def client_ip_from_headers(headers: Mapping[str, str], remote_addr: Optional[str] = None) -> str:
    """Best-effort caller IP extraction.

    Order: X-Forwarded-For (first hop), CF-Connecting-IP, X-Real-IP, then the
    socket address. Returns 'unknown' when nothing is present.
    """
    xff = headers.get("X-Forwarded-For")
    if xff:
        # XFF format: client, proxy1, proxy2
        first = xff.split(",")[0].strip()
        if first:
            return first
    for name in ("CF-Connecting-IP", "X-Real-IP"):
        value = (headers.get(name) or "").strip()
        if value:
            return value
    return (remote_addr or "").strip() or "unknown"


class PublicIpLookup:
    """Ask an external 'what is my IP' service for our public address.

    Local development accommodation: when the app runs on localhost the
    request comes from a loopback address, which no allow-list can match.
    """

    def __init__(
        self,
        *,
        url: str = DEFAULT_IP_LOOKUP_URL,
        timeout_seconds: float = DEFAULT_IP_LOOKUP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._url = url
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def lookup(self) -> str:
        try:
            resp = self._session.get(self._url, timeout=self._timeout)
            resp.raise_for_status()
            ip = str(resp.json().get("ip") or "").strip()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning("Public IP lookup via %s failed: %s", self._url, e)
            raise UpstreamUnavailableError("Public IP lookup failed", operation="ip_lookup") from e
        if not ip:
            raise UpstreamUnavailableError("Public IP lookup returned no address", operation="ip_lookup")
        return ip


class ClientIpResolver:
    def __init__(self, lookup: Optional[PublicIpLookup] = None):
        # lookup=None disables the public-IP fallback (production default).
        self._lookup = lookup

    def resolve(self, headers: Mapping[str, str], remote_addr: Optional[str] = None) -> str:
        ip = client_ip_from_headers(headers, remote_addr)
        if ip in LOOPBACK_ADDRESSES and self._lookup is not None:
            public_ip = self._lookup.lookup()
            logger.debug("Resolved loopback caller %s to public IP %s", ip, public_ip)
            return public_ip
        return ip


class NetworkVerifier:
    """Exact-match allow-list check against the active network rules.

    No CIDR/prefix matching.
    """

    def __init__(self, networks: NetworkRuleRepository):
        self._networks = networks

    def is_allowed(self, ip: Optional[str]) -> bool:
        if not ip:
            return False
        ip = ip.strip()
        return any(n.ip_address == ip for n in self._networks.list_active())
