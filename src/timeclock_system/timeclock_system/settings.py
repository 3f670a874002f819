from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.constants import (
    DEFAULT_IP_LOOKUP_TIMEOUT_SECONDS,
    DEFAULT_IP_LOOKUP_URL,
    DEFAULT_SITE_RADIUS_METERS,
    DEFAULT_STORE_TIMEOUT_SECONDS,
)
from .core.exceptions import ConfigurationError

STORE_BACKENDS = ("sheets", "memory")


@dataclass(frozen=True)
class DefaultSite:
    name: str
    latitude: float
    longitude: float
    radius: float = DEFAULT_SITE_RADIUS_METERS
    address: str = ""


@dataclass(frozen=True)
class Settings:
    """Everything the container needs, resolved once at start-up."""

    secret_key: str
    store_backend: str
    spreadsheet_id: str
    service_account_file: str
    client_email: str
    private_key: str
    store_timeout_seconds: float
    ip_lookup_url: str
    ip_lookup_timeout_seconds: float
    public_ip_fallback: bool
    tz: ZoneInfo
    admin_password: str
    admin_password_hash: str
    auto_init_sheets: bool
    auto_seed_sheets: bool
    debug: bool
    testing: bool
    log_level: str
    default_site: Optional[DefaultSite] = None


def _default_site(module: ModuleType) -> Optional[DefaultSite]:
    name = getattr(module, "DEFAULT_SITE_NAME", "")
    if not name:
        return None
    return DefaultSite(
        name=str(name),
        latitude=float(getattr(module, "DEFAULT_SITE_LATITUDE")),
        longitude=float(getattr(module, "DEFAULT_SITE_LONGITUDE")),
        radius=float(getattr(module, "DEFAULT_SITE_RADIUS", DEFAULT_SITE_RADIUS_METERS)),
        address=str(getattr(module, "DEFAULT_SITE_ADDRESS", "")),
    )


def build_settings(module: ModuleType, **overrides) -> Settings:
    """Read a config.* settings module into a frozen Settings.

    `overrides` replace module values by lower-case field name (used by tests).
    """
    tz_name = str(getattr(module, "TIMEZONE", "UTC"))
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"Unknown TIMEZONE: {tz_name}")

    values = dict(
        secret_key=str(getattr(module, "SECRET_KEY", "")),
        store_backend=str(getattr(module, "STORE_BACKEND", "sheets")).strip().lower(),
        spreadsheet_id=str(getattr(module, "SPREADSHEET_ID", "")),
        service_account_file=str(getattr(module, "GOOGLE_SERVICE_ACCOUNT_FILE", "")),
        client_email=str(getattr(module, "GOOGLE_SHEETS_CLIENT_EMAIL", "")),
        private_key=str(getattr(module, "GOOGLE_SHEETS_PRIVATE_KEY", "")),
        store_timeout_seconds=float(getattr(module, "STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS)),
        ip_lookup_url=str(getattr(module, "IP_LOOKUP_URL", DEFAULT_IP_LOOKUP_URL)),
        ip_lookup_timeout_seconds=float(getattr(module, "IP_LOOKUP_TIMEOUT_SECONDS", DEFAULT_IP_LOOKUP_TIMEOUT_SECONDS)),
        public_ip_fallback=bool(getattr(module, "PUBLIC_IP_FALLBACK", False)),
        tz=tz,
        admin_password=str(getattr(module, "ADMIN_PASSWORD", "")),
        admin_password_hash=str(getattr(module, "ADMIN_PASSWORD_HASH", "")),
        auto_init_sheets=bool(getattr(module, "AUTO_INIT_SHEETS", False)),
        auto_seed_sheets=bool(getattr(module, "AUTO_SEED_SHEETS", False)),
        debug=bool(getattr(module, "DEBUG", False)),
        testing=bool(getattr(module, "TESTING", False)),
        log_level=str(getattr(module, "LOG_LEVEL", "INFO")).upper(),
        default_site=_default_site(module),
    )
    values.update(overrides)
    settings = Settings(**values)

    if not settings.secret_key:
        raise ConfigurationError("SECRET_KEY is required")
    if settings.store_backend not in STORE_BACKENDS:
        raise ConfigurationError(f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}")
    if settings.store_backend == "sheets" and not settings.spreadsheet_id:
        raise ConfigurationError("SPREADSHEET_ID is required for the sheets backend")
    return settings
