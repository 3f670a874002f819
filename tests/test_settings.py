from __future__ import annotations

from types import SimpleNamespace

import pytest

from config import get_settings_module
from config import testing as testing_settings

from src.timeclock_system.timeclock_system.core.exceptions import ConfigurationError
from src.timeclock_system.timeclock_system.settings import build_settings


def test_app_env_selects_settings_module(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module() == "config.production"
    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "config.testing"
    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_testing_settings_use_memory_store():
    settings = build_settings(testing_settings)

    assert settings.store_backend == "memory"
    assert settings.tz.key == "UTC"
    assert settings.default_site.radius == 100.0
    assert settings.public_ip_fallback is False


def test_sheets_backend_requires_spreadsheet_id():
    module = SimpleNamespace(SECRET_KEY="k", STORE_BACKEND="sheets", SPREADSHEET_ID="")
    with pytest.raises(ConfigurationError):
        build_settings(module)


def test_unknown_timezone_and_backend_are_rejected():
    with pytest.raises(ConfigurationError):
        build_settings(SimpleNamespace(SECRET_KEY="k", STORE_BACKEND="memory", TIMEZONE="Mars/Olympus"))
    with pytest.raises(ConfigurationError):
        build_settings(SimpleNamespace(SECRET_KEY="k", STORE_BACKEND="postgres"))


def test_secret_key_is_required():
    with pytest.raises(ConfigurationError):
        build_settings(SimpleNamespace(STORE_BACKEND="memory"))
