from __future__ import annotations

from config import compliance_from_env, get_settings_module
from fatigue_compliance.compliance.limits import ComplianceLimits


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"

    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module() == "config.production"

    monkeypatch.setenv("APP_ENV", "test")
    assert get_settings_module() == "config.testing"


def test_compliance_overrides_from_env(monkeypatch):
    monkeypatch.setenv("MAX_SHIFT_HOURS", "10")
    monkeypatch.setenv("CHECK_FATIGUE", "false")
    monkeypatch.delenv("MIN_REST_HOURS", raising=False)

    overrides = compliance_from_env()
    limits = ComplianceLimits.from_mapping(overrides)

    assert overrides["MAX_SHIFT_HOURS"] == "10"
    assert "MIN_REST_HOURS" not in overrides
    assert limits.max_shift_hours == 10.0
    assert limits.check_fatigue is False
