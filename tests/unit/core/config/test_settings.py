"""Tests for environment-driven settings."""

from __future__ import annotations

from aegis.core.config.settings import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("RANDOM_SEED", raising=False)
    settings = Settings(_env_file=None)
    assert settings.aegis_host == "127.0.0.1"
    assert settings.aegis_allow_insecure_bind is False
    assert settings.history_capacity == 1000
    assert settings.update_interval_ms == 2000
    assert settings.baseline_profile_path == ""
    assert settings.random_seed is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("AEGIS_PORT", "9100")
    monkeypatch.setenv("HISTORY_CAPACITY", "50")
    monkeypatch.setenv("UPDATE_INTERVAL_MS", "500")
    monkeypatch.setenv("RANDOM_SEED", "7")
    settings = get_settings()
    assert settings.aegis_port == 9100
    assert settings.history_capacity == 50
    assert settings.update_interval_ms == 500
    assert settings.random_seed == 7
