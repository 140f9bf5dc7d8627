from __future__ import annotations

from faultbridge.config import get_settings, reset_settings


def test_defaults():
    settings = get_settings()

    assert settings.host == "localhost"
    assert settings.port == "9526"
    assert settings.inject_path == "/inject"
    assert settings.recover_path == "/recover"
    assert settings.timeout == 30.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FAULTBRIDGE_AGENT_HOST", "10.0.0.8")
    monkeypatch.setenv("FAULTBRIDGE_AGENT_PORT", "9600")
    monkeypatch.setenv("FAULTBRIDGE_TIMEOUT_SECONDS", "2.5")

    settings = get_settings()

    assert settings.host == "10.0.0.8"
    assert settings.port == "9600"
    assert settings.timeout == 2.5


def test_settings_cached_until_reset(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("FAULTBRIDGE_AGENT_PORT", "9700")

    assert get_settings() is first

    reset_settings()
    assert get_settings().port == "9700"
