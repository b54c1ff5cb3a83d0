"""Settings - environment loading, defaults and immutability."""

import pytest
from pydantic import ValidationError

from valkey_rest.config import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "VALKEY_ADDRESS", "VALKEY_PASSWORD", "AUTH_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.valkey_address == "localhost:6379"
    assert settings.valkey_password == ""
    assert settings.auth_enabled is False
    assert settings.read_timeout_seconds == 10
    assert settings.write_timeout_seconds == 10
    assert settings.idle_timeout_seconds == 120


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("VALKEY_ADDRESS", "valkey:6379")
    monkeypatch.setenv("VALKEY_PASSWORD", "pw")
    monkeypatch.setenv("AUTH_TOKEN", "secret")
    settings = Settings(_env_file=None)
    assert settings.port == 9090
    assert settings.valkey_address == "valkey:6379"
    assert settings.valkey_password == "pw"
    assert settings.auth_token == "secret"
    assert settings.auth_enabled is True


def test_blank_address_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("VALKEY_ADDRESS", "  ")
    assert Settings(_env_file=None).valkey_address == "localhost:6379"


def test_settings_are_frozen():
    settings = Settings(_env_file=None, auth_token="a")
    with pytest.raises(ValidationError):
        settings.auth_token = "b"
