"""Tests for Settings loading."""

import pytest

from stockmonitor.config import DEFAULT_SYMBOLS, Settings


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("TWELVE_DATA_API_KEY", "env-key")
    monkeypatch.setenv("STOCK_SYMBOLS", "aapl, NVDA ,,")
    monkeypatch.setenv("REFRESH_INTERVAL", "15")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.TWELVE_DATA_API_KEY == "env-key"
    assert settings.STOCK_SYMBOLS == ["aapl", "NVDA"]
    assert settings.REFRESH_INTERVAL == 15.0
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.api_key_configured


def test_legacy_key_name_is_accepted(monkeypatch):
    monkeypatch.delenv("TWELVE_DATA_API_KEY", raising=False)
    monkeypatch.setenv("NEXT_PUBLIC_TWELVE_DATA_API_KEY", "legacy-key")
    assert Settings().TWELVE_DATA_API_KEY == "legacy-key"


def test_defaults(monkeypatch):
    for name in ("TWELVE_DATA_API_KEY", "NEXT_PUBLIC_TWELVE_DATA_API_KEY", "STOCK_SYMBOLS", "REFRESH_INTERVAL",
                 "TWELVE_DATA_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.STOCK_SYMBOLS == DEFAULT_SYMBOLS
    assert settings.REFRESH_INTERVAL == 60.0
    assert not settings.api_key_configured
    assert settings.upstream_config["base_url"] == "https://api.twelvedata.com"


def test_overrides_win_over_environment(monkeypatch):
    monkeypatch.setenv("TWELVE_DATA_API_KEY", "env-key")
    assert Settings(TWELVE_DATA_API_KEY="override").TWELVE_DATA_API_KEY == "override"


def test_unknown_override_is_rejected():
    with pytest.raises(AttributeError):
        Settings(NOT_A_SETTING=1)
