"""Tests for environment-backed settings."""

from __future__ import annotations

import pytest

from altmetric_mcp.settings import AltmetricSettings, ConfigurationError

_ENV_VARS = (
    "ALTMETRIC_DETAILS_API_KEY",
    "ALTMETRIC_DETAILS_API_BASE_URL",
    "ALTMETRIC_EXPLORER_API_KEY",
    "ALTMETRIC_EXPLORER_API_SECRET",
    "ALTMETRIC_EXPLORER_API_BASE_URL",
    "ALTMETRIC_REQUEST_TIMEOUT",
    "ALTMETRIC_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _settings() -> AltmetricSettings:
    return AltmetricSettings(_env_file=None)


def test_defaults() -> None:
    settings = _settings()
    assert settings.details_api_key is None
    assert settings.explorer_api_key is None
    assert settings.explorer_secret_value is None
    assert settings.details_api_base_url == "https://api.altmetric.com"
    assert settings.explorer_api_base_url == "https://www.altmetric.com"
    assert settings.request_timeout == 30.0
    assert settings.log_level == "INFO"
    assert not settings.has_details_api
    assert not settings.has_explorer_api


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALTMETRIC_DETAILS_API_KEY", "details-key")
    monkeypatch.setenv("ALTMETRIC_EXPLORER_API_KEY", "explorer-key")
    monkeypatch.setenv("ALTMETRIC_EXPLORER_API_SECRET", "this-is-a-valid-secret-key")
    monkeypatch.setenv("ALTMETRIC_REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("ALTMETRIC_LOG_LEVEL", "debug")

    settings = _settings()
    assert settings.details_api_key == "details-key"
    assert settings.explorer_api_key == "explorer-key"
    assert settings.explorer_secret_value == "this-is-a-valid-secret-key"
    assert settings.request_timeout == 12.5
    assert settings.log_level == "DEBUG"
    assert settings.has_details_api
    assert settings.has_explorer_api


def test_secret_hidden_from_repr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALTMETRIC_EXPLORER_API_SECRET", "this-is-a-valid-secret-key")
    settings = _settings()
    assert "this-is-a-valid-secret-key" not in repr(settings)


@pytest.mark.parametrize("raw", ["abc", "-1", "0", ""])
def test_malformed_timeout_falls_back(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("ALTMETRIC_REQUEST_TIMEOUT", raw)
    assert _settings().request_timeout == 30.0


def test_blank_credentials_are_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALTMETRIC_DETAILS_API_KEY", "   ")
    monkeypatch.setenv("ALTMETRIC_EXPLORER_API_SECRET", "")
    settings = _settings()
    assert settings.details_api_key is None
    assert settings.explorer_api_secret is None


def test_explorer_requires_key_and_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALTMETRIC_EXPLORER_API_KEY", "explorer-key")
    settings = _settings()
    assert not settings.has_explorer_api
    with pytest.raises(ConfigurationError):
        settings.require_any_api()


def test_require_any_api_accepts_details_only(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALTMETRIC_DETAILS_API_KEY", "details-key")
    _settings().require_any_api()


def test_require_any_api_accepts_explorer_only() -> None:
    settings = AltmetricSettings(
        _env_file=None,
        explorer_api_key="explorer-key",
        explorer_api_secret="this-is-a-valid-secret-key",
    )
    settings.require_any_api()
    assert settings.has_explorer_api
