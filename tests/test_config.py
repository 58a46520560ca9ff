"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from config import DEFAULT_MAX_BODY_BYTES, Settings

ENV_VARS = [
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_API_BASE_URL",
    "GEMINI_TIMEOUT_SECONDS",
    "HOST",
    "PORT",
    "STATIC_DIR",
    "MAX_BODY_BYTES",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a stray .env in the repo root out of these tests
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("config.load_dotenv", lambda: False)


def test_defaults(tmp_path) -> None:
    settings = Settings.from_env()

    assert settings.google_api_key == ""
    assert settings.has_api_key is False
    assert settings.model == "gemini-2.5-flash"
    assert settings.port == 4000
    assert settings.request_timeout == 60.0
    assert settings.max_body_bytes == DEFAULT_MAX_BODY_BYTES
    assert settings.static_dir == str(tmp_path)
    assert settings.log_level == "INFO"


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", " abc ")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-pro")
    monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.google_api_key == "abc"
    assert settings.port == 8080
    assert settings.model == "gemini-pro"
    assert settings.request_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_gemini_api_key_alias(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "alias")

    assert Settings.from_env().google_api_key == "alias"


def test_zero_timeout_disables_it(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", "0")

    assert Settings.from_env().request_timeout is None


def test_model_url_strips_trailing_slash() -> None:
    settings = Settings(api_base_url="https://example.test/v1beta/", model="m")

    assert settings.model_url("generateContent") == "https://example.test/v1beta/models/m:generateContent"


def test_settings_are_immutable() -> None:
    with pytest.raises(AttributeError):
        Settings().model = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    "name, value",
    [("PORT", "eighty"), ("MAX_BODY_BYTES", "10MB"), ("GEMINI_TIMEOUT_SECONDS", "soon")],
)
def test_malformed_numbers_name_the_variable(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        Settings.from_env()
