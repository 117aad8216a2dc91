"""Tests for loading configuration from the environment."""

from __future__ import annotations

import dataclasses

import pytest

from codehelper.config import Config

ENV_VARS = [
    "JDOODLE_CLIENT_ID",
    "JDOODLE_CLIENT_SECRET",
    "JDOODLE_URL",
    "JDOODLE_LANGUAGE",
    "JDOODLE_VERSION_INDEX",
    "GEMINI_API_KEY",
    "GEMINI_BASE_URL",
    "GEMINI_TEXT_MODEL",
    "GEMINI_IMAGE_MODEL",
    "OLLAMA_HOST",
    "OLLAMA_DEFAULT_MODEL",
    "STATIC_DIR",
    "UPSTREAM_TIMEOUT_SECONDS",
    "CODEHELPER_REQUIRE_CREDENTIALS",
    "HOST",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory and undo anything a .env file sets."""
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults():
    config = Config.from_env()
    assert config.ollama_host == "http://127.0.0.1:11434"
    assert config.ollama_default_model == "phi3"
    assert config.jdoodle_language == "java"
    assert config.jdoodle_version_index == "4"
    assert config.port == 3000
    assert config.upstream_timeout is None
    assert config.missing_upstreams() == ["JDoodle", "Gemini"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("JDOODLE_CLIENT_ID", "id")
    monkeypatch.setenv("JDOODLE_CLIENT_SECRET", "secret")
    monkeypatch.setenv("GEMINI_API_KEY", " key ")
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434/")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "2.5")

    config = Config.from_env()

    assert config.gemini_api_key == "key"
    assert config.ollama_host == "http://gpu-box:11434"
    assert config.port == 8080
    assert config.upstream_timeout == 2.5
    assert config.missing_upstreams() == []


def test_invalid_integer(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ValueError, match="PORT"):
        Config.from_env()


def test_config_is_read_only():
    config = Config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.gemini_api_key = "changed"


def test_require_credentials_fails_fast(monkeypatch):
    monkeypatch.setenv("CODEHELPER_REQUIRE_CREDENTIALS", "true")
    monkeypatch.setenv("GEMINI_API_KEY", "key")
    with pytest.raises(RuntimeError, match="JDoodle"):
        Config.from_env()


def test_require_credentials_satisfied(monkeypatch):
    monkeypatch.setenv("CODEHELPER_REQUIRE_CREDENTIALS", "1")
    monkeypatch.setenv("JDOODLE_CLIENT_ID", "id")
    monkeypatch.setenv("JDOODLE_CLIENT_SECRET", "secret")
    monkeypatch.setenv("GEMINI_API_KEY", "key")
    assert Config.from_env().require_credentials


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text(
        "JDOODLE_CLIENT_ID=dotenv-id\nJDOODLE_CLIENT_SECRET=dotenv-secret\nGEMINI_API_KEY=dotenv-key\n",
        encoding="utf-8",
    )

    config = Config.from_env()

    assert config.jdoodle_client_id == "dotenv-id"
    assert config.gemini_api_key == "dotenv-key"
    assert config.missing_upstreams() == []


def test_environment_overrides_dotenv_file(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("GEMINI_API_KEY=dotenv-key\n", encoding="utf-8")
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")

    assert Config.from_env().gemini_api_key == "env-key"
