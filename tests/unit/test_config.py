"""Test configuration loading from the environment and .env files"""

from pathlib import Path

import pytest

from waconsole.core.config import Config, get_token_path
from waconsole.shared.exceptions import ConfigurationError

ENV_KEYS = [
    "WACONSOLE_API_URL",
    "WACONSOLE_TOKEN_PATH",
    "WACONSOLE_POLL_INTERVAL",
    "WACONSOLE_REQUEST_TIMEOUT",
    "WACONSOLE_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return tmp_path / ".env"


def test_config_defaults(clean_env):
    config = Config.from_env(clean_env)

    assert config.api_url == "http://localhost:3000/api"
    assert config.poll_interval == 3.0
    assert config.request_timeout == 10.0
    assert config.log_level == "INFO"
    assert config.token_path == str(
        Path.home() / ".waconsole" / "session.json"
    )


def test_config_overrides(clean_env, monkeypatch, tmp_path):
    monkeypatch.setenv("WACONSOLE_API_URL", "https://crm.example.com/api/")
    monkeypatch.setenv("WACONSOLE_TOKEN_PATH", str(tmp_path / "tok.json"))
    monkeypatch.setenv("WACONSOLE_POLL_INTERVAL", "1.5")
    monkeypatch.setenv("WACONSOLE_LOG_LEVEL", "debug")

    config = Config.from_env(clean_env)

    assert config.api_url == "https://crm.example.com/api"
    assert config.token_path == str(tmp_path / "tok.json")
    assert config.poll_interval == 1.5
    assert config.log_level == "DEBUG"


def test_config_reads_dotenv_file(clean_env, monkeypatch):
    clean_env.write_text("WACONSOLE_REQUEST_TIMEOUT=4\n")

    try:
        config = Config.from_env(clean_env)
    finally:
        monkeypatch.delenv("WACONSOLE_REQUEST_TIMEOUT", raising=False)

    assert config.request_timeout == 4.0


@pytest.mark.parametrize("value", ["0", "-1", "soon"])
def test_invalid_poll_interval_is_rejected(clean_env, monkeypatch, value):
    monkeypatch.setenv("WACONSOLE_POLL_INTERVAL", value)

    with pytest.raises(ConfigurationError):
        Config.from_env(clean_env)


def test_non_http_api_url_is_rejected(clean_env, monkeypatch):
    monkeypatch.setenv("WACONSOLE_API_URL", "ftp://example.com")

    with pytest.raises(ConfigurationError):
        Config.from_env(clean_env)


def test_token_path_expands_user(clean_env, monkeypatch):
    monkeypatch.setenv("WACONSOLE_TOKEN_PATH", "~/custom.json")

    assert get_token_path() == Path.home() / "custom.json"
