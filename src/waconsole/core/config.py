"""Configuration management for waconsole"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from waconsole.shared.exceptions import ConfigurationError


def get_token_path() -> Path:
    """Get the token store path.

    Priority order:
    1. WACONSOLE_TOKEN_PATH environment variable
    2. ~/.waconsole/session.json

    Returns:
        Path object for the session file
    """
    override = os.getenv("WACONSOLE_TOKEN_PATH")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".waconsole" / "session.json"


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


@dataclass
class Config:
    """Configuration for waconsole loaded from environment variables"""

    api_url: str = "http://localhost:3000/api"
    token_path: str = ""

    # Seconds between connection status fetches
    poll_interval: float = 3.0

    # Transport timeout for every backend call (seconds)
    request_timeout: float = 10.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """Load configuration from environment variables

        Args:
            env_file: Optional .env file to load before reading the environment

        Returns:
            Config instance with values from environment

        Raises:
            ConfigurationError: If a value is present but invalid
        """
        load_dotenv(env_file)

        api_url = os.getenv("WACONSOLE_API_URL", cls.api_url).rstrip("/")
        if not api_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"WACONSOLE_API_URL must be an http(s) URL, got {api_url!r}"
            )

        config = cls(
            api_url=api_url,
            token_path=str(get_token_path()),
            poll_interval=_positive_float(
                "WACONSOLE_POLL_INTERVAL", cls.poll_interval
            ),
            request_timeout=_positive_float(
                "WACONSOLE_REQUEST_TIMEOUT", cls.request_timeout
            ),
            log_level=os.getenv("WACONSOLE_LOG_LEVEL", cls.log_level).upper(),
        )

        logger.debug("Configuration loaded:")
        logger.debug(f"  API URL: {config.api_url}")
        logger.debug(f"  Token Path: {config.token_path}")
        logger.debug(f"  Poll Interval: {config.poll_interval}s")
        logger.debug(f"  Request Timeout: {config.request_timeout}s")
        logger.debug(f"  Log Level: {config.log_level}")

        return config
