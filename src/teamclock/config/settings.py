"""Environment-backed settings.

Nothing is persisted: every value is read from the process environment at
access time, so tests can construct a ``Settings`` over a plain dict.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

# Checked in order; the first non-empty value wins.
TOKEN_ENV_VARS = ("SLACK_BOT_TOKEN", "SLACK_USER_TOKEN")

DEFAULT_API_URL = "https://slack.com/api"
DEFAULT_HTTP_TIMEOUT = 30.0


class ConfigError(Exception):
    """Raised when required configuration is missing."""


class Settings:
    """Runtime settings for teamclock."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    @property
    def _env(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a raw environment value, treating blank strings as unset."""
        value = self._env.get(key, "")
        return value.strip() or default

    @property
    def slack_token(self) -> str | None:
        """Get the directory API token, or None if no variable is set."""
        for name in TOKEN_ENV_VARS:
            token = self.get(name)
            if token:
                return token
        return None

    def require_slack_token(self) -> str:
        """Get the directory API token.

        Raises:
            ConfigError: If none of the token variables is set.
        """
        token = self.slack_token
        if token is None:
            raise ConfigError(
                f"{' or '.join(TOKEN_ENV_VARS)} environment variable is required"
            )
        return token

    @property
    def slack_api_url(self) -> str:
        """Get the Slack Web API base URL."""
        return (self.get("SLACK_API_URL") or DEFAULT_API_URL).rstrip("/")

    @property
    def http_timeout(self) -> float:
        """Get the directory request timeout in seconds."""
        raw = self.get("TEAMCLOCK_HTTP_TIMEOUT")
        if raw is None:
            return DEFAULT_HTTP_TIMEOUT
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Ignoring non-numeric TEAMCLOCK_HTTP_TIMEOUT: %s", raw)
            return DEFAULT_HTTP_TIMEOUT
        if value <= 0:
            return DEFAULT_HTTP_TIMEOUT
        return value

    @property
    def log_level(self) -> str:
        """Get the log level name, default INFO."""
        return (self.get("TEAMCLOCK_LOG_LEVEL") or "INFO").upper()

    @property
    def log_file(self) -> Path | None:
        """Get the debug log path, or None to disable file logging."""
        raw = self.get("TEAMCLOCK_LOG_FILE")
        if raw is None:
            return None
        return Path(raw).expanduser()


# Global settings instance
settings = Settings()
