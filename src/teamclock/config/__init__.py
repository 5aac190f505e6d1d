"""Configuration for teamclock."""

from .settings import TOKEN_ENV_VARS, ConfigError, Settings, settings

__all__ = [
    "ConfigError",
    "Settings",
    "TOKEN_ENV_VARS",
    "settings",
]
