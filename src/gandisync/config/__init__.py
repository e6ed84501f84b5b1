"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from .gandi import GANDI_BASE_URL, AuthScheme, GandiConfig, get_gandi_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging, level_for

__all__ = [
    "GANDI_BASE_URL",
    "AuthScheme",
    "ConfigurationError",
    "GandiConfig",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_flag",
    "get_gandi_config",
    "level_for",
    "optional_env_var",
    "require_env_vars",
]
