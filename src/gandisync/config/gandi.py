"""Gandi API configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .env import env_flag, optional_env_var
from .errors import InvalidConfigurationError, MissingConfigurationError
from .http_resilience import DEFAULT_TIMEOUT_SECONDS, RateLimit, ResilienceConfig

GANDI_BASE_URL = "https://api.gandi.net"

TOKEN_ENV_VAR = "GANDI_PERSONAL_ACCESS_TOKEN"
API_KEY_ENV_VAR = "GANDI_KEY"


class AuthScheme(StrEnum):
    BEARER = "Bearer"
    APIKEY = "Apikey"


@dataclass(frozen=True)
class GandiConfig:
    """Holds Gandi API configuration values."""

    token: str
    resilience: ResilienceConfig
    auth_scheme: AuthScheme = AuthScheme.BEARER
    sharing_id: str | None = None
    dry_run: bool = False

    @property
    def base_url(self) -> str:
        return self.resilience.base_url or GANDI_BASE_URL

    @property
    def authorization(self) -> str:
        return f"{self.auth_scheme} {self.token}"


def default_resilience(base_url: str = GANDI_BASE_URL) -> ResilienceConfig:
    # Gandi allows 1000 requests per minute per token
    return ResilienceConfig(
        name="gandi",
        base_url=base_url,
        timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=15, per_seconds=1.0),
    )


def get_gandi_config(*, resilience: ResilienceConfig | None = None) -> GandiConfig:
    """Build the Gandi configuration from the environment.

    A personal access token takes precedence over the legacy API key.
    """

    token = optional_env_var(TOKEN_ENV_VAR)
    scheme = AuthScheme.BEARER
    if token is None:
        token = optional_env_var(API_KEY_ENV_VAR)
        scheme = AuthScheme.APIKEY
    if token is None:
        raise MissingConfigurationError(
            f"Missing configuration for: {API_KEY_ENV_VAR} or {TOKEN_ENV_VAR}"
        )

    base_url = optional_env_var("GANDI_URL") or GANDI_BASE_URL
    if not base_url.startswith(("https://", "http://")):
        raise InvalidConfigurationError("GANDI_URL", base_url, "an http(s) URL")
    return GandiConfig(
        token=token,
        auth_scheme=scheme,
        sharing_id=optional_env_var("GANDI_SHARING_ID"),
        dry_run=env_flag("GANDI_DRY_RUN"),
        resilience=resilience or default_resilience(base_url.rstrip("/")),
    )
