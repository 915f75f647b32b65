"""Fly.io Machines API configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

FLY_API_BASE_URL = "https://api.machines.dev/v1"
FLY_API_TOKEN_VAR = "FLY_API_TOKEN"
FLY_API_BASE_URL_VAR = "FLY_API_BASE_URL"
FLY_TIMEOUT_SECONDS = 60.0


def default_fly_resilience(base_url: str = FLY_API_BASE_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="fly",
        base_url=base_url,
        timeout_seconds=FLY_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )


@dataclass(frozen=True)
class FlyConfig:
    """Holds the Machines API credential and transport settings."""

    api_token: str = field(repr=False)
    resilience: ResilienceConfig = field(default_factory=default_fly_resilience)

    @property
    def authorization(self) -> str:
        return f"Bearer {self.api_token}"


def get_fly_config(*, resilience: ResilienceConfig | None = None) -> FlyConfig:
    values = require_env_vars((FLY_API_TOKEN_VAR,))
    base_url = optional_env_var(FLY_API_BASE_URL_VAR) or FLY_API_BASE_URL
    return FlyConfig(
        api_token=values[FLY_API_TOKEN_VAR],
        resilience=resilience or default_fly_resilience(base_url),
    )
