"""Application configuration helpers."""

from __future__ import annotations

from .docker import DockerConfig, get_docker_config
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .fly import FLY_API_BASE_URL, FlyConfig, default_fly_resilience, get_fly_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "FLY_API_BASE_URL",
    "ConfigurationError",
    "DockerConfig",
    "FlyConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_fly_resilience",
    "get_docker_config",
    "get_fly_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
