"""Docker CLI configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_DOCKER_BINARY = "docker"


@dataclass(frozen=True, slots=True)
class DockerConfig:
    binary: str = DEFAULT_DOCKER_BINARY
    timeout_seconds: float | None = None


def get_docker_config() -> DockerConfig:
    binary = optional_env_var("DOCKER_BINARY") or DEFAULT_DOCKER_BINARY
    raw_timeout = optional_env_var("DOCKER_TIMEOUT_SECONDS")
    timeout: float | None = None
    if raw_timeout is not None:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"DOCKER_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
            ) from exc
    return DockerConfig(binary=binary, timeout_seconds=timeout)
