"""Bindings for the Fly.io Machines REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .apps import FlyAppsClient
from .client import FlyHttpClient, FlyResponse
from .ips import FlyIpsClient
from .machines import FlyMachinesClient
from .secrets import FlySecretsClient
from .volumes import FlyVolumesClient

if TYPE_CHECKING:
    from flydock.adapters.http_resilience import ClientFactory
    from flydock.config.fly import FlyConfig


class FlyClient:
    """All resource clients over one authenticated transport."""

    def __init__(
        self,
        *,
        config: FlyConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        http = FlyHttpClient(config=config, client_factory=client_factory)
        self.apps = FlyAppsClient(http)
        self.machines = FlyMachinesClient(http)
        self.ips = FlyIpsClient(http)
        self.volumes = FlyVolumesClient(http)
        self.secrets = FlySecretsClient(http)


__all__ = [
    "FlyAppsClient",
    "FlyClient",
    "FlyHttpClient",
    "FlyIpsClient",
    "FlyMachinesClient",
    "FlyResponse",
    "FlySecretsClient",
    "FlyVolumesClient",
]
