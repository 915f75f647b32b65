"""Bindings for a local docker daemon driven through its CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .cli import DockerCLI
from .containers import ContainerStateError, DockerContainers, build_run_args
from .networks import DockerNetworks
from .volumes import DockerVolumes

if TYPE_CHECKING:
    from flydock.config.docker import DockerConfig

    from .cli import Spawner


class DockerClient:
    """Containers, networks and volumes sharing one CLI runner."""

    def __init__(self, config: DockerConfig | None = None, *, spawn: Spawner | None = None) -> None:
        self.cli = DockerCLI(config, spawn=spawn)
        self.containers = DockerContainers(self.cli)
        self.networks = DockerNetworks(self.cli)
        self.volumes = DockerVolumes(self.cli)


__all__ = [
    "ContainerStateError",
    "DockerCLI",
    "DockerClient",
    "DockerContainers",
    "DockerNetworks",
    "DockerVolumes",
    "build_run_args",
]
