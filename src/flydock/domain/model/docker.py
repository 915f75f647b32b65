"""Canonical results for the docker CLI bindings."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PortMapping:
    host_port: int
    container_port: int
    protocol: str = "tcp"


@dataclass(frozen=True, slots=True)
class VolumeMount:
    source: str
    target: str
    readonly: bool = False


@dataclass(frozen=True, slots=True)
class ContainerConfig:
    image: str
    env: dict[str, str] = field(default_factory=dict[str, str])
    ports: tuple[PortMapping, ...] = ()
    mounts: tuple[VolumeMount, ...] = ()
    network: str | None = None
    cmd: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class ContainerInfo:
    id: str
    state: str

    @property
    def is_running(self) -> bool:
        return self.state == "running"


@dataclass(frozen=True, slots=True)
class ContainerSummary:
    id: str
    name: str
    image: str
    state: str
    status: str
