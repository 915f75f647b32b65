"""Canonical results for the Fly.io Machines API bindings."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import CpuKind, HostStatus, PortHandler, Region, RestartPolicy, ServiceProtocol

# Machines ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GuestConfig:
    cpu_kind: CpuKind | None = None
    cpus: int | None = None
    memory_mb: int | None = None
    kernel_args: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class InitConfig:
    cmd: tuple[str, ...] | None = None
    entrypoint: tuple[str, ...] | None = None
    exec: tuple[str, ...] | None = None
    kernel_args: tuple[str, ...] | None = None
    swap_size_mb: int | None = None
    tty: bool | None = None


@dataclass(frozen=True, slots=True)
class MachineRestart:
    policy: RestartPolicy
    max_retries: int | None = None


@dataclass(frozen=True, slots=True)
class StopConfig:
    signal: str | None = None
    timeout: str | None = None


@dataclass(frozen=True, slots=True)
class Mount:
    volume: str
    path: str


@dataclass(frozen=True, slots=True)
class PortConfig:
    port: int
    handlers: tuple[PortHandler, ...] = ()


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    internal_port: int
    protocol: ServiceProtocol
    ports: tuple[PortConfig, ...] = ()


@dataclass(frozen=True, slots=True)
class MachineConfig:
    image: str
    guest: GuestConfig | None = None
    auto_destroy: bool | None = None
    init: InitConfig | None = None
    env: dict[str, str] | None = None
    restart: MachineRestart | None = None
    stop_config: StopConfig | None = None
    mounts: tuple[Mount, ...] | None = None
    services: tuple[ServiceConfig, ...] | None = None


@dataclass(frozen=True, slots=True)
class Machine:
    id: str
    name: str
    state: str
    region: Region
    instance_id: str
    created_at: str
    updated_at: str
    host_status: HostStatus
    config: MachineConfig


@dataclass(frozen=True, slots=True)
class ExecResponse:
    exit_code: int | None = None
    exit_signal: int | None = None
    stdout: str | None = None
    stderr: str | None = None


# IP assignments ---------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Ipv4Config:
    shared: bool = False
    region: Region | None = None


@dataclass(frozen=True, slots=True)
class Ipv6Config:
    region: Region | None = None


@dataclass(frozen=True, slots=True)
class Ipv6Private:
    """Private (6PN) IPv6 address; never regional."""


type IpVariant = Ipv4Config | Ipv6Config | Ipv6Private


@dataclass(frozen=True, slots=True)
class IpRequest:
    variant: IpVariant


@dataclass(frozen=True, slots=True)
class IpDetail:
    ip: str
    variant: IpVariant


# Apps, volumes, secrets -------------------------------------------------


@dataclass(frozen=True, slots=True)
class App:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class AppDetails:
    """Probe result for an app: the record plus the organization that owns it."""

    id: str
    name: str
    organization_slug: str

    def as_app(self) -> App:
        return App(id=self.id, name=self.name)


@dataclass(frozen=True, slots=True)
class VolumeCreateRequest:
    name: str
    size_gb: int
    region: Region | None = None
    encrypted: bool | None = None
    require_unique_zone: bool | None = None
    snapshot_retention: int | None = None
    fstype: str | None = None


@dataclass(frozen=True, slots=True)
class Volume:
    id: str
    name: str
    state: str
    size_gb: int
    region: Region
    zone: str | None = None
    encrypted: bool = False
    attached_machine_id: str | None = None
    attached_alloc_id: str | None = None
    created_at: str | None = None
    fstype: str | None = None
    snapshot_retention: int | None = None
    auto_backup_enabled: bool | None = None
    host_status: HostStatus | None = None


@dataclass(frozen=True, slots=True)
class Secret:
    name: str
    digest: str
