"""Pydantic models describing the Fly.io Machines API payloads."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from flydock.domain.model import (
    CpuKind,
    HostStatus,
    PortHandler,
    Region,
    RestartPolicy,
    ServiceProtocol,
)

GLOBAL_REGION = "global"


def _normalize_tag(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower().replace("_", "-")
    return value


def _snake_case_tag(value: PortHandler) -> str:
    return value.value.replace("-", "_")


def _global_region_to_none(value: object) -> object:
    # Some IP variants report the non-region sentinel "global" instead of a region.
    if isinstance(value, str) and value.strip().lower() == GLOBAL_REGION:
        return None
    return _normalize_tag(value)


WireRegion = Annotated[Region, BeforeValidator(_normalize_tag)]
WireListedRegion = Annotated[Region | None, BeforeValidator(_global_region_to_none)]
WireCpuKind = Annotated[CpuKind, BeforeValidator(_normalize_tag)]
WireRestartPolicy = Annotated[RestartPolicy, BeforeValidator(_normalize_tag)]
WireHostStatus = Annotated[HostStatus, BeforeValidator(_normalize_tag)]
# Port handlers travel as snake_case (``proxy_proto``, ``pg_tls``).
WirePortHandler = Annotated[
    PortHandler,
    BeforeValidator(_normalize_tag),
    PlainSerializer(_snake_case_tag, return_type=str),
]
WireServiceProtocol = Annotated[ServiceProtocol, BeforeValidator(_normalize_tag)]


class FlyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ErrorPayload(FlyBaseModel):
    error: str


# Machines ---------------------------------------------------------------


class GuestConfigPayload(FlyBaseModel):
    cpu_kind: WireCpuKind | None = None
    cpus: int | None = None
    memory_mb: int | None = None
    kernel_args: list[str] | None = None


class InitConfigPayload(FlyBaseModel):
    cmd: list[str] | None = None
    entrypoint: list[str] | None = None
    exec: list[str] | None = None
    kernel_args: list[str] | None = None
    swap_size_mb: int | None = None
    tty: bool | None = None


class MachineRestartPayload(FlyBaseModel):
    policy: WireRestartPolicy
    max_retries: int | None = None


class StopConfigPayload(FlyBaseModel):
    signal: str | None = None
    timeout: str | None = None


class MountPayload(FlyBaseModel):
    volume: str
    path: str


class PortConfigPayload(FlyBaseModel):
    port: int
    handlers: list[WirePortHandler] = Field(default_factory=list)


class ServiceConfigPayload(FlyBaseModel):
    internal_port: int
    protocol: WireServiceProtocol
    ports: list[PortConfigPayload] = Field(default_factory=list)


class MachineConfigPayload(FlyBaseModel):
    image: str
    guest: GuestConfigPayload | None = None
    auto_destroy: bool | None = None
    init: InitConfigPayload | None = None
    env: dict[str, str] | None = None
    restart: MachineRestartPayload | None = None
    stop_config: StopConfigPayload | None = None
    mounts: list[MountPayload] | None = None
    services: list[ServiceConfigPayload] | None = None


class MachineCreateRequestPayload(FlyBaseModel):
    name: str
    config: MachineConfigPayload
    region: Region | None = None


class MachineUpdateRequestPayload(FlyBaseModel):
    config: MachineConfigPayload
    region: Region | None = None


class MachinePayload(FlyBaseModel):
    id: str
    name: str
    state: str
    region: WireRegion
    instance_id: str
    created_at: str
    updated_at: str
    host_status: WireHostStatus
    config: MachineConfigPayload


class IdPayload(FlyBaseModel):
    id: str


class ExecRequestPayload(FlyBaseModel):
    command: list[str]


class ExecResponsePayload(FlyBaseModel):
    exit_code: int | None = None
    exit_signal: int | None = None
    stdout: str | None = None
    stderr: str | None = None


# IP assignments ---------------------------------------------------------


class FlyIpType(StrEnum):
    V4 = "v4"
    V6 = "v6"
    PRIVATE_V6 = "private_v6"
    SHARED_V4 = "shared_v4"


class AssignIpRequestPayload(FlyBaseModel):
    ip_type: FlyIpType = Field(alias="type")
    region: Region | None = None


class AssignIpResponsePayload(FlyBaseModel):
    ip: str


class IpAssignmentPayload(FlyBaseModel):
    ip: str
    region: WireListedRegion = None
    shared: bool | None = None


class ListIpsResponsePayload(FlyBaseModel):
    ips: list[IpAssignmentPayload] = Field(default_factory=list)


# Apps -------------------------------------------------------------------


class CreateAppRequestPayload(FlyBaseModel):
    app_name: str
    org_slug: str


class AppPayload(FlyBaseModel):
    id: str
    name: str


class OrganizationPayload(FlyBaseModel):
    slug: str


class AppDetailsPayload(FlyBaseModel):
    id: str
    name: str
    organization: OrganizationPayload


class AppsResponsePayload(FlyBaseModel):
    apps: list[AppPayload] = Field(default_factory=list)


# Volumes ----------------------------------------------------------------


class VolumeCreateRequestPayload(FlyBaseModel):
    name: str
    size_gb: int
    region: Region | None = None
    encrypted: bool | None = None
    require_unique_zone: bool | None = None
    snapshot_retention: int | None = None
    fstype: str | None = None


class VolumePayload(FlyBaseModel):
    id: str
    name: str
    state: str
    size_gb: int
    region: WireRegion
    zone: str | None = None
    encrypted: bool = False
    attached_machine_id: str | None = None
    attached_alloc_id: str | None = None
    created_at: str | None = None
    fstype: str | None = None
    snapshot_retention: int | None = None
    auto_backup_enabled: bool | None = None
    host_status: WireHostStatus | None = None


class ExtendVolumeRequestPayload(FlyBaseModel):
    size_gb: int


# Secrets ----------------------------------------------------------------


class SecretPayload(FlyBaseModel):
    name: str
    digest: str


class ListSecretsResponsePayload(FlyBaseModel):
    secrets: list[SecretPayload] = Field(default_factory=list)


class PutSecretRequestPayload(FlyBaseModel):
    value: str
