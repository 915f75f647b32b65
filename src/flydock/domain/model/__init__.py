"""Canonical domain model exposed to activity callers."""

from __future__ import annotations

from .docker import ContainerConfig, ContainerInfo, ContainerSummary, PortMapping, VolumeMount
from .enums import (
    CpuKind,
    HostStatus,
    PortHandler,
    Region,
    RestartPolicy,
    ServiceProtocol,
    parse_wire_enum,
)
from .fly import (
    App,
    AppDetails,
    ExecResponse,
    GuestConfig,
    InitConfig,
    IpDetail,
    IpRequest,
    IpVariant,
    Ipv4Config,
    Ipv6Config,
    Ipv6Private,
    Machine,
    MachineConfig,
    MachineRestart,
    Mount,
    PortConfig,
    Secret,
    ServiceConfig,
    StopConfig,
    Volume,
    VolumeCreateRequest,
)

__all__ = [
    "App",
    "AppDetails",
    "ContainerConfig",
    "ContainerInfo",
    "ContainerSummary",
    "CpuKind",
    "ExecResponse",
    "GuestConfig",
    "HostStatus",
    "InitConfig",
    "IpDetail",
    "IpRequest",
    "IpVariant",
    "Ipv4Config",
    "Ipv6Config",
    "Ipv6Private",
    "Machine",
    "MachineConfig",
    "MachineRestart",
    "Mount",
    "PortConfig",
    "PortHandler",
    "PortMapping",
    "Region",
    "RestartPolicy",
    "Secret",
    "ServiceConfig",
    "ServiceProtocol",
    "StopConfig",
    "Volume",
    "VolumeCreateRequest",
    "VolumeMount",
    "parse_wire_enum",
]
