"""Translate between Machines API payloads and the canonical domain model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flydock.domain.model import (
    App,
    AppDetails,
    ExecResponse,
    GuestConfig,
    InitConfig,
    IpDetail,
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
)

from .schema import (
    AssignIpRequestPayload,
    FlyIpType,
    GuestConfigPayload,
    InitConfigPayload,
    MachineConfigPayload,
    MachineRestartPayload,
    MountPayload,
    PortConfigPayload,
    ServiceConfigPayload,
    StopConfigPayload,
    VolumeCreateRequestPayload,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flydock.domain.model import IpRequest, IpVariant, Region, VolumeCreateRequest

    from .schema import (
        AppDetailsPayload,
        AppPayload,
        ExecResponsePayload,
        IpAssignmentPayload,
        MachinePayload,
        SecretPayload,
        VolumePayload,
    )

# Fly's private network (6PN) range; the list endpoint does not label it.
PRIVATE_IPV6_PREFIX = "fdaa"


def _as_tuple(values: Sequence[str] | None) -> tuple[str, ...] | None:
    return tuple(values) if values is not None else None


def _as_list(values: Sequence[str] | None) -> list[str] | None:
    return list(values) if values is not None else None


# Machines ---------------------------------------------------------------


def machine_config_to_payload(config: MachineConfig) -> MachineConfigPayload:
    guest = config.guest
    init = config.init
    restart = config.restart
    stop = config.stop_config
    return MachineConfigPayload(
        image=config.image,
        guest=GuestConfigPayload(
            cpu_kind=guest.cpu_kind,
            cpus=guest.cpus,
            memory_mb=guest.memory_mb,
            kernel_args=_as_list(guest.kernel_args),
        )
        if guest
        else None,
        auto_destroy=config.auto_destroy,
        init=InitConfigPayload(
            cmd=_as_list(init.cmd),
            entrypoint=_as_list(init.entrypoint),
            exec=_as_list(init.exec),
            kernel_args=_as_list(init.kernel_args),
            swap_size_mb=init.swap_size_mb,
            tty=init.tty,
        )
        if init
        else None,
        env=dict(config.env) if config.env is not None else None,
        restart=MachineRestartPayload(policy=restart.policy, max_retries=restart.max_retries)
        if restart
        else None,
        stop_config=StopConfigPayload(signal=stop.signal, timeout=stop.timeout) if stop else None,
        mounts=[MountPayload(volume=m.volume, path=m.path) for m in config.mounts]
        if config.mounts is not None
        else None,
        services=[
            ServiceConfigPayload(
                internal_port=service.internal_port,
                protocol=service.protocol,
                ports=[
                    PortConfigPayload(port=port.port, handlers=list(port.handlers))
                    for port in service.ports
                ],
            )
            for service in config.services
        ]
        if config.services is not None
        else None,
    )


def machine_config_from_payload(payload: MachineConfigPayload) -> MachineConfig:
    guest = payload.guest
    init = payload.init
    restart = payload.restart
    stop = payload.stop_config
    return MachineConfig(
        image=payload.image,
        guest=GuestConfig(
            cpu_kind=guest.cpu_kind,
            cpus=guest.cpus,
            memory_mb=guest.memory_mb,
            kernel_args=_as_tuple(guest.kernel_args),
        )
        if guest
        else None,
        auto_destroy=payload.auto_destroy,
        init=InitConfig(
            cmd=_as_tuple(init.cmd),
            entrypoint=_as_tuple(init.entrypoint),
            exec=_as_tuple(init.exec),
            kernel_args=_as_tuple(init.kernel_args),
            swap_size_mb=init.swap_size_mb,
            tty=init.tty,
        )
        if init
        else None,
        env=dict(payload.env) if payload.env is not None else None,
        restart=MachineRestart(policy=restart.policy, max_retries=restart.max_retries)
        if restart
        else None,
        stop_config=StopConfig(signal=stop.signal, timeout=stop.timeout) if stop else None,
        mounts=tuple(Mount(volume=m.volume, path=m.path) for m in payload.mounts)
        if payload.mounts is not None
        else None,
        services=tuple(
            ServiceConfig(
                internal_port=service.internal_port,
                protocol=service.protocol,
                ports=tuple(
                    PortConfig(port=port.port, handlers=tuple(port.handlers))
                    for port in service.ports
                ),
            )
            for service in payload.services
        )
        if payload.services is not None
        else None,
    )


def translate_machine(payload: MachinePayload) -> Machine:
    return Machine(
        id=payload.id,
        name=payload.name,
        state=payload.state,
        region=payload.region,
        instance_id=payload.instance_id,
        created_at=payload.created_at,
        updated_at=payload.updated_at,
        host_status=payload.host_status,
        config=machine_config_from_payload(payload.config),
    )


def translate_exec_response(payload: ExecResponsePayload) -> ExecResponse:
    return ExecResponse(
        exit_code=payload.exit_code,
        exit_signal=payload.exit_signal,
        stdout=payload.stdout,
        stderr=payload.stderr,
    )


# IP assignments ---------------------------------------------------------


def ip_request_to_payload(request: IpRequest) -> AssignIpRequestPayload:
    variant = request.variant
    ip_type: FlyIpType
    region: Region | None
    match variant:
        case Ipv4Config(shared=True, region=region):
            ip_type = FlyIpType.SHARED_V4
        case Ipv4Config(shared=False, region=region):
            ip_type = FlyIpType.V4
        case Ipv6Config(region=region):
            ip_type = FlyIpType.V6
        case Ipv6Private():
            ip_type, region = FlyIpType.PRIVATE_V6, None
        case _:
            raise TypeError(f"Unsupported IP variant: {variant!r}")
    return AssignIpRequestPayload(ip_type=ip_type, region=region)


def classify_ip(ip: str, *, region: Region | None, shared: bool | None) -> IpVariant:
    if ":" not in ip:
        return Ipv4Config(shared=bool(shared), region=region)
    if ip.lower().startswith(PRIVATE_IPV6_PREFIX):
        return Ipv6Private()
    return Ipv6Config(region=region)


def translate_ip_assignment(payload: IpAssignmentPayload) -> IpDetail:
    return IpDetail(
        ip=payload.ip,
        variant=classify_ip(payload.ip, region=payload.region, shared=payload.shared),
    )


# Apps, volumes, secrets -------------------------------------------------


def translate_app(payload: AppPayload) -> App:
    return App(id=payload.id, name=payload.name)


def translate_app_details(payload: AppDetailsPayload) -> AppDetails:
    return AppDetails(
        id=payload.id,
        name=payload.name,
        organization_slug=payload.organization.slug,
    )


def volume_request_to_payload(request: VolumeCreateRequest) -> VolumeCreateRequestPayload:
    return VolumeCreateRequestPayload(
        name=request.name,
        size_gb=request.size_gb,
        region=request.region,
        encrypted=request.encrypted,
        require_unique_zone=request.require_unique_zone,
        snapshot_retention=request.snapshot_retention,
        fstype=request.fstype,
    )


def translate_volume(payload: VolumePayload) -> Volume:
    return Volume(
        id=payload.id,
        name=payload.name,
        state=payload.state,
        size_gb=payload.size_gb,
        region=payload.region,
        zone=payload.zone,
        encrypted=payload.encrypted,
        attached_machine_id=payload.attached_machine_id,
        attached_alloc_id=payload.attached_alloc_id,
        created_at=payload.created_at,
        fstype=payload.fstype,
        snapshot_retention=payload.snapshot_retention,
        auto_backup_enabled=payload.auto_backup_enabled,
        host_status=payload.host_status,
    )


def translate_secret(payload: SecretPayload) -> Secret:
    return Secret(name=payload.name, digest=payload.digest)
