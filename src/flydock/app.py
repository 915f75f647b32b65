"""Activity entry points exposed to the workflow host.

Every activity takes plain values, returns plain typed results, and reports failure as
:class:`ActivityError` whose message is the only thing the host sees. Clients are built
lazily from the environment unless a caller passes one in.
"""

from __future__ import annotations

from functools import lru_cache, wraps
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from flydock.adapters.docker import DockerClient
from flydock.adapters.fly import FlyClient
from flydock.config import ConfigurationError, get_docker_config, get_fly_config
from flydock.domain.errors import ActivityError, FlydockError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from flydock.domain.model import (
        App,
        ContainerConfig,
        ContainerInfo,
        ContainerSummary,
        ExecResponse,
        IpDetail,
        IpRequest,
        Machine,
        MachineConfig,
        Region,
        Secret,
        Volume,
        VolumeCreateRequest,
    )

log = getLogger(__name__)

_FAILURES = (FlydockError, ConfigurationError, httpx.HTTPError, ValueError)


@lru_cache(maxsize=1)
def _get_default_fly_client() -> FlyClient:
    return FlyClient(config=get_fly_config())


@lru_cache(maxsize=1)
def _get_default_docker_client() -> DockerClient:
    return DockerClient(get_docker_config())


def activity[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Report every expected failure of ``func`` as an :class:`ActivityError`."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except ActivityError:
            raise
        except _FAILURES as exc:
            log.warning("Activity %s failed: %s", func.__name__, exc)
            raise ActivityError(str(exc)) from exc

    return wrapper


# Fly apps ---------------------------------------------------------------


@activity
def apps_get(app_name: str, *, client: FlyClient | None = None) -> App | None:
    return (client or _get_default_fly_client()).apps.get(app_name)


@activity
def apps_put(org_slug: str, app_name: str, *, client: FlyClient | None = None) -> App:
    """Create the app unless it already exists in ``org_slug``."""

    return (client or _get_default_fly_client()).apps.put(org_slug, app_name)


@activity
def apps_list(org_slug: str, *, client: FlyClient | None = None) -> list[App]:
    return (client or _get_default_fly_client()).apps.list_apps(org_slug)


@activity
def apps_delete(app_name: str, *, force: bool = False, client: FlyClient | None = None) -> None:
    (client or _get_default_fly_client()).apps.delete(app_name, force=force)


# Fly machines -----------------------------------------------------------


@activity
def machines_list(app_name: str, *, client: FlyClient | None = None) -> list[Machine]:
    return (client or _get_default_fly_client()).machines.list_machines(app_name)


@activity
def machines_get(
    app_name: str,
    machine_id: str,
    *,
    client: FlyClient | None = None,
) -> Machine | None:
    return (client or _get_default_fly_client()).machines.get(app_name, machine_id)


@activity
def machines_create(
    app_name: str,
    machine_name: str,
    config: MachineConfig,
    region: Region | None = None,
    *,
    client: FlyClient | None = None,
) -> str:
    """Create a machine and return its id; a retry returns the id of the first attempt."""

    machines = (client or _get_default_fly_client()).machines
    return machines.create(app_name, machine_name, config, region)


@activity
def machines_update(
    app_name: str,
    machine_id: str,
    config: MachineConfig,
    region: Region | None = None,
    *,
    client: FlyClient | None = None,
) -> None:
    (client or _get_default_fly_client()).machines.update(app_name, machine_id, config, region)


@activity
def machines_start(app_name: str, machine_id: str, *, client: FlyClient | None = None) -> None:
    (client or _get_default_fly_client()).machines.start(app_name, machine_id)


@activity
def machines_stop(app_name: str, machine_id: str, *, client: FlyClient | None = None) -> None:
    (client or _get_default_fly_client()).machines.stop(app_name, machine_id)


@activity
def machines_suspend(app_name: str, machine_id: str, *, client: FlyClient | None = None) -> None:
    (client or _get_default_fly_client()).machines.suspend(app_name, machine_id)


@activity
def machines_restart(app_name: str, machine_id: str, *, client: FlyClient | None = None) -> None:
    (client or _get_default_fly_client()).machines.restart(app_name, machine_id)


@activity
def machines_delete(
    app_name: str,
    machine_id: str,
    *,
    force: bool = False,
    client: FlyClient | None = None,
) -> None:
    (client or _get_default_fly_client()).machines.delete(app_name, machine_id, force=force)


@activity
def machines_exec(
    app_name: str,
    machine_id: str,
    command: list[str],
    *,
    client: FlyClient | None = None,
) -> ExecResponse:
    return (client or _get_default_fly_client()).machines.exec(app_name, machine_id, command)


# Fly IP assignments -----------------------------------------------------


@activity
def ips_allocate(
    app_name: str,
    request: IpRequest,
    pre_existing: Iterable[str] = (),
    *,
    client: FlyClient | None = None,
) -> str:
    """Allocate an address, releasing leftovers of earlier attempts.

    ``pre_existing`` must list every address the caller already owns on the app;
    anything else found on the app after allocation is released.
    """

    return (client or _get_default_fly_client()).ips.allocate(app_name, request, pre_existing)


@activity
def ips_allocate_unsafe(
    app_name: str,
    request: IpRequest,
    *,
    client: FlyClient | None = None,
) -> str:
    return (client or _get_default_fly_client()).ips.allocate_unsafe(app_name, request)


@activity
def ips_list(app_name: str, *, client: FlyClient | None = None) -> list[IpDetail]:
    return (client or _get_default_fly_client()).ips.list_ips(app_name)


@activity
def ips_release(app_name: str, ip: str, *, client: FlyClient | None = None) -> None:
    (client or _get_default_fly_client()).ips.release(app_name, ip)


# Fly volumes ------------------------------------------------------------


@activity
def volumes_list(app_name: str, *, client: FlyClient | None = None) -> list[Volume]:
    return (client or _get_default_fly_client()).volumes.list_volumes(app_name)


@activity
def volumes_create(
    app_name: str,
    request: VolumeCreateRequest,
    *,
    client: FlyClient | None = None,
) -> Volume:
    return (client or _get_default_fly_client()).volumes.create(app_name, request)


@activity
def volumes_get(
    app_name: str,
    volume_id: str,
    *,
    client: FlyClient | None = None,
) -> Volume | None:
    return (client or _get_default_fly_client()).volumes.get(app_name, volume_id)


@activity
def volumes_delete(app_name: str, volume_id: str, *, client: FlyClient | None = None) -> None:
    (client or _get_default_fly_client()).volumes.delete(app_name, volume_id)


@activity
def volumes_extend(
    app_name: str,
    volume_id: str,
    size_gb: int,
    *,
    client: FlyClient | None = None,
) -> None:
    (client or _get_default_fly_client()).volumes.extend(app_name, volume_id, size_gb)


# Fly secrets ------------------------------------------------------------


@activity
def secrets_list(app_name: str, *, client: FlyClient | None = None) -> list[Secret]:
    return (client or _get_default_fly_client()).secrets.list_secrets(app_name)


@activity
def secrets_put(
    app_name: str,
    key: str,
    value: str,
    *,
    client: FlyClient | None = None,
) -> Secret:
    return (client or _get_default_fly_client()).secrets.put(app_name, key, value)


@activity
def secrets_delete(app_name: str, key: str, *, client: FlyClient | None = None) -> None:
    (client or _get_default_fly_client()).secrets.delete(app_name, key)


# Docker -----------------------------------------------------------------


@activity
def containers_run(
    name: str,
    config: ContainerConfig,
    *,
    client: DockerClient | None = None,
) -> str:
    return (client or _get_default_docker_client()).containers.run(name, config)


@activity
def containers_start(name: str, *, client: DockerClient | None = None) -> None:
    (client or _get_default_docker_client()).containers.start(name)


@activity
def containers_stop(name: str, *, client: DockerClient | None = None) -> None:
    (client or _get_default_docker_client()).containers.stop(name)


@activity
def containers_rm(
    name: str,
    *,
    force: bool = False,
    client: DockerClient | None = None,
) -> None:
    (client or _get_default_docker_client()).containers.rm(name, force=force)


@activity
def containers_inspect(name: str, *, client: DockerClient | None = None) -> ContainerInfo | None:
    return (client or _get_default_docker_client()).containers.inspect(name)


@activity
def containers_list(
    *,
    all_containers: bool = False,
    client: DockerClient | None = None,
) -> list[ContainerSummary]:
    containers = (client or _get_default_docker_client()).containers
    return containers.list_containers(all_containers=all_containers)


@activity
def networks_create(
    name: str,
    driver: str | None = None,
    *,
    client: DockerClient | None = None,
) -> str:
    return (client or _get_default_docker_client()).networks.create(name, driver)


@activity
def networks_rm(name: str, *, client: DockerClient | None = None) -> None:
    (client or _get_default_docker_client()).networks.rm(name)


@activity
def networks_prune(*, client: DockerClient | None = None) -> None:
    (client or _get_default_docker_client()).networks.prune()


@activity
def docker_volumes_create(name: str, *, client: DockerClient | None = None) -> str:
    return (client or _get_default_docker_client()).volumes.create(name)


@activity
def docker_volumes_rm(name: str, *, client: DockerClient | None = None) -> None:
    (client or _get_default_docker_client()).volumes.rm(name)


@activity
def docker_volumes_exists(name: str, *, client: DockerClient | None = None) -> bool:
    return (client or _get_default_docker_client()).volumes.exists(name)
