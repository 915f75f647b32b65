# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from pydantic import TypeAdapter

from flydock import app
from flydock.config import configure_logging
from flydock.domain.errors import ActivityError
from flydock.domain.model import (
    ContainerConfig,
    CpuKind,
    GuestConfig,
    IpRequest,
    Ipv4Config,
    Ipv6Config,
    Ipv6Private,
    MachineConfig,
    PortMapping,
    Region,
    VolumeCreateRequest,
    VolumeMount,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from flydock.domain.model import IpVariant

log = logging.getLogger(__name__)

_output_adapter: TypeAdapter[Any] = TypeAdapter(Any)

IP_TYPES = ("v4", "shared-v4", "v6", "private-v6")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage Fly.io and docker resources")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    _add_apps_parser(subparsers)
    _add_machines_parser(subparsers)
    _add_ips_parser(subparsers)
    _add_volumes_parser(subparsers)
    _add_secrets_parser(subparsers)
    _add_docker_parser(subparsers)

    return parser.parse_args(list(argv))


def _add_apps_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    apps = subparsers.add_parser("apps", help="Fly apps")
    apps_sub = apps.add_subparsers(dest="action", required=True)

    get = apps_sub.add_parser("get", help="Show one app")
    get.add_argument("app_name")

    put = apps_sub.add_parser("put", help="Create an app unless it already exists")
    put.add_argument("org_slug")
    put.add_argument("app_name")

    list_ = apps_sub.add_parser("list", help="List the apps of an organization")
    list_.add_argument("org_slug")

    delete = apps_sub.add_parser("delete", help="Delete an app")
    delete.add_argument("app_name")
    delete.add_argument("--force", action="store_true", help="Stop running machines first")


def _add_machines_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    machines = subparsers.add_parser("machines", help="Fly machines")
    machines_sub = machines.add_subparsers(dest="action", required=True)

    list_ = machines_sub.add_parser("list", help="List the machines of an app")
    list_.add_argument("app_name")

    for action in ("get", "start", "stop", "suspend", "restart"):
        parser = machines_sub.add_parser(action, help=f"{action.capitalize()} a machine")
        parser.add_argument("app_name")
        parser.add_argument("machine_id")

    create = machines_sub.add_parser("create", help="Create a machine; safe to repeat")
    create.add_argument("app_name")
    create.add_argument("machine_name")
    _add_machine_config_arguments(create)

    update = machines_sub.add_parser("update", help="Replace the config of a machine")
    update.add_argument("app_name")
    update.add_argument("machine_id")
    _add_machine_config_arguments(update)

    delete = machines_sub.add_parser("delete", help="Delete a machine")
    delete.add_argument("app_name")
    delete.add_argument("machine_id")
    delete.add_argument("--force", action="store_true", help="Kill the machine if running")

    exec_ = machines_sub.add_parser("exec", help="Run a command inside a machine")
    exec_.add_argument("app_name")
    exec_.add_argument("machine_id")
    exec_.add_argument("exec_command", nargs="+", metavar="command")


def _add_machine_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--image", required=True, help="Container image reference")
    parser.add_argument("--region", type=Region, choices=list(Region), help="Target region")
    parser.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Environment variable; may be repeated",
    )
    parser.add_argument("--cpu-kind", type=CpuKind, choices=list(CpuKind))
    parser.add_argument("--cpus", type=int)
    parser.add_argument("--memory-mb", type=int)
    parser.add_argument(
        "--auto-destroy",
        action="store_true",
        help="Destroy the machine once it exits",
    )


def _add_ips_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    ips = subparsers.add_parser("ips", help="Fly IP assignments")
    ips_sub = ips.add_subparsers(dest="action", required=True)

    allocate = ips_sub.add_parser("allocate", help="Allocate an address, releasing leftovers")
    allocate.add_argument("app_name")
    allocate.add_argument("--type", dest="ip_type", choices=IP_TYPES, default="v6")
    allocate.add_argument("--region", type=Region, choices=list(Region))
    allocate.add_argument(
        "--pre-existing",
        action="append",
        default=[],
        metavar="IP",
        help="Address already owned by the app; may be repeated",
    )

    list_ = ips_sub.add_parser("list", help="List the addresses of an app")
    list_.add_argument("app_name")

    release = ips_sub.add_parser("release", help="Release an address")
    release.add_argument("app_name")
    release.add_argument("ip")


def _add_volumes_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    volumes = subparsers.add_parser("volumes", help="Fly volumes")
    volumes_sub = volumes.add_subparsers(dest="action", required=True)

    list_ = volumes_sub.add_parser("list", help="List the volumes of an app")
    list_.add_argument("app_name")

    create = volumes_sub.add_parser("create", help="Create a volume")
    create.add_argument("app_name")
    create.add_argument("name")
    create.add_argument("--size-gb", type=int, required=True)
    create.add_argument("--region", type=Region, choices=list(Region))
    create.add_argument("--require-unique-zone", action="store_true", default=None)

    for action in ("get", "delete"):
        parser = volumes_sub.add_parser(action, help=f"{action.capitalize()} a volume")
        parser.add_argument("app_name")
        parser.add_argument("volume_id")

    extend = volumes_sub.add_parser("extend", help="Grow a volume")
    extend.add_argument("app_name")
    extend.add_argument("volume_id")
    extend.add_argument("size_gb", type=int)


def _add_secrets_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    secrets = subparsers.add_parser("secrets", help="Fly app secrets")
    secrets_sub = secrets.add_subparsers(dest="action", required=True)

    list_ = secrets_sub.add_parser("list", help="List secret names and digests")
    list_.add_argument("app_name")

    put = secrets_sub.add_parser("put", help="Set a secret")
    put.add_argument("app_name")
    put.add_argument("key")
    put.add_argument("value")

    delete = secrets_sub.add_parser("delete", help="Remove a secret")
    delete.add_argument("app_name")
    delete.add_argument("key")


def _add_docker_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    docker = subparsers.add_parser("docker", help="Local docker resources")
    docker_sub = docker.add_subparsers(dest="action", required=True)

    run = docker_sub.add_parser("run", help="Run a detached container; safe to repeat")
    run.add_argument("name")
    run.add_argument("image")
    run.add_argument("container_cmd", nargs="*", metavar="cmd")
    run.add_argument("--env", action="append", default=[], metavar="KEY=VALUE")
    run.add_argument("--publish", action="append", default=[], metavar="HOST:CONTAINER[/PROTO]")
    run.add_argument("--volume", action="append", default=[], metavar="SRC:DST[:ro]")
    run.add_argument("--network")

    for action in ("start", "stop", "inspect"):
        parser = docker_sub.add_parser(action, help=f"{action.capitalize()} a container")
        parser.add_argument("name")

    rm = docker_sub.add_parser("rm", help="Remove a container")
    rm.add_argument("name")
    rm.add_argument("--force", action="store_true")

    ps = docker_sub.add_parser("ps", help="List containers")
    ps.add_argument("--all", dest="all_containers", action="store_true")

    network_create = docker_sub.add_parser("network-create", help="Create a network")
    network_create.add_argument("name")
    network_create.add_argument("--driver")

    network_rm = docker_sub.add_parser("network-rm", help="Remove a network")
    network_rm.add_argument("name")

    docker_sub.add_parser("network-prune", help="Remove unused networks")

    for action in ("volume-create", "volume-rm", "volume-exists"):
        parser = docker_sub.add_parser(action, help=f"{action.replace('-', ' ')}")
        parser.add_argument("name")


def _parse_env(pairs: Sequence[str]) -> dict[str, str]:
    env: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid environment variable, expected KEY=VALUE: {pair}")
        env[key] = value
    return env


def _parse_port(value: str) -> PortMapping:
    ports, _, protocol = value.partition("/")
    host, sep, container = ports.partition(":")
    if not sep:
        raise ValueError(f"Invalid port mapping, expected HOST:CONTAINER[/PROTO]: {value}")
    try:
        return PortMapping(
            host_port=int(host),
            container_port=int(container),
            protocol=protocol or "tcp",
        )
    except ValueError as exc:
        raise ValueError(f"Invalid port mapping: {value}") from exc


def _parse_mount(value: str) -> VolumeMount:
    parts = value.split(":")
    if len(parts) == 2:  # noqa: PLR2004
        return VolumeMount(source=parts[0], target=parts[1])
    if len(parts) == 3 and parts[2] in {"ro", "rw"}:  # noqa: PLR2004
        return VolumeMount(source=parts[0], target=parts[1], readonly=parts[2] == "ro")
    raise ValueError(f"Invalid volume mount, expected SRC:DST[:ro|rw]: {value}")


def _build_machine_config(args: argparse.Namespace) -> MachineConfig:
    guest = None
    if args.cpu_kind is not None or args.cpus is not None or args.memory_mb is not None:
        guest = GuestConfig(cpu_kind=args.cpu_kind, cpus=args.cpus, memory_mb=args.memory_mb)
    return MachineConfig(
        image=args.image,
        guest=guest,
        auto_destroy=args.auto_destroy or None,
        env=_parse_env(args.env) or None,
    )


def _build_ip_request(args: argparse.Namespace) -> IpRequest:
    variant: IpVariant
    match args.ip_type:
        case "v4":
            variant = Ipv4Config(shared=False, region=args.region)
        case "shared-v4":
            variant = Ipv4Config(shared=True, region=args.region)
        case "v6":
            variant = Ipv6Config(region=args.region)
        case "private-v6":
            variant = Ipv6Private()
        case _:
            raise ValueError(f"Unsupported IP type: {args.ip_type}")
    return IpRequest(variant=variant)


def _build_container_config(args: argparse.Namespace) -> ContainerConfig:
    return ContainerConfig(
        image=args.image,
        env=_parse_env(args.env),
        ports=tuple(_parse_port(value) for value in args.publish),
        mounts=tuple(_parse_mount(value) for value in args.volume),
        network=args.network,
        cmd=tuple(args.container_cmd) or None,
    )


type Handler = Callable[[argparse.Namespace], object]


def _handlers() -> dict[tuple[str, str], Handler]:
    return {
        ("apps", "get"): lambda a: app.apps_get(a.app_name),
        ("apps", "put"): lambda a: app.apps_put(a.org_slug, a.app_name),
        ("apps", "list"): lambda a: app.apps_list(a.org_slug),
        ("apps", "delete"): lambda a: app.apps_delete(a.app_name, force=a.force),
        ("machines", "list"): lambda a: app.machines_list(a.app_name),
        ("machines", "get"): lambda a: app.machines_get(a.app_name, a.machine_id),
        ("machines", "create"): lambda a: app.machines_create(
            a.app_name, a.machine_name, _build_machine_config(a), a.region
        ),
        ("machines", "update"): lambda a: app.machines_update(
            a.app_name, a.machine_id, _build_machine_config(a), a.region
        ),
        ("machines", "start"): lambda a: app.machines_start(a.app_name, a.machine_id),
        ("machines", "stop"): lambda a: app.machines_stop(a.app_name, a.machine_id),
        ("machines", "suspend"): lambda a: app.machines_suspend(a.app_name, a.machine_id),
        ("machines", "restart"): lambda a: app.machines_restart(a.app_name, a.machine_id),
        ("machines", "delete"): lambda a: app.machines_delete(
            a.app_name, a.machine_id, force=a.force
        ),
        ("machines", "exec"): lambda a: app.machines_exec(
            a.app_name, a.machine_id, list(a.exec_command)
        ),
        ("ips", "allocate"): lambda a: app.ips_allocate(
            a.app_name, _build_ip_request(a), a.pre_existing
        ),
        ("ips", "list"): lambda a: app.ips_list(a.app_name),
        ("ips", "release"): lambda a: app.ips_release(a.app_name, a.ip),
        ("volumes", "list"): lambda a: app.volumes_list(a.app_name),
        ("volumes", "create"): lambda a: app.volumes_create(
            a.app_name,
            VolumeCreateRequest(
                name=a.name,
                size_gb=a.size_gb,
                region=a.region,
                require_unique_zone=a.require_unique_zone,
            ),
        ),
        ("volumes", "get"): lambda a: app.volumes_get(a.app_name, a.volume_id),
        ("volumes", "delete"): lambda a: app.volumes_delete(a.app_name, a.volume_id),
        ("volumes", "extend"): lambda a: app.volumes_extend(a.app_name, a.volume_id, a.size_gb),
        ("secrets", "list"): lambda a: app.secrets_list(a.app_name),
        ("secrets", "put"): lambda a: app.secrets_put(a.app_name, a.key, a.value),
        ("secrets", "delete"): lambda a: app.secrets_delete(a.app_name, a.key),
        ("docker", "run"): lambda a: app.containers_run(a.name, _build_container_config(a)),
        ("docker", "start"): lambda a: app.containers_start(a.name),
        ("docker", "stop"): lambda a: app.containers_stop(a.name),
        ("docker", "rm"): lambda a: app.containers_rm(a.name, force=a.force),
        ("docker", "inspect"): lambda a: app.containers_inspect(a.name),
        ("docker", "ps"): lambda a: app.containers_list(all_containers=a.all_containers),
        ("docker", "network-create"): lambda a: app.networks_create(a.name, a.driver),
        ("docker", "network-rm"): lambda a: app.networks_rm(a.name),
        ("docker", "network-prune"): lambda _a: app.networks_prune(),
        ("docker", "volume-create"): lambda a: app.docker_volumes_create(a.name),
        ("docker", "volume-rm"): lambda a: app.docker_volumes_rm(a.name),
        ("docker", "volume-exists"): lambda a: app.docker_volumes_exists(a.name),
    }


def _render(result: object) -> str:
    return _output_adapter.dump_json(result, indent=2).decode()


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    handler = _handlers().get((parsed_args.command, parsed_args.action))
    if handler is None:
        command = f"{parsed_args.command} {parsed_args.action}"
        print(f"Error: unsupported command {command}", file=sys.stderr)
        sys.exit(2)

    try:
        result = handler(parsed_args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except ActivityError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if result is not None:
        print(_render(result))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
