"""Container lifecycle through the docker CLI, tolerant of repeated calls."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from flydock.domain.errors import DockerCommandError, FlydockError, ResponseDecodeError
from flydock.domain.model import ContainerInfo, ContainerSummary

from .schema import DockerInspectContainer, DockerPsEntry

if TYPE_CHECKING:
    from flydock.domain.model import ContainerConfig

    from .cli import DockerCLI

log = getLogger(__name__)

NAME_CONFLICT_MARKERS = ("Conflict", "is already in use")

_inspect_adapter = TypeAdapter(list[DockerInspectContainer])


class ContainerStateError(FlydockError):
    """Raised when a container exists but is not in a state the call can reuse."""


def build_run_args(name: str, config: ContainerConfig) -> list[str]:
    args = ["run", "-d", "--name", name]
    for key, value in config.env.items():
        args += ["-e", f"{key}={value}"]
    for port in config.ports:
        args += ["-p", f"{port.host_port}:{port.container_port}/{port.protocol}"]
    for mount in config.mounts:
        mode = "ro" if mount.readonly else "rw"
        args += ["-v", f"{mount.source}:{mount.target}:{mode}"]
    if config.network is not None:
        args += ["--network", config.network]
    args.append(config.image)
    if config.cmd is not None:
        args.extend(config.cmd)
    return args


class DockerContainers:
    def __init__(self, cli: DockerCLI) -> None:
        self._cli = cli

    def run(self, name: str, config: ContainerConfig) -> str:
        """Start a detached container and return its id.

        If ``name`` is already taken by a running container, that container's id is
        returned instead. A stopped container with the name is reported, not replaced.
        """

        return asyncio.run(self._run_async(name, config))

    def start(self, name: str) -> None:
        asyncio.run(self._start_async(name))

    def stop(self, name: str) -> None:
        asyncio.run(self._stop_async(name))

    def rm(self, name: str, *, force: bool = False) -> None:
        asyncio.run(self._rm_async(name, force=force))

    def inspect(self, name: str) -> ContainerInfo | None:
        return asyncio.run(self._inspect_async(name))

    def list_containers(self, *, all_containers: bool = False) -> list[ContainerSummary]:
        return asyncio.run(self._list_async(all_containers=all_containers))

    async def _run_async(self, name: str, config: ContainerConfig) -> str:
        try:
            return await self._cli.exec_async(build_run_args(name, config))
        except DockerCommandError as exc:
            if not any(marker in str(exc) for marker in NAME_CONFLICT_MARKERS):
                raise
            info = await self._inspect_async(name)
            if info is None:
                raise
            if info.is_running:
                log.info("Container %s is already running as %s", name, info.id)
                return info.id
            raise ContainerStateError(
                f"Container '{name}' exists but is in state '{info.state}'. "
                "Use 'start' to resume or 'rm' to replace."
            ) from exc

    async def _start_async(self, name: str) -> None:
        info = await self._inspect_async(name)
        if info is None:
            raise ContainerStateError(f"Container '{name}' not found")
        if info.is_running:
            return
        await self._cli.exec_async(["start", name])

    async def _stop_async(self, name: str) -> None:
        if not await self._cli.check_exists_async("container", name):
            return
        try:
            await self._cli.exec_async(["stop", name])
        except DockerCommandError as exc:
            log.warning("Ignoring failure to stop container %s: %s", name, exc)

    async def _rm_async(self, name: str, *, force: bool) -> None:
        if not await self._cli.check_exists_async("container", name):
            return
        args = ["rm", "-f", name] if force else ["rm", name]
        await self._cli.exec_async(args)

    async def _inspect_async(self, name: str) -> ContainerInfo | None:
        try:
            output = await self._cli.exec_async(["inspect", name])
        except DockerCommandError as exc:
            log.debug("Inspect of %s failed: %s", name, exc)
            return None
        try:
            details = _inspect_adapter.validate_json(output)
        except ValidationError as exc:
            raise ResponseDecodeError("Failed to parse inspect output", body=output) from exc
        if not details:
            return None
        first = details[0]
        return ContainerInfo(id=first.id, state=first.state.status)

    async def _list_async(self, *, all_containers: bool) -> list[ContainerSummary]:
        args = ["ps", "--format", "{{json .}}"]
        if all_containers:
            args.append("-a")
        output = await self._cli.exec_async(args)

        # One JSON object per line rather than a JSON array.
        containers: list[ContainerSummary] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            try:
                entry = DockerPsEntry.model_validate_json(line)
            except ValidationError as exc:
                raise ResponseDecodeError("Failed to parse ps entry", body=line) from exc
            containers.append(
                ContainerSummary(
                    id=entry.id,
                    name=entry.names,
                    image=entry.image,
                    state=entry.state,
                    status=entry.status,
                )
            )
        return containers
