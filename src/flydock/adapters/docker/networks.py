"""Docker networks, created only when missing."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cli import DockerCLI


class DockerNetworks:
    def __init__(self, cli: DockerCLI) -> None:
        self._cli = cli

    def create(self, name: str, driver: str | None = None) -> str:
        """Create the network and return its id, or ``name`` when it already exists."""

        return asyncio.run(self._create_async(name, driver))

    def rm(self, name: str) -> None:
        asyncio.run(self._rm_async(name))

    def prune(self) -> None:
        self._cli.exec(["network", "prune", "-f"])

    async def _create_async(self, name: str, driver: str | None) -> str:
        if await self._cli.check_exists_async("network", name):
            return name
        args = ["network", "create"]
        if driver is not None:
            args += ["--driver", driver]
        args.append(name)
        return await self._cli.exec_async(args)

    async def _rm_async(self, name: str) -> None:
        if not await self._cli.check_exists_async("network", name):
            return
        await self._cli.exec_async(["network", "rm", name])
