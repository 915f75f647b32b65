"""Docker named volumes."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cli import DockerCLI


class DockerVolumes:
    def __init__(self, cli: DockerCLI) -> None:
        self._cli = cli

    def create(self, name: str) -> str:
        return asyncio.run(self._create_async(name))

    def rm(self, name: str) -> None:
        asyncio.run(self._rm_async(name))

    def exists(self, name: str) -> bool:
        return self._cli.check_exists("volume", name)

    async def _create_async(self, name: str) -> str:
        if not await self._cli.check_exists_async("volume", name):
            await self._cli.exec_async(["volume", "create", name])
        return name

    async def _rm_async(self, name: str) -> None:
        if not await self._cli.check_exists_async("volume", name):
            return
        await self._cli.exec_async(["volume", "rm", name])
