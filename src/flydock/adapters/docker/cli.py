"""Thin async runner around the docker binary."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from flydock.config.docker import DockerConfig
from flydock.domain.errors import DockerCommandError

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)

MISSING_OBJECT_MARKER = "No such"


class Process(Protocol):
    @property
    def returncode(self) -> int | None: ...

    async def communicate(self) -> tuple[bytes, bytes]: ...

    def kill(self) -> None: ...


class Spawner(Protocol):
    async def __call__(
        self,
        program: str,
        *args: str,
        stdin: int,
        stdout: int,
        stderr: int,
    ) -> Process: ...


async def _create_subprocess_exec(
    program: str,
    *args: str,
    stdin: int,
    stdout: int,
    stderr: int,
) -> Process:
    return await asyncio.create_subprocess_exec(
        program, *args, stdin=stdin, stdout=stdout, stderr=stderr
    )


class DockerCLI:
    """Run docker subcommands and return their trimmed stdout.

    ``spawn`` defaults to :func:`asyncio.create_subprocess_exec`; tests pass a fake.
    Arguments are handed to the process as a list, never through a shell.
    """

    def __init__(self, config: DockerConfig | None = None, *, spawn: Spawner | None = None) -> None:
        self._config = config or DockerConfig()
        self._spawn: Spawner = spawn or _create_subprocess_exec

    def exec(self, args: Sequence[str]) -> str:
        return asyncio.run(self.exec_async(args))

    def check_exists(self, kind: str, name: str) -> bool:
        return asyncio.run(self.check_exists_async(kind, name))

    async def exec_async(self, args: Sequence[str]) -> str:
        log.debug("Running %s %s", self._config.binary, " ".join(args))
        process = await self._spawn(
            self._config.binary,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            raw_stdout, raw_stderr = await asyncio.wait_for(
                process.communicate(), timeout=self._config.timeout_seconds
            )
        except TimeoutError:
            process.kill()
            raise DockerCommandError(
                None,
                stderr=f"timed out after {self._config.timeout_seconds}s",
                stdout="",
            ) from None

        stdout = raw_stdout.decode(errors="replace")
        stderr = raw_stderr.decode(errors="replace")
        if process.returncode != 0:
            raise DockerCommandError(process.returncode, stderr=stderr, stdout=stdout)
        return stdout.strip()

    async def check_exists_async(self, kind: str, name: str) -> bool:
        """Inspect ``name`` as ``kind``; a "No such ..." failure means it does not exist."""

        try:
            await self.exec_async(["inspect", "--type", kind, name])
        except DockerCommandError as exc:
            if MISSING_OBJECT_MARKER in str(exc):
                return False
            raise
        return True
