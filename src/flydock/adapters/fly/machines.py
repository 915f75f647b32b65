"""Machines endpoints, including the conflict-tolerant create."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from flydock.domain import identifiers
from flydock.domain.errors import UnexpectedResponseError
from flydock.domain.reconciliation import (
    AlreadyExists,
    OtherFailure,
    Success,
    create_machine_idempotently,
    extract_conflicting_machine_id,
)

from .client import HTTP_CONFLICT
from .schema import (
    ErrorPayload,
    ExecRequestPayload,
    ExecResponsePayload,
    IdPayload,
    MachineCreateRequestPayload,
    MachinePayload,
    MachineUpdateRequestPayload,
)
from .translator import machine_config_to_payload, translate_exec_response, translate_machine

if TYPE_CHECKING:
    from flydock.domain.model import ExecResponse, Machine, MachineConfig, Region
    from flydock.domain.reconciliation import ConflictSignal

    from .client import FlyHttpClient, FlyResponse

log = getLogger(__name__)


class FlyMachinesClient:
    """Machines API. Also serves as the creation port for :func:`create_machine_idempotently`."""

    def __init__(self, http: FlyHttpClient) -> None:
        self._http = http

    def list_machines(self, app_name: str) -> list[Machine]:
        app_name = identifiers.app_name(app_name)
        return asyncio.run(self._list_async(app_name))

    def get(self, app_name: str, machine_id: str) -> Machine | None:
        app_name = identifiers.app_name(app_name)
        machine_id = identifiers.machine_id(machine_id)
        return asyncio.run(self._get_async(app_name, machine_id))

    def create(
        self,
        app_name: str,
        machine_name: str,
        config: MachineConfig,
        region: Region | None = None,
    ) -> str:
        """Create ``machine_name`` and return its id, or the id of the machine already using it."""

        app_name = identifiers.app_name(app_name)
        return create_machine_idempotently(
            self,
            app_name=app_name,
            machine_name=machine_name,
            config=config,
            region=region,
        )

    def update(
        self,
        app_name: str,
        machine_id: str,
        config: MachineConfig,
        region: Region | None = None,
    ) -> None:
        app_name = identifiers.app_name(app_name)
        machine_id = identifiers.machine_id(machine_id)
        asyncio.run(self._update_async(app_name, machine_id, config, region))

    def start(self, app_name: str, machine_id: str) -> None:
        self._change_state(app_name, machine_id, "start")

    def stop(self, app_name: str, machine_id: str) -> None:
        self._change_state(app_name, machine_id, "stop")

    def suspend(self, app_name: str, machine_id: str) -> None:
        self._change_state(app_name, machine_id, "suspend")

    def restart(self, app_name: str, machine_id: str) -> None:
        self._change_state(app_name, machine_id, "restart")

    def delete(self, app_name: str, machine_id: str, *, force: bool = False) -> None:
        app_name = identifiers.app_name(app_name)
        machine_id = identifiers.machine_id(machine_id)
        asyncio.run(
            self._send_and_check(
                "DELETE",
                f"apps/{app_name}/machines/{machine_id}",
                params={"force": "true" if force else "false"},
            )
        )

    def exec(self, app_name: str, machine_id: str, command: list[str]) -> ExecResponse:
        app_name = identifiers.app_name(app_name)
        machine_id = identifiers.machine_id(machine_id)
        return asyncio.run(self._exec_async(app_name, machine_id, command))

    def submit_create(
        self,
        *,
        app_name: str,
        machine_name: str,
        config: MachineConfig,
        region: Region | None = None,
    ) -> ConflictSignal[str]:
        return asyncio.run(self._submit_create_async(app_name, machine_name, config, region))

    def _change_state(self, app_name: str, machine_id: str, action: str) -> None:
        app_name = identifiers.app_name(app_name)
        machine_id = identifiers.machine_id(machine_id)
        asyncio.run(self._send_and_check("POST", f"apps/{app_name}/machines/{machine_id}/{action}"))

    async def _send_and_check(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
    ) -> None:
        async with self._http.session() as client:
            response = await self._http.send(client, method, path, params=params)
        response.raise_for_status()

    async def _list_async(self, app_name: str) -> list[Machine]:
        async with self._http.session() as client:
            response = await self._http.send(client, "GET", f"apps/{app_name}/machines")
        response.raise_for_status()
        payloads = response.decode_list(MachinePayload, context=f"machines of {app_name}")
        return [translate_machine(payload) for payload in payloads]

    async def _get_async(self, app_name: str, machine_id: str) -> Machine | None:
        async with self._http.session() as client:
            response = await self._http.send(
                client, "GET", f"apps/{app_name}/machines/{machine_id}"
            )
        if response.is_not_found:
            return None
        response.raise_for_status()
        return translate_machine(response.decode(MachinePayload, context=f"machine {machine_id}"))

    async def _submit_create_async(
        self,
        app_name: str,
        machine_name: str,
        config: MachineConfig,
        region: Region | None,
    ) -> ConflictSignal[str]:
        request = MachineCreateRequestPayload(
            name=machine_name,
            config=machine_config_to_payload(config),
            region=region,
        )
        async with self._http.session() as client:
            response = await self._http.send(
                client, "POST", f"apps/{app_name}/machines", payload=request
            )

        if response.is_success:
            created = response.decode(IdPayload, context=f"machine {machine_name} creation")
            return Success(created.id)
        if response.status == HTTP_CONFLICT:
            log.warning("Got error status %s creating machine %s", response.status, machine_name)
            return AlreadyExists(
                status=response.status,
                body=response.body,
                existing_id=_conflicting_machine_id(response),
            )
        log.warning("Got error status %s creating machine %s", response.status, machine_name)
        return OtherFailure(status=response.status, body=response.body)

    async def _update_async(
        self,
        app_name: str,
        machine_id: str,
        config: MachineConfig,
        region: Region | None,
    ) -> None:
        request = MachineUpdateRequestPayload(
            config=machine_config_to_payload(config),
            region=region,
        )
        async with self._http.session() as client:
            response = await self._http.send(
                client, "POST", f"apps/{app_name}/machines/{machine_id}", payload=request
            )
        response.raise_for_status()
        updated = response.decode(IdPayload, context=f"machine {machine_id} update")
        if updated.id != machine_id:
            raise UnexpectedResponseError(
                f"unexpected id returned, expected {machine_id} got {updated.id}"
            )

    async def _exec_async(
        self,
        app_name: str,
        machine_id: str,
        command: list[str],
    ) -> ExecResponse:
        async with self._http.session() as client:
            response = await self._http.send(
                client,
                "POST",
                f"apps/{app_name}/machines/{machine_id}/exec",
                payload=ExecRequestPayload(command=command),
            )
        response.raise_for_status()
        payload = response.decode(ExecResponsePayload, context=f"exec on {machine_id}")
        return translate_exec_response(payload)


def _conflicting_machine_id(response: FlyResponse) -> str | None:
    try:
        error = ErrorPayload.model_validate_json(response.body)
    except ValidationError:
        log.error("Cannot parse conflict response: %s", response.body)
        return None
    return extract_conflicting_machine_id(error.error)
