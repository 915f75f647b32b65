"""IP assignment endpoints.

Allocation always mints a fresh address, so a retried allocation leaks one. The safe
entry point is :meth:`FlyIpsClient.allocate`, which reconciles against the addresses
the caller already recorded.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from flydock.domain import identifiers
from flydock.domain.reconciliation import (
    NotFound,
    OtherFailure,
    Success,
    allocate_ip_idempotently,
    release_ignoring_missing,
)

from .schema import AssignIpResponsePayload, ListIpsResponsePayload
from .translator import ip_request_to_payload, translate_ip_assignment

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flydock.domain.model import IpDetail, IpRequest
    from flydock.domain.reconciliation import ConflictSignal

    from .client import FlyHttpClient

log = getLogger(__name__)


class FlyIpsClient:
    def __init__(self, http: FlyHttpClient) -> None:
        self._http = http

    def allocate(
        self,
        app_name: str,
        request: IpRequest,
        pre_existing: Iterable[str] = (),
    ) -> str:
        app_name = identifiers.app_name(app_name)
        known = [identifiers.ip_address(ip) for ip in pre_existing]
        return allocate_ip_idempotently(
            self,
            app_name=app_name,
            request=request,
            pre_existing=known,
        )

    def allocate_unsafe(self, app_name: str, request: IpRequest) -> str:
        """Mint one address. Not idempotent: every call allocates anew."""

        app_name = identifiers.app_name(app_name)
        return asyncio.run(self._allocate_async(app_name, request))

    def list_ips(self, app_name: str) -> list[IpDetail]:
        app_name = identifiers.app_name(app_name)
        return asyncio.run(self._list_async(app_name))

    def release(self, app_name: str, ip: str) -> None:
        """Release ``ip``; an address that is already gone counts as released."""

        app_name = identifiers.app_name(app_name)
        ip = identifiers.ip_address(ip)
        release_ignoring_missing(self, app_name=app_name, ip=ip)

    def submit_release(self, *, app_name: str, ip: str) -> ConflictSignal[None]:
        return asyncio.run(self._release_async(app_name, ip))

    async def _allocate_async(self, app_name: str, request: IpRequest) -> str:
        async with self._http.session() as client:
            response = await self._http.send(
                client,
                "POST",
                f"apps/{app_name}/ip_assignments",
                payload=ip_request_to_payload(request),
            )
        response.raise_for_status()
        assigned = response.decode(AssignIpResponsePayload, context=f"ip assignment of {app_name}")
        log.debug("Allocated %s for app %s", assigned.ip, app_name)
        return assigned.ip

    async def _list_async(self, app_name: str) -> list[IpDetail]:
        async with self._http.session() as client:
            response = await self._http.send(client, "GET", f"apps/{app_name}/ip_assignments")
        response.raise_for_status()
        payload = response.decode(ListIpsResponsePayload, context=f"ip listing of {app_name}")
        return [translate_ip_assignment(item) for item in payload.ips]

    async def _release_async(self, app_name: str, ip: str) -> ConflictSignal[None]:
        async with self._http.session() as client:
            response = await self._http.send(
                client, "DELETE", f"apps/{app_name}/ip_assignments/{ip}"
            )
        if response.is_success:
            return Success(None)
        if response.is_not_found:
            return NotFound(body=response.body)
        return OtherFailure(status=response.status, body=response.body)
