"""Volume endpoints."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from flydock.domain import identifiers

from .schema import ExtendVolumeRequestPayload, VolumePayload
from .translator import translate_volume, volume_request_to_payload

if TYPE_CHECKING:
    from flydock.domain.model import Volume, VolumeCreateRequest

    from .client import FlyHttpClient


class FlyVolumesClient:
    def __init__(self, http: FlyHttpClient) -> None:
        self._http = http

    def list_volumes(self, app_name: str) -> list[Volume]:
        app_name = identifiers.app_name(app_name)
        return asyncio.run(self._list_async(app_name))

    def create(self, app_name: str, request: VolumeCreateRequest) -> Volume:
        app_name = identifiers.app_name(app_name)
        return asyncio.run(self._create_async(app_name, request))

    def get(self, app_name: str, volume_id: str) -> Volume | None:
        app_name = identifiers.app_name(app_name)
        volume_id = identifiers.volume_id(volume_id)
        return asyncio.run(self._get_async(app_name, volume_id))

    def delete(self, app_name: str, volume_id: str) -> None:
        app_name = identifiers.app_name(app_name)
        volume_id = identifiers.volume_id(volume_id)
        asyncio.run(self._delete_async(app_name, volume_id))

    def extend(self, app_name: str, volume_id: str, size_gb: int) -> None:
        app_name = identifiers.app_name(app_name)
        volume_id = identifiers.volume_id(volume_id)
        if size_gb <= 0:
            raise ValueError(f"volume size must be positive, got {size_gb}")
        asyncio.run(self._extend_async(app_name, volume_id, size_gb))

    async def _list_async(self, app_name: str) -> list[Volume]:
        async with self._http.session() as client:
            response = await self._http.send(client, "GET", f"apps/{app_name}/volumes")
        response.raise_for_status()
        payloads = response.decode_list(VolumePayload, context=f"volumes of {app_name}")
        return [translate_volume(payload) for payload in payloads]

    async def _create_async(self, app_name: str, request: VolumeCreateRequest) -> Volume:
        async with self._http.session() as client:
            response = await self._http.send(
                client,
                "POST",
                f"apps/{app_name}/volumes",
                payload=volume_request_to_payload(request),
            )
        response.raise_for_status()
        return translate_volume(response.decode(VolumePayload, context=f"volume {request.name}"))

    async def _get_async(self, app_name: str, volume_id: str) -> Volume | None:
        async with self._http.session() as client:
            response = await self._http.send(client, "GET", f"apps/{app_name}/volumes/{volume_id}")
        if response.is_not_found:
            return None
        response.raise_for_status()
        return translate_volume(response.decode(VolumePayload, context=f"volume {volume_id}"))

    async def _delete_async(self, app_name: str, volume_id: str) -> None:
        async with self._http.session() as client:
            response = await self._http.send(
                client, "DELETE", f"apps/{app_name}/volumes/{volume_id}"
            )
        response.raise_for_status()

    async def _extend_async(self, app_name: str, volume_id: str, size_gb: int) -> None:
        async with self._http.session() as client:
            response = await self._http.send(
                client,
                "PUT",
                f"apps/{app_name}/volumes/{volume_id}/extend",
                payload=ExtendVolumeRequestPayload(size_gb=size_gb),
            )
        response.raise_for_status()
