"""Apps endpoints, including the put-if-absent create."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from flydock.domain import identifiers
from flydock.domain.reconciliation import (
    AlreadyExists,
    NotFound,
    OtherFailure,
    Success,
    put_app_if_absent,
)

from .client import HTTP_UNPROCESSABLE_ENTITY
from .schema import (
    AppDetailsPayload,
    AppPayload,
    AppsResponsePayload,
    CreateAppRequestPayload,
    IdPayload,
)
from .translator import translate_app, translate_app_details

if TYPE_CHECKING:
    from flydock.domain.model import App, AppDetails
    from flydock.domain.reconciliation import ConflictSignal

    from .client import FlyHttpClient

log = getLogger(__name__)


class FlyAppsClient:
    """Apps API. Also serves as the registry port for :func:`put_app_if_absent`."""

    def __init__(self, http: FlyHttpClient) -> None:
        self._http = http

    def get(self, app_name: str) -> App | None:
        app_name = identifiers.app_name(app_name)
        return asyncio.run(self._get_async(app_name))

    def put(self, org_slug: str, app_name: str) -> App:
        """Ensure ``app_name`` exists under ``org_slug``; safe to call repeatedly."""

        org_slug = identifiers.org_slug(org_slug)
        app_name = identifiers.app_name(app_name)
        return put_app_if_absent(self, org_slug=org_slug, app_name=app_name)

    def list_apps(self, org_slug: str) -> list[App]:
        org_slug = identifiers.org_slug(org_slug)
        return asyncio.run(self._list_async(org_slug))

    def delete(self, app_name: str, *, force: bool = False) -> None:
        app_name = identifiers.app_name(app_name)
        asyncio.run(self._delete_async(app_name, force=force))

    def submit_create(self, *, org_slug: str, app_name: str) -> ConflictSignal[App]:
        return asyncio.run(self._submit_create_async(org_slug=org_slug, app_name=app_name))

    def probe(self, *, app_name: str) -> ConflictSignal[AppDetails]:
        return asyncio.run(self._probe_async(app_name))

    async def _get_async(self, app_name: str) -> App | None:
        async with self._http.session() as client:
            response = await self._http.send(client, "GET", f"apps/{app_name}")
        if response.is_not_found:
            return None
        response.raise_for_status()
        return translate_app(response.decode(AppPayload, context=f"app {app_name}"))

    async def _list_async(self, org_slug: str) -> list[App]:
        async with self._http.session() as client:
            response = await self._http.send(client, "GET", "apps", params={"org_slug": org_slug})
        response.raise_for_status()
        payload = response.decode(AppsResponsePayload, context=f"apps of {org_slug}")
        return [translate_app(app) for app in payload.apps]

    async def _delete_async(self, app_name: str, *, force: bool) -> None:
        params = {"force": "true"} if force else None
        async with self._http.session() as client:
            response = await self._http.send(client, "DELETE", f"apps/{app_name}", params=params)
        response.raise_for_status()

    async def _submit_create_async(self, *, org_slug: str, app_name: str) -> ConflictSignal[App]:
        request = CreateAppRequestPayload(app_name=app_name, org_slug=org_slug)
        async with self._http.session() as client:
            response = await self._http.send(client, "POST", "apps", payload=request)

        if response.is_success:
            created = response.decode(IdPayload, context=f"app {app_name} creation")
            return Success(translate_app(AppPayload(id=created.id, name=app_name)))
        if response.status == HTTP_UNPROCESSABLE_ENTITY:
            log.info("Creating app %s returned %s, probing", app_name, response.status)
            return AlreadyExists(status=response.status, body=response.body)
        return OtherFailure(status=response.status, body=response.body)

    async def _probe_async(self, app_name: str) -> ConflictSignal[AppDetails]:
        async with self._http.session() as client:
            response = await self._http.send(client, "GET", f"apps/{app_name}")
        if response.is_success:
            details = response.decode(AppDetailsPayload, context=f"app {app_name}")
            return Success(translate_app_details(details))
        if response.is_not_found:
            return NotFound(body=response.body)
        return OtherFailure(status=response.status, body=response.body)
