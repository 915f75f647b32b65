"""App secret endpoints."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from flydock.domain import identifiers

from .schema import ListSecretsResponsePayload, PutSecretRequestPayload, SecretPayload
from .translator import translate_secret

if TYPE_CHECKING:
    from flydock.domain.model import Secret

    from .client import FlyHttpClient


class FlySecretsClient:
    """Secrets API. Values are write-only; listings only expose names and digests."""

    def __init__(self, http: FlyHttpClient) -> None:
        self._http = http

    def list_secrets(self, app_name: str) -> list[Secret]:
        app_name = identifiers.app_name(app_name)
        return asyncio.run(self._list_async(app_name))

    def put(self, app_name: str, key: str, value: str) -> Secret:
        app_name = identifiers.app_name(app_name)
        key = identifiers.secret_key(key)
        return asyncio.run(self._put_async(app_name, key, value))

    def delete(self, app_name: str, key: str) -> None:
        app_name = identifiers.app_name(app_name)
        key = identifiers.secret_key(key)
        asyncio.run(self._delete_async(app_name, key))

    async def _list_async(self, app_name: str) -> list[Secret]:
        async with self._http.session() as client:
            response = await self._http.send(client, "GET", f"apps/{app_name}/secrets")
        response.raise_for_status(context=f"listing of secrets for app '{app_name}'")
        payload = response.decode(ListSecretsResponsePayload, context=f"secrets of {app_name}")
        return [translate_secret(secret) for secret in payload.secrets]

    async def _put_async(self, app_name: str, key: str, value: str) -> Secret:
        async with self._http.session() as client:
            response = await self._http.send(
                client,
                "POST",
                f"apps/{app_name}/secrets/{key}",
                payload=PutSecretRequestPayload(value=value),
            )
        response.raise_for_status(context=f"put of secret '{key}' for app '{app_name}'")
        return translate_secret(response.decode(SecretPayload, context=f"secret {key}"))

    async def _delete_async(self, app_name: str, key: str) -> None:
        async with self._http.session() as client:
            response = await self._http.send(client, "DELETE", f"apps/{app_name}/secrets/{key}")
        response.raise_for_status(context=f"delete of secret '{key}' for app '{app_name}'")
