"""Shared HTTP plumbing for the Fly.io Machines API bindings."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, TypeAdapter, ValidationError

from flydock.adapters.http_resilience import ResilientClient, build_limiter
from flydock.config.fly import FLY_API_BASE_URL
from flydock.domain.errors import RemoteAPIError, ResponseDecodeError

if TYPE_CHECKING:
    from flydock.adapters.http_resilience import ClientFactory
    from flydock.config.fly import FlyConfig

log = getLogger(__name__)

HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_UNPROCESSABLE_ENTITY = 422


@dataclass(frozen=True, slots=True)
class FlyResponse:
    """Status and raw body of one Machines API call, kept even for non-2xx answers."""

    status: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_not_found(self) -> bool:
        return self.status == HTTP_NOT_FOUND

    def decode[M: BaseModel](self, model: type[M], *, context: str = "response") -> M:
        try:
            return model.model_validate_json(self.body)
        except ValidationError as exc:
            log.error("Cannot deserialize %s for %s: %s", context, model.__name__, self.body)
            msg = f"Deserialization of {context} failed"
            raise ResponseDecodeError(msg, body=self.body) from exc

    def decode_list[M: BaseModel](self, model: type[M], *, context: str = "response") -> list[M]:
        try:
            return TypeAdapter(list[model]).validate_json(self.body)
        except ValidationError as exc:
            log.error("Cannot deserialize %s for %s: %s", context, model.__name__, self.body)
            msg = f"Deserialization of {context} failed"
            raise ResponseDecodeError(msg, body=self.body) from exc

    def raise_for_status(self, *, context: str | None = None) -> None:
        if not self.is_success:
            raise RemoteAPIError(self.status, self.body, context=context)


class FlyHttpClient:
    """Authenticated transport for the Machines API.

    The bearer token comes from an explicit :class:`FlyConfig`; nothing here reads the
    environment. ``client_factory`` is the seam tests use to swap in a mock transport.
    Every session opened here draws on one shared rate limiter.
    """

    def __init__(
        self,
        *,
        config: FlyConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._limiter = build_limiter(self._resilience.ratelimit)

    @property
    def base_url(self) -> str:
        return (self._resilience.base_url or FLY_API_BASE_URL).rstrip("/")

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def session(self) -> ResilientClient:
        return self._client_factory(self._resilience, limiter=self._limiter)

    async def send(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        payload: BaseModel | dict[str, object] | None = None,
        params: dict[str, str] | None = None,
    ) -> FlyResponse:
        headers = {"Authorization": self._config.authorization}
        content: bytes | None = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            if isinstance(payload, BaseModel):
                content = payload.model_dump_json(by_alias=True, exclude_none=True).encode()
            else:
                content = json.dumps(payload).encode()

        response = await client.request(
            method,
            self.url(path),
            content=content,
            params=params,
            headers=headers,
        )
        body = response.text
        if not 200 <= response.status_code < 300:
            log.debug("Got error status %s for %s %s", response.status_code, method, path)
        return FlyResponse(status=response.status_code, body=body)
