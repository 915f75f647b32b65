from __future__ import annotations

import pytest

from flydock.adapters.fly import FlyClient
from flydock.domain.errors import IllegalSlugError, RemoteAPIError
from flydock.domain.model import Secret
from tests.helpers.fly_api import FakeFlyApi


def test_put_secret(fly_client: FlyClient, fly_api: FakeFlyApi) -> None:
    fly_api.add(
        "POST",
        "apps/my-app/secrets/DATABASE_URL",
        json_body={"name": "DATABASE_URL", "digest": "d1"},
    )

    secret = fly_client.secrets.put("my-app", "DATABASE_URL", "postgres://x")

    assert secret == Secret(name="DATABASE_URL", digest="d1")
    assert fly_api.json_body(0) == {"value": "postgres://x"}


def test_list_secrets(fly_client: FlyClient, fly_api: FakeFlyApi) -> None:
    fly_api.add(
        "GET",
        "apps/my-app/secrets",
        json_body={"secrets": [{"name": "A", "digest": "1"}, {"name": "B", "digest": "2"}]},
    )

    assert fly_client.secrets.list_secrets("my-app") == [
        Secret(name="A", digest="1"),
        Secret(name="B", digest="2"),
    ]


def test_delete_failure_names_secret_and_app(fly_client: FlyClient, fly_api: FakeFlyApi) -> None:
    fly_api.add("DELETE", "apps/my-app/secrets/TOKEN", status=500, text="boom")

    with pytest.raises(RemoteAPIError) as exc:
        fly_client.secrets.delete("my-app", "TOKEN")

    assert "secret 'TOKEN' for app 'my-app'" in str(exc.value)
    assert "failed with status 500: boom" in str(exc.value)


def test_secret_key_is_validated(fly_client: FlyClient, fly_api: FakeFlyApi) -> None:
    with pytest.raises(IllegalSlugError):
        fly_client.secrets.put("my-app", "BAD/KEY", "value")

    assert fly_api.requests == []
