from __future__ import annotations

import pytest

from flydock.adapters.fly import FlyClient
from flydock.domain.errors import RemoteAPIError
from flydock.domain.model import HostStatus, Region, VolumeCreateRequest
from tests.helpers.fly_api import FakeFlyApi


def test_create_volume(
    fly_client: FlyClient, fly_api: FakeFlyApi, volume_payload: dict[str, object]
) -> None:
    fly_api.add("POST", "apps/my-app/volumes", json_body=volume_payload)

    volume = fly_client.volumes.create(
        "my-app",
        VolumeCreateRequest(name="data", size_gb=3, region=Region.AMS, require_unique_zone=False),
    )

    assert volume.id == "vol_4y2n3k9x1"
    assert volume.region is Region.AMS
    assert volume.host_status is HostStatus.OK
    assert fly_api.json_body(0) == {
        "name": "data",
        "size_gb": 3,
        "region": "ams",
        "require_unique_zone": False,
    }


def test_list_volumes(
    fly_client: FlyClient, fly_api: FakeFlyApi, volume_payload: dict[str, object]
) -> None:
    fly_api.add("GET", "apps/my-app/volumes", json_body=[volume_payload])

    volumes = fly_client.volumes.list_volumes("my-app")

    assert [volume.name for volume in volumes] == ["data"]


def test_get_missing_volume_returns_none(fly_client: FlyClient, fly_api: FakeFlyApi) -> None:
    fly_api.add("GET", "apps/my-app/volumes/vol_gone", status=404, text="not found")

    assert fly_client.volumes.get("my-app", "vol_gone") is None


def test_extend_volume(fly_client: FlyClient, fly_api: FakeFlyApi) -> None:
    fly_api.add("PUT", "apps/my-app/volumes/vol_1/extend", json_body={"needs_restart": True})

    fly_client.volumes.extend("my-app", "vol_1", 10)

    assert fly_api.json_body(0) == {"size_gb": 10}


def test_extend_rejects_non_positive_size(fly_client: FlyClient, fly_api: FakeFlyApi) -> None:
    with pytest.raises(ValueError, match="positive"):
        fly_client.volumes.extend("my-app", "vol_1", 0)

    assert fly_api.requests == []


def test_delete_failure_raises(fly_client: FlyClient, fly_api: FakeFlyApi) -> None:
    fly_api.add("DELETE", "apps/my-app/volumes/vol_1", status=409, text="attached")

    with pytest.raises(RemoteAPIError, match="attached"):
        fly_client.volumes.delete("my-app", "vol_1")
