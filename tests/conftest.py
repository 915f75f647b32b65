from __future__ import annotations

import pytest

from flydock.adapters.docker import DockerClient
from flydock.adapters.fly import FlyClient
from flydock.config import DockerConfig, FlyConfig
from tests.helpers.docker_cli import FakeDocker
from tests.helpers.fly_api import FakeFlyApi


@pytest.fixture
def fly_config() -> FlyConfig:
    return FlyConfig(api_token="test-token")


@pytest.fixture
def fly_api() -> FakeFlyApi:
    return FakeFlyApi()


@pytest.fixture
def fly_client(fly_config: FlyConfig, fly_api: FakeFlyApi) -> FlyClient:
    return FlyClient(config=fly_config, client_factory=fly_api.client_factory())


@pytest.fixture
def fake_docker() -> FakeDocker:
    return FakeDocker()


@pytest.fixture
def docker_client(fake_docker: FakeDocker) -> DockerClient:
    return DockerClient(DockerConfig(binary="docker"), spawn=fake_docker.spawn)
