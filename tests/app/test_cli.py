from __future__ import annotations

import json

import pytest

from flydock import app as app_module
from flydock.domain.errors import ActivityError
from flydock.domain.model import (
    App,
    ContainerConfig,
    IpRequest,
    Ipv4Config,
    MachineConfig,
    PortMapping,
    Region,
    VolumeMount,
)
from flydock.ui import cli


def test_apps_put_prints_json(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_put(org_slug: str, app_name: str) -> App:
        captured.update(org_slug=org_slug, app_name=app_name)
        return App(id="a1", name=app_name)

    monkeypatch.setattr(app_module, "apps_put", fake_put)

    cli.main(["apps", "put", "personal", "my-app"])

    assert captured == {"org_slug": "personal", "app_name": "my-app"}
    assert json.loads(capsys.readouterr().out) == {"id": "a1", "name": "my-app"}


def test_machines_create_builds_config(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_create(
        app_name: str, machine_name: str, config: MachineConfig, region: Region | None
    ) -> str:
        captured.update(app_name=app_name, machine_name=machine_name, config=config, region=region)
        return "m1"

    monkeypatch.setattr(app_module, "machines_create", fake_create)

    cli.main(
        [
            "machines",
            "create",
            "my-app",
            "worker-1",
            "--image",
            "nginx",
            "--region",
            "ams",
            "--env",
            "MODE=web",
            "--memory-mb",
            "512",
        ]
    )

    config = captured["config"]
    assert isinstance(config, MachineConfig)
    assert config.env == {"MODE": "web"}
    assert config.guest is not None
    assert config.guest.memory_mb == 512
    assert captured["region"] is Region.AMS


def test_ips_allocate_passes_pre_existing(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_allocate(app_name: str, request: IpRequest, pre_existing: list[str]) -> str:
        captured.update(app_name=app_name, request=request, pre_existing=pre_existing)
        return "137.66.0.9"

    monkeypatch.setattr(app_module, "ips_allocate", fake_allocate)

    cli.main(
        [
            "ips",
            "allocate",
            "my-app",
            "--type",
            "shared-v4",
            "--pre-existing",
            "137.66.0.1",
            "--pre-existing",
            "137.66.0.2",
        ]
    )

    assert captured["request"] == IpRequest(variant=Ipv4Config(shared=True))
    assert captured["pre_existing"] == ["137.66.0.1", "137.66.0.2"]


def test_docker_run_parses_ports_and_mounts(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_run(name: str, config: ContainerConfig) -> str:
        captured.update(name=name, config=config)
        return "abc"

    monkeypatch.setattr(app_module, "containers_run", fake_run)

    cli.main(
        [
            "docker",
            "run",
            "db",
            "postgres:16",
            "--publish",
            "5432:5432",
            "--volume",
            "pgdata:/data:ro",
            "--network",
            "backend",
        ]
    )

    config = captured["config"]
    assert isinstance(config, ContainerConfig)
    assert config.ports == (PortMapping(host_port=5432, container_port=5432),)
    assert config.mounts == (VolumeMount(source="pgdata", target="/data", readonly=True),)
    assert config.network == "backend"
    assert config.cmd is None


def test_invalid_argument_exits_with_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_module, "containers_run", lambda *_args: "unused")

    with pytest.raises(SystemExit) as exc:
        cli.main(["docker", "run", "db", "postgres", "--publish", "nonsense"])

    assert exc.value.code == 2


def test_unknown_subcommand_exits_with_2() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["apps", "teleport"])

    assert exc.value.code == 2


def test_operation_failure_exits_with_1(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def failing_delete(app_name: str, *, force: bool) -> None:
        del app_name, force
        raise ActivityError("failed with status 500: boom")

    monkeypatch.setattr(app_module, "apps_delete", failing_delete)

    with pytest.raises(SystemExit) as exc:
        cli.main(["apps", "delete", "my-app"])

    assert exc.value.code == 1
    assert "failed with status 500: boom" in capsys.readouterr().err
