from __future__ import annotations

import json

import pytest

from flydock.adapters.docker import ContainerStateError, DockerClient, build_run_args
from flydock.domain.errors import DockerCommandError
from flydock.domain.model import (
    ContainerConfig,
    ContainerInfo,
    ContainerSummary,
    PortMapping,
    VolumeMount,
)
from tests.helpers.docker_cli import FakeDocker

CONFIG = ContainerConfig(image="redis:7")
RUN_ARGS = ("run", "-d", "--name", "cache", "redis:7")


def _inspect_output(container_id: str, status: str) -> str:
    return json.dumps([{"Id": container_id, "Name": "/cache", "State": {"Status": status}}])


def test_build_run_args_covers_every_option() -> None:
    config = ContainerConfig(
        image="postgres:16",
        env={"POSTGRES_PASSWORD": "pw"},
        ports=(PortMapping(host_port=5432, container_port=5432),),
        mounts=(
            VolumeMount(source="pgdata", target="/var/lib/postgresql/data"),
            VolumeMount(source="/etc/conf", target="/conf", readonly=True),
        ),
        network="backend",
        cmd=("postgres", "-c", "fsync=off"),
    )

    assert build_run_args("db", config) == [
        "run",
        "-d",
        "--name",
        "db",
        "-e",
        "POSTGRES_PASSWORD=pw",
        "-p",
        "5432:5432/tcp",
        "-v",
        "pgdata:/var/lib/postgresql/data:rw",
        "-v",
        "/etc/conf:/conf:ro",
        "--network",
        "backend",
        "postgres:16",
        "postgres",
        "-c",
        "fsync=off",
    ]


def test_run_returns_new_container_id(
    docker_client: DockerClient, fake_docker: FakeDocker
) -> None:
    fake_docker.on(*RUN_ARGS, stdout="abc123\n")

    assert docker_client.containers.run("cache", CONFIG) == "abc123"


def test_run_conflict_with_running_container_returns_its_id(
    docker_client: DockerClient, fake_docker: FakeDocker
) -> None:
    fake_docker.on(
        *RUN_ARGS,
        returncode=125,
        stderr='Conflict. The container name "/cache" is already in use by container "abc123".',
    )
    fake_docker.on("inspect", "cache", stdout=_inspect_output("abc123", "running"))

    assert docker_client.containers.run("cache", CONFIG) == "abc123"


def test_run_conflict_with_stopped_container_names_state(
    docker_client: DockerClient, fake_docker: FakeDocker
) -> None:
    fake_docker.on(*RUN_ARGS, returncode=125, stderr="Conflict. name is already in use")
    fake_docker.on("inspect", "cache", stdout=_inspect_output("abc123", "exited"))

    with pytest.raises(ContainerStateError, match="state 'exited'"):
        docker_client.containers.run("cache", CONFIG)


def test_run_failure_without_conflict_propagates(
    docker_client: DockerClient, fake_docker: FakeDocker
) -> None:
    fake_docker.on(*RUN_ARGS, returncode=125, stderr="Unable to find image 'redis:7'")

    with pytest.raises(DockerCommandError, match="Unable to find image"):
        docker_client.containers.run("cache", CONFIG)

    assert ("inspect", "cache") not in fake_docker.calls


def test_start_is_noop_for_running_container(
    docker_client: DockerClient, fake_docker: FakeDocker
) -> None:
    fake_docker.on("inspect", "cache", stdout=_inspect_output("abc123", "running"))

    docker_client.containers.start("cache")

    assert fake_docker.calls == [("inspect", "cache")]


def test_start_starts_stopped_container(
    docker_client: DockerClient, fake_docker: FakeDocker
) -> None:
    fake_docker.on("inspect", "cache", stdout=_inspect_output("abc123", "exited"))
    fake_docker.on("start", "cache", stdout="cache")

    docker_client.containers.start("cache")

    assert fake_docker.calls[-1] == ("start", "cache")


def test_start_missing_container_fails(
    docker_client: DockerClient, fake_docker: FakeDocker
) -> None:
    fake_docker.on("inspect", "cache", returncode=1, stderr="Error: No such object: cache")

    with pytest.raises(ContainerStateError, match="not found"):
        docker_client.containers.start("cache")


def test_stop_is_noop_when_missing(docker_client: DockerClient, fake_docker: FakeDocker) -> None:
    fake_docker.missing("container", "cache")

    docker_client.containers.stop("cache")

    assert ("stop", "cache") not in fake_docker.calls


def test_stop_ignores_stop_failures(docker_client: DockerClient, fake_docker: FakeDocker) -> None:
    fake_docker.present("container", "cache")
    fake_docker.on("stop", "cache", returncode=1, stderr="did not receive an exit event")

    docker_client.containers.stop("cache")


def test_rm_force(docker_client: DockerClient, fake_docker: FakeDocker) -> None:
    fake_docker.present("container", "cache")
    fake_docker.on("rm", "-f", "cache", stdout="cache")

    docker_client.containers.rm("cache", force=True)

    assert fake_docker.calls[-1] == ("rm", "-f", "cache")


def test_rm_is_noop_when_missing(docker_client: DockerClient, fake_docker: FakeDocker) -> None:
    fake_docker.missing("container", "cache")

    docker_client.containers.rm("cache")

    assert len(fake_docker.calls) == 1


def test_inspect_returns_info(docker_client: DockerClient, fake_docker: FakeDocker) -> None:
    fake_docker.on("inspect", "cache", stdout=_inspect_output("abc123", "paused"))

    assert docker_client.containers.inspect("cache") == ContainerInfo(id="abc123", state="paused")


def test_inspect_returns_none_when_missing(
    docker_client: DockerClient, fake_docker: FakeDocker
) -> None:
    fake_docker.on("inspect", "cache", returncode=1, stderr="Error: No such object: cache")

    assert docker_client.containers.inspect("cache") is None


def test_list_parses_json_lines(docker_client: DockerClient, fake_docker: FakeDocker) -> None:
    lines = [
        {"ID": "abc", "Names": "cache", "Image": "redis:7", "State": "running", "Status": "Up 2h"},
        {"ID": "def", "Names": "db,pg", "Image": "postgres", "State": "exited", "Status": "Exited"},
    ]
    fake_docker.on(
        "ps",
        "--format",
        "{{json .}}",
        "-a",
        stdout="\n".join(json.dumps(line) for line in lines) + "\n\n",
    )

    containers = docker_client.containers.list_containers(all_containers=True)

    assert containers == [
        ContainerSummary(id="abc", name="cache", image="redis:7", state="running", status="Up 2h"),
        ContainerSummary(id="def", name="db,pg", image="postgres", state="exited", status="Exited"),
    ]
