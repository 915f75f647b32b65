from __future__ import annotations

import pytest

from flydock.adapters.docker import DockerCLI
from flydock.config import DockerConfig
from flydock.domain.errors import DockerCommandError
from tests.helpers.docker_cli import FakeDocker


def test_exec_returns_trimmed_stdout(fake_docker: FakeDocker) -> None:
    fake_docker.on("version", "--format", "{{.Server.Version}}", stdout="27.1.1\n")
    cli = DockerCLI(DockerConfig(binary="/usr/local/bin/docker"), spawn=fake_docker.spawn)

    assert cli.exec(["version", "--format", "{{.Server.Version}}"]) == "27.1.1"
    assert fake_docker.programs == ["/usr/local/bin/docker"]


def test_non_zero_exit_raises_with_streams(fake_docker: FakeDocker) -> None:
    fake_docker.on("pull", "nope", returncode=1, stderr="manifest unknown\n", stdout="pulling\n")
    cli = DockerCLI(spawn=fake_docker.spawn)

    with pytest.raises(DockerCommandError) as exc:
        cli.exec(["pull", "nope"])

    assert exc.value.exit_code == 1
    assert "Exit 1" in str(exc.value)
    assert "Stderr: manifest unknown" in str(exc.value)
    assert "Stdout: pulling" in str(exc.value)


def test_timeout_kills_process(fake_docker: FakeDocker) -> None:
    process = fake_docker.on("ps", delay=1.0)
    cli = DockerCLI(DockerConfig(timeout_seconds=0.01), spawn=fake_docker.spawn)

    with pytest.raises(DockerCommandError, match="timed out"):
        cli.exec(["ps"])

    assert process.killed


def test_check_exists_maps_no_such_to_false(fake_docker: FakeDocker) -> None:
    fake_docker.missing("volume", "data")
    fake_docker.present("network", "backend")
    cli = DockerCLI(spawn=fake_docker.spawn)

    assert cli.check_exists("volume", "data") is False
    assert cli.check_exists("network", "backend") is True


def test_check_exists_propagates_other_failures(fake_docker: FakeDocker) -> None:
    fake_docker.on(
        "inspect",
        "--type",
        "volume",
        "data",
        returncode=1,
        stderr="Cannot connect to the Docker daemon",
    )
    cli = DockerCLI(spawn=fake_docker.spawn)

    with pytest.raises(DockerCommandError, match="Cannot connect"):
        cli.check_exists("volume", "data")
