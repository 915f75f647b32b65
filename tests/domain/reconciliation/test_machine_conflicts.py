from __future__ import annotations

import pytest

from flydock.domain.errors import ConflictUnresolvableError, RemoteAPIError
from flydock.domain.model import MachineConfig, Region
from flydock.domain.reconciliation import (
    AlreadyExists,
    MachineCreationPort,
    NotFound,
    OtherFailure,
    Success,
    create_machine_idempotently,
    extract_conflicting_machine_id,
    resolve_machine_creation,
)
from flydock.domain.reconciliation.signals import ConflictSignal

CONFLICT_MESSAGE = (
    "already_exists: unique machine name violation, machine ID "
    '148e21ea7d5089 already exists with name "worker-1"'
)


class RecordingCreationPort:
    def __init__(self, signal: ConflictSignal[str]) -> None:
        self._signal = signal
        self.calls: list[dict[str, object]] = []

    def submit_create(
        self,
        *,
        app_name: str,
        machine_name: str,
        config: MachineConfig,
        region: Region | None = None,
    ) -> ConflictSignal[str]:
        self.calls.append(
            {"app_name": app_name, "machine_name": machine_name, "config": config, "region": region}
        )
        return self._signal


def test_extracts_id_between_prefix_and_suffix() -> None:
    assert extract_conflicting_machine_id(CONFLICT_MESSAGE) == "148e21ea7d5089"


@pytest.mark.parametrize(
    "message",
    [
        f"error: {CONFLICT_MESSAGE}",
        f" {CONFLICT_MESSAGE}",
        "already_exists: unique machine name violation, machine ID 148e21ea7d5089",
        "Already_exists: unique machine name violation, machine ID x already exists with name y",
        "",
        "not a conflict at all",
    ],
)
def test_extraction_rejects_messages_not_matching_exactly(message: str) -> None:
    assert extract_conflicting_machine_id(message) is None


def test_extraction_stops_at_first_suffix() -> None:
    message = (
        "already_exists: unique machine name violation, machine ID abc"
        ' already exists with name "x already exists with name y"'
    )

    assert extract_conflicting_machine_id(message) == "abc"


def test_conflict_returns_existing_id_without_further_calls() -> None:
    port = RecordingCreationPort(AlreadyExists(409, "{}", existing_id="148e21ea7d5089"))

    result = create_machine_idempotently(
        port,
        app_name="my-app",
        machine_name="worker-1",
        config=MachineConfig(image="nginx"),
    )

    assert result == "148e21ea7d5089"
    assert len(port.calls) == 1


def test_created_machine_id_is_returned() -> None:
    port = RecordingCreationPort(Success("new-id"))

    result = create_machine_idempotently(
        port,
        app_name="my-app",
        machine_name="worker-1",
        config=MachineConfig(image="nginx"),
        region=Region.AMS,
    )

    assert result == "new-id"
    assert port.calls[0]["region"] is Region.AMS


def test_unparseable_conflict_is_not_a_remote_api_error() -> None:
    signal = AlreadyExists(409, '{"error":"something else"}')

    with pytest.raises(ConflictUnresolvableError) as exc:
        resolve_machine_creation(signal, machine_name="worker-1")

    assert not isinstance(exc.value, RemoteAPIError)
    assert "409" in str(exc.value)
    assert "something else" in str(exc.value)


@pytest.mark.parametrize(
    ("signal", "status"),
    [(OtherFailure(500, "boom"), 500), (NotFound("gone"), 404)],
)
def test_other_failures_carry_status_and_body(signal: ConflictSignal[str], status: int) -> None:
    with pytest.raises(RemoteAPIError) as exc:
        resolve_machine_creation(signal, machine_name="worker-1")

    assert exc.value.status == status
    assert f"failed with status {status}" in str(exc.value)


def test_recording_port_satisfies_protocol() -> None:
    assert isinstance(RecordingCreationPort(Success("x")), MachineCreationPort)
