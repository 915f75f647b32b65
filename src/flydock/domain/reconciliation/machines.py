"""Idempotent machine creation on top of the provider's unique ``(app, name)`` key."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from flydock.domain.errors import ConflictUnresolvableError, RemoteAPIError

from .signals import AlreadyExists, NotFound, OtherFailure, Success

if TYPE_CHECKING:
    from flydock.domain.model import MachineConfig, Region

    from .ports import MachineCreationPort
    from .signals import ConflictSignal

log = getLogger(__name__)

CONFLICT_PREFIX = "already_exists: unique machine name violation, machine ID "
CONFLICT_SUFFIX = " already exists with name "


def extract_conflicting_machine_id(message: str) -> str | None:
    """Return the id embedded in a unique-name violation message, or ``None``.

    The prefix must sit at offset 0; wrapped or annotated messages that merely
    contain it are rejected.
    """

    if not message.startswith(CONFLICT_PREFIX):
        return None
    rest = message[len(CONFLICT_PREFIX) :]
    end = rest.find(CONFLICT_SUFFIX)
    if end == -1:
        return None
    return rest[:end]


def resolve_machine_creation(signal: ConflictSignal[str], *, machine_name: str) -> str:
    match signal:
        case Success(value=machine_id):
            return machine_id
        case AlreadyExists(existing_id=str() as machine_id):
            # The existing machine's config is not compared with the requested one.
            log.info(
                "Machine name %r already taken by %s, treating as created", machine_name, machine_id
            )
            return machine_id
        case AlreadyExists(status=status, body=body):
            raise ConflictUnresolvableError(
                f"machine id cannot be parsed from {status} error response: `{body}`"
            )
        case NotFound(body=body):
            raise RemoteAPIError(404, body)
        case OtherFailure(status=status, body=body):
            raise RemoteAPIError(status, body)


def create_machine_idempotently(
    port: MachineCreationPort,
    *,
    app_name: str,
    machine_name: str,
    config: MachineConfig,
    region: Region | None = None,
) -> str:
    signal = port.submit_create(
        app_name=app_name,
        machine_name=machine_name,
        config=config,
        region=region,
    )
    return resolve_machine_creation(signal, machine_name=machine_name)
