"""Reconciliation protocols making non-idempotent provider calls safe to retry."""

from __future__ import annotations

from .apps import put_app_if_absent
from .ips import allocate_ip_idempotently, redundant_addresses, release_ignoring_missing
from .machines import (
    create_machine_idempotently,
    extract_conflicting_machine_id,
    resolve_machine_creation,
)
from .ports import AppRegistryPort, IpAssignmentPort, MachineCreationPort
from .signals import AlreadyExists, ConflictSignal, NotFound, OtherFailure, Success

__all__ = [
    "AlreadyExists",
    "AppRegistryPort",
    "ConflictSignal",
    "IpAssignmentPort",
    "MachineCreationPort",
    "NotFound",
    "OtherFailure",
    "Success",
    "allocate_ip_idempotently",
    "create_machine_idempotently",
    "extract_conflicting_machine_id",
    "put_app_if_absent",
    "redundant_addresses",
    "release_ignoring_missing",
]
