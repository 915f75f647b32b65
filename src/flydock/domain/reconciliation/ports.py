"""Capabilities the reconciliation protocols need from a provider binding.

Adapters classify raw responses into signals; the protocols only decide what to do
with them. Implementations must not cache: every call observes the remote state fresh.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flydock.domain.model import App, AppDetails, IpDetail, IpRequest, MachineConfig, Region

    from .signals import ConflictSignal


@runtime_checkable
class MachineCreationPort(Protocol):
    def submit_create(
        self,
        *,
        app_name: str,
        machine_name: str,
        config: MachineConfig,
        region: Region | None = None,
    ) -> ConflictSignal[str]: ...


@runtime_checkable
class IpAssignmentPort(Protocol):
    def allocate_unsafe(self, app_name: str, request: IpRequest) -> str: ...

    def list_ips(self, app_name: str) -> list[IpDetail]: ...

    def submit_release(self, *, app_name: str, ip: str) -> ConflictSignal[None]: ...


@runtime_checkable
class AppRegistryPort(Protocol):
    def submit_create(self, *, org_slug: str, app_name: str) -> ConflictSignal[App]: ...

    def probe(self, *, app_name: str) -> ConflictSignal[AppDetails]: ...


__all__ = ["AppRegistryPort", "IpAssignmentPort", "MachineCreationPort"]
