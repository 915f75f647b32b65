"""Idempotent IP allocation over an allocation endpoint that always mints a new address.

The activity is made safe to retry by reconciling the provider's full listing against
what the caller already knew about (``pre_existing``, kept in the caller's durable
state) plus the address minted by this attempt. Anything else is released.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from flydock.domain.errors import RemoteAPIError

from .signals import AlreadyExists, NotFound, OtherFailure, Success

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flydock.domain.model import IpRequest

    from .ports import IpAssignmentPort

log = getLogger(__name__)


def redundant_addresses(
    pre_existing: Iterable[str],
    allocated: str,
    post_existing: Iterable[str],
) -> set[str]:
    """Symmetric difference between the observed listing and the expected set."""

    expected = {*pre_existing, allocated}
    return set(post_existing) ^ expected


def release_ignoring_missing(port: IpAssignmentPort, *, app_name: str, ip: str) -> bool:
    """Release ``ip``; return ``False`` when the provider reports it as already gone."""

    match port.submit_release(app_name=app_name, ip=ip):
        case Success():
            return True
        case NotFound():
            log.info("IP %s of app %s was already released", ip, app_name)
            return False
        case AlreadyExists(status=status, body=body) | OtherFailure(status=status, body=body):
            raise RemoteAPIError(status, body)


def allocate_ip_idempotently(
    port: IpAssignmentPort,
    *,
    app_name: str,
    request: IpRequest,
    pre_existing: Iterable[str],
) -> str:
    """Allocate one address and release every address this attempt cannot account for.

    Steps are strictly ordered: allocate, then list, then release. The returned
    address is the one minted by this call, however many leftovers were cleaned up.
    """

    known = frozenset(pre_existing)
    allocated = port.allocate_unsafe(app_name, request)
    post_existing = {detail.ip for detail in port.list_ips(app_name)}

    redundant = redundant_addresses(known, allocated, post_existing)
    if not redundant:
        return allocated

    for ip in sorted(redundant):
        if ip in post_existing:
            log.warning("Releasing redundant IP %s of app %s", ip, app_name)
        else:
            log.warning("Expected IP %s of app %s is missing from the listing", ip, app_name)
        release_ignoring_missing(port, app_name=app_name, ip=ip)

    log.info(
        "Allocated %s for app %s after releasing %d redundant address(es)",
        allocated,
        app_name,
        len(redundant),
    )
    return allocated
