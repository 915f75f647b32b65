"""Put-if-absent for apps whose names are unique across every organization."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from flydock.domain.errors import (
    ConflictUnresolvableError,
    FlydockError,
    OwnershipMismatchError,
    RemoteAPIError,
)

from .signals import AlreadyExists, NotFound, OtherFailure, Success

if TYPE_CHECKING:
    from flydock.domain.model import App

    from .ports import AppRegistryPort

log = getLogger(__name__)


def put_app_if_absent(port: AppRegistryPort, *, org_slug: str, app_name: str) -> App:
    """Create ``app_name`` under ``org_slug`` or confirm a previous attempt already did.

    A 422 from the create call is ambiguous: the name may be ours from an earlier
    retry or taken by another organization. The probe decides; if the probe cannot,
    the create failure is what gets reported.
    """

    match port.submit_create(org_slug=org_slug, app_name=app_name):
        case Success(value=app):
            return app
        case AlreadyExists(status=status, body=body):
            return _resolve_existing(
                port, org_slug=org_slug, app_name=app_name, status=status, body=body
            )
        case NotFound(body=body):
            raise RemoteAPIError(404, body)
        case OtherFailure(status=status, body=body):
            raise RemoteAPIError(status, body)


def _resolve_existing(
    port: AppRegistryPort,
    *,
    org_slug: str,
    app_name: str,
    status: int,
    body: str,
) -> App:
    original = f"failed with status {status}: {body}"
    try:
        probe = port.probe(app_name=app_name)
    except FlydockError as exc:
        raise ConflictUnresolvableError(original) from exc

    match probe:
        case Success(value=details):
            if details.organization_slug != org_slug:
                raise OwnershipMismatchError(
                    app_name,
                    actual_org=details.organization_slug,
                    requested_org=org_slug,
                )
            log.info("App %s already exists in org %s, reusing it", app_name, org_slug)
            return details.as_app()
        case _:
            raise ConflictUnresolvableError(original)
