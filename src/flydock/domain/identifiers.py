"""Validation of identifiers interpolated into provider URLs."""

from __future__ import annotations

import ipaddress
import string
from enum import StrEnum

from .errors import IllegalSlugError

type AppName = str
type OrgSlug = str
type SecretKey = str
type VolumeId = str
type MachineId = str
type IpAddress = str


class SlugPolicy(StrEnum):
    ALNUM_HYPHEN = "alnum-hyphen"
    LOWER_ALNUM_HYPHEN = "lower-alnum-hyphen"
    # Volume ids (``vol_...``) and secret keys (``DATABASE_URL``) carry underscores.
    # ``_`` is an unreserved URL character, so it cannot alter the request path or query.
    ALNUM_HYPHEN_UNDERSCORE = "alnum-hyphen-underscore"


_ALLOWED: dict[SlugPolicy, frozenset[str]] = {
    SlugPolicy.ALNUM_HYPHEN: frozenset(string.ascii_letters + string.digits + "-"),
    SlugPolicy.LOWER_ALNUM_HYPHEN: frozenset(string.ascii_lowercase + string.digits + "-"),
    SlugPolicy.ALNUM_HYPHEN_UNDERSCORE: frozenset(string.ascii_letters + string.digits + "-_"),
}


def validate_slug(kind: str, value: str, *, policy: SlugPolicy = SlugPolicy.ALNUM_HYPHEN) -> str:
    """Return ``value`` unchanged if every character is allowed by ``policy``."""

    if not value or not set(value) <= _ALLOWED[policy]:
        raise IllegalSlugError(kind, value)
    return value


def app_name(value: str) -> AppName:
    return validate_slug("app name", value)


def org_slug(value: str) -> OrgSlug:
    return validate_slug("org slug", value, policy=SlugPolicy.LOWER_ALNUM_HYPHEN)


def secret_key(value: str) -> SecretKey:
    return validate_slug("secret key", value, policy=SlugPolicy.ALNUM_HYPHEN_UNDERSCORE)


def volume_id(value: str) -> VolumeId:
    return validate_slug("volume id", value, policy=SlugPolicy.ALNUM_HYPHEN_UNDERSCORE)


def machine_id(value: str) -> MachineId:
    return validate_slug("machine id", value)


def ip_address(value: str) -> IpAddress:
    """Reject anything that is not a literal IPv4/IPv6 address; the text is kept as given.

    Scoped IPv6 addresses (``fe80::1%eth0``) are refused: the zone id after ``%`` is free
    text and would end up verbatim in the request path.
    """

    try:
        address = ipaddress.ip_address(value)
    except ValueError as exc:
        raise IllegalSlugError("ip address", value) from exc
    if isinstance(address, ipaddress.IPv6Address) and address.scope_id is not None:
        raise IllegalSlugError("ip address", value)
    return value
