from __future__ import annotations

import pytest

from flydock.domain.model import CpuKind, PortHandler, Region, RestartPolicy, parse_wire_enum


@pytest.mark.parametrize(
    ("enum_type", "raw", "expected"),
    [
        (Region, "AMS", Region.AMS),
        (Region, "iad", Region.IAD),
        (RestartPolicy, "on-failure", RestartPolicy.ON_FAILURE),
        (RestartPolicy, "ON_FAILURE", RestartPolicy.ON_FAILURE),
        (PortHandler, "proxy_proto", PortHandler.PROXY_PROTO),
        (CpuKind, "Performance", CpuKind.PERFORMANCE),
    ],
)
def test_parse_wire_enum_is_case_insensitive(
    enum_type: type[Region | RestartPolicy | PortHandler | CpuKind],
    raw: str,
    expected: object,
) -> None:
    assert parse_wire_enum(enum_type, raw) is expected


def test_parse_wire_enum_fails_loudly_on_unknown_value() -> None:
    with pytest.raises(ValueError, match="global"):
        parse_wire_enum(Region, "global")


def test_canonical_values_are_kebab_case() -> None:
    assert str(RestartPolicy.SPOT_PRICE) == "spot-price"
    assert str(PortHandler.EDGE_HTTP) == "edge-http"
