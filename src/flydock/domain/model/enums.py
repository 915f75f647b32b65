"""Domain enums (pure, dependency-light).

Values are the provider's kebab-case tags, so ``str(member)`` is already the wire form.
"""

from __future__ import annotations

from enum import StrEnum


class Region(StrEnum):
    AMS = "ams"
    ARN = "arn"
    ATL = "atl"
    BOG = "bog"
    BOM = "bom"
    BOS = "bos"
    CDG = "cdg"
    DEN = "den"
    DFW = "dfw"
    EWR = "ewr"
    EZE = "eze"
    FRA = "fra"
    GDL = "gdl"
    GIG = "gig"
    GRU = "gru"
    HKG = "hkg"
    IAD = "iad"
    JNB = "jnb"
    LAX = "lax"
    LHR = "lhr"
    MAD = "mad"
    MIA = "mia"
    NRT = "nrt"
    ORD = "ord"
    OTP = "otp"
    PHX = "phx"
    QRO = "qro"
    SCL = "scl"
    SEA = "sea"
    SIN = "sin"
    SJC = "sjc"
    SYD = "syd"
    WAW = "waw"
    YUL = "yul"
    YYZ = "yyz"


class CpuKind(StrEnum):
    SHARED = "shared"
    PERFORMANCE = "performance"


class RestartPolicy(StrEnum):
    NO = "no"
    ALWAYS = "always"
    ON_FAILURE = "on-failure"
    SPOT_PRICE = "spot-price"


class HostStatus(StrEnum):
    OK = "ok"
    UNKNOWN = "unknown"
    UNREACHABLE = "unreachable"


class PortHandler(StrEnum):
    HTTP = "http"
    TLS = "tls"
    PROXY_PROTO = "proxy-proto"
    PG_TLS = "pg-tls"
    EDGE_HTTP = "edge-http"


class ServiceProtocol(StrEnum):
    TCP = "tcp"
    UDP = "udp"


def parse_wire_enum[E: StrEnum](enum_type: type[E], value: str) -> E:
    """Parse a provider tag case-insensitively; unknown tags raise ``ValueError``."""

    normalized = value.strip().lower().replace("_", "-")
    try:
        return enum_type(normalized)
    except ValueError:
        msg = f"unknown {enum_type.__name__} value: {value!r}"
        raise ValueError(msg) from None
