"""Core components."""

from typing import Any

from .enums import (
    D1Jurisdiction,
    DnsRecordType,
    ExtensibleEnum,
    ListOrderDirection,
    MemberStatus,
    PaginationStyle,
    R2Jurisdiction,
    R2LocationHint,
    ZoneStatus,
    ZoneType,
)
from .exceptions import (
    ApiError,
    BatchError,
    ClientClosedError,
    CloudflareError,
    ConfigurationError,
    ListError,
    OperationCancelledError,
    OperationError,
    ProviderError,
    RateLimitError,
    TransportError,
    ValidationError,
)

__all__ = [
    "ExtensibleEnum",
    "ZoneStatus",
    "ZoneType",
    "DnsRecordType",
    "MemberStatus",
    "D1Jurisdiction",
    "R2Jurisdiction",
    "R2LocationHint",
    "PaginationStyle",
    "ListOrderDirection",
    "CloudflareError",
    "ConfigurationError",
    "ValidationError",
    "ClientClosedError",
    "ProviderError",
    "TransportError",
    "RateLimitError",
    "ApiError",
    "OperationError",
    "BatchError",
    "ListError",
    "OperationCancelledError",
    "ApiResource",
]

_BASE_EXPORTS = {"ApiResource"}


def __getattr__(name: str) -> Any:
    if name in _BASE_EXPORTS:
        from . import base as _base

        value = getattr(_base, name)
    else:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | _BASE_EXPORTS)
