"""Core enumerations and extensible string values.

Architecture:
    Cloudflare adds new status/type values to its API without notice, so the
    resource models do not use closed enums for provider-owned fields.
    ExtensibleEnum is a string wrapper with a fixed set of well-known
    constants that still accepts (and round-trips) values it has never seen.

Design Decisions:
    - Case-insensitive equality and hashing: "Active" and "active" are equal
    - Equal only to instances of the same type; compare a raw string by
      wrapping it (``zone.status == ZoneStatus("active")``) or via ``.value``
    - Known values declared as upper-case string class attributes; the
      subclass hook turns them into instances
    - Closed str Enums are kept for library-owned choices (pagination style,
      sort direction)

Key Types:
    - ZoneStatus, ZoneType: zone lifecycle and setup type
    - DnsRecordType: DNS record types
    - MemberStatus: account membership state
    - D1Jurisdiction, R2Jurisdiction, R2LocationHint: data placement
    - PaginationStyle, ListOrderDirection: library-owned enums
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class ExtensibleEnum:
    """String-backed value with well-known constants and unknown-value passthrough."""

    __slots__ = ("_value",)

    _known: ClassVar[dict[str, ExtensibleEnum]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        known: dict[str, ExtensibleEnum] = {}
        for name, value in list(vars(cls).items()):
            if name.isupper() and isinstance(value, str):
                member = cls(value)
                setattr(cls, name, member)
                known[name] = member
        cls._known = known

    def __init__(self, value: str) -> None:
        if value is None:
            raise ValueError(f"{type(self).__name__} value cannot be None")
        self._value = str(value)

    @property
    def value(self) -> str:
        return self._value

    @property
    def is_known(self) -> bool:
        """Whether this value is one of the declared constants."""
        return any(self == member for member in self._known.values())

    @classmethod
    def known_values(cls) -> list[ExtensibleEnum]:
        return list(cls._known.values())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ExtensibleEnum):
            return type(self) is type(other) and self._value.casefold() == other._value.casefold()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value.casefold())

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    @classmethod
    def _validate(cls, value: Any) -> ExtensibleEnum:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"{cls.__name__} must be a string, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.value, when_used="always"
            ),
        )


class ZoneStatus(ExtensibleEnum):
    """Zone lifecycle status."""

    ACTIVE = "active"
    PENDING = "pending"
    INITIALIZING = "initializing"
    MOVED = "moved"
    DELETED = "deleted"
    DEACTIVATED = "deactivated"


class ZoneType(ExtensibleEnum):
    """How the zone is set up on Cloudflare."""

    FULL = "full"
    PARTIAL = "partial"
    SECONDARY = "secondary"
    INTERNAL = "internal"


class DnsRecordType(ExtensibleEnum):
    A = "A"
    AAAA = "AAAA"
    CAA = "CAA"
    CERT = "CERT"
    CNAME = "CNAME"
    DNSKEY = "DNSKEY"
    DS = "DS"
    HTTPS = "HTTPS"
    LOC = "LOC"
    MX = "MX"
    NAPTR = "NAPTR"
    NS = "NS"
    PTR = "PTR"
    SMIMEA = "SMIMEA"
    SRV = "SRV"
    SSHFP = "SSHFP"
    SVCB = "SVCB"
    TLSA = "TLSA"
    TXT = "TXT"
    URI = "URI"


class MemberStatus(ExtensibleEnum):
    ACCEPTED = "accepted"
    PENDING = "pending"
    REJECTED = "rejected"


class D1Jurisdiction(ExtensibleEnum):
    EU = "eu"
    FEDRAMP = "fedramp"


class R2Jurisdiction(ExtensibleEnum):
    """Jurisdictional namespace of an R2 bucket."""

    DEFAULT = "default"
    EU = "eu"
    FEDRAMP = "fedramp"


class R2LocationHint(ExtensibleEnum):
    """Preferred placement region for R2 buckets and D1 primaries."""

    WESTERN_NORTH_AMERICA = "wnam"
    EASTERN_NORTH_AMERICA = "enam"
    WESTERN_EUROPE = "weur"
    EASTERN_EUROPE = "eeur"
    ASIA_PACIFIC = "apac"
    OCEANIA = "oc"


class PaginationStyle(str, Enum):
    """How a list endpoint signals continuation."""

    PAGE = "page"
    CURSOR = "cursor"


class ListOrderDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
