"""DNS record models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import DnsRecordType


class DnsRecordSettings(BaseModel):
    ipv4_only: bool | None = None
    ipv6_only: bool | None = None

    model_config = ConfigDict(frozen=True)


class DnsRecord(BaseModel):
    """A DNS record inside a zone."""

    id: str = Field(..., min_length=1)
    name: str
    type: DnsRecordType
    content: str = ""
    proxied: bool = False
    proxiable: bool = False
    ttl: int = 1
    comment: str | None = None
    tags: list[str] = []
    priority: int | None = None
    settings: DnsRecordSettings | None = None
    created_on: datetime | None = None
    modified_on: datetime | None = None

    model_config = ConfigDict(frozen=True)


class DnsRecordRequest(BaseModel):
    """Body for creating or overwriting a DNS record.

    ``ttl=1`` means "automatic".
    """

    type: DnsRecordType
    name: str = Field(..., min_length=1)
    content: str
    ttl: int = 1
    proxied: bool | None = None
    comment: str | None = None
    tags: list[str] | None = None
    priority: int | None = None
    settings: DnsRecordSettings | None = None

    def to_body(self) -> dict[str, object]:
        return self.model_dump(mode="json", exclude_none=True)


class ListDnsRecordsFilters(BaseModel):
    type: DnsRecordType | None = None
    name: str | None = None
    content: str | None = None
    page: int | None = Field(default=None, ge=1)
    per_page: int | None = Field(default=None, ge=5, le=5000)

    model_config = ConfigDict(frozen=True)
