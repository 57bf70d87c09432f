"""Zone models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import ListOrderDirection, ZoneStatus, ZoneType


class ZoneAccount(BaseModel):
    id: str
    name: str | None = None

    model_config = ConfigDict(frozen=True)


class ZonePlan(BaseModel):
    id: str
    name: str
    price: Decimal = Decimal("0")
    currency: str | None = None
    frequency: str | None = None
    is_subscribed: bool = False
    can_subscribe: bool = False

    model_config = ConfigDict(frozen=True)


class Zone(BaseModel):
    """A DNS zone (domain) on Cloudflare."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    status: ZoneStatus
    type: ZoneType | None = None
    paused: bool = False
    development_mode: int = 0
    account: ZoneAccount | None = None
    plan: ZonePlan | None = None
    name_servers: list[str] = []
    original_name_servers: list[str] | None = None
    original_registrar: str | None = None
    permissions: list[str] | None = None
    activated_on: datetime | None = None
    created_on: datetime | None = None
    modified_on: datetime | None = None

    model_config = ConfigDict(frozen=True)


class ListZonesFilters(BaseModel):
    """Query filters for listing zones."""

    name: str | None = None
    status: ZoneStatus | None = None
    account_id: str | None = None
    page: int | None = Field(default=None, ge=1)
    per_page: int | None = Field(default=None, ge=5, le=1000)
    order: str | None = None
    direction: ListOrderDirection | None = None

    model_config = ConfigDict(frozen=True)


class CreateZoneRequest(BaseModel):
    name: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)
    type: ZoneType | None = None

    def to_body(self) -> dict[str, object]:
        body: dict[str, object] = {"name": self.name, "account": {"id": self.account_id}}
        if self.type is not None:
            body["type"] = self.type.value
        return body
