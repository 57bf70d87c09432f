"""Account and R2 bucket models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import ListOrderDirection, R2LocationHint


class AccountSettings(BaseModel):
    abuse_contact_email: str | None = None
    enforce_twofactor: bool = False

    model_config = ConfigDict(frozen=True)


class Account(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    type: str | None = None
    created_on: datetime | None = None
    settings: AccountSettings | None = None

    model_config = ConfigDict(frozen=True)


class ListAccountsFilters(BaseModel):
    name: str | None = None
    page: int | None = Field(default=None, ge=1)
    per_page: int | None = Field(default=None, ge=5, le=50)
    direction: ListOrderDirection | None = None

    model_config = ConfigDict(frozen=True)


class R2Bucket(BaseModel):
    name: str = Field(..., min_length=1)
    creation_date: datetime | None = None
    location: str | None = None
    jurisdiction: str | None = None
    storage_class: str | None = None

    model_config = ConfigDict(frozen=True)


class CreateR2BucketRequest(BaseModel):
    name: str = Field(..., min_length=3, max_length=63)
    location_hint: R2LocationHint | None = Field(default=None, serialization_alias="locationHint")
    storage_class: str | None = Field(default=None, serialization_alias="storageClass")

    def to_body(self) -> dict[str, object]:
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)
