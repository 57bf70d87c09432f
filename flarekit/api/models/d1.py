"""D1 database models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import D1Jurisdiction, R2LocationHint


class D1ReadReplication(BaseModel):
    mode: str

    model_config = ConfigDict(frozen=True)


class D1Database(BaseModel):
    uuid: str = Field(..., min_length=1)
    name: str
    created_at: datetime | None = None
    file_size: int | None = None
    num_tables: int | None = None
    version: str | None = None
    read_replication: D1ReadReplication | None = None
    running_in_region: str | None = None

    model_config = ConfigDict(frozen=True)


class ListD1DatabasesFilters(BaseModel):
    name: str | None = None
    page: int | None = Field(default=None, ge=1)
    per_page: int | None = Field(default=None, ge=10, le=10000)

    model_config = ConfigDict(frozen=True)


class CreateD1DatabaseRequest(BaseModel):
    name: str = Field(..., min_length=1)
    primary_location_hint: R2LocationHint | None = None
    jurisdiction: D1Jurisdiction | None = None

    def to_body(self) -> dict[str, object]:
        return self.model_dump(mode="json", exclude_none=True)


class D1QueryMeta(BaseModel):
    changed_db: bool | None = None
    changes: int | None = None
    duration: float | None = None
    last_row_id: int | None = None
    rows_read: int | None = None
    rows_written: int | None = None
    served_by_region: str | None = None
    size_after: int | None = None

    model_config = ConfigDict(frozen=True)


class D1QueryResult(BaseModel):
    """Outcome of one SQL statement."""

    success: bool = True
    results: list[dict[str, Any]] = []
    meta: D1QueryMeta | None = None

    model_config = ConfigDict(frozen=True)
