"""Pagination metadata returned in ``result_info``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ResultInfo(BaseModel):
    """Metadata of a page-based list response.

    Some endpoints (R2 buckets) put a cursor here instead of in a separate
    cursor block. ``total_count`` and ``total_pages`` are always 0 for D1
    database listings.
    """

    page: int = 0
    per_page: int = 0
    count: int = 0
    total_count: int = 0
    total_pages: int = 0
    cursor: str | None = None

    model_config = ConfigDict(frozen=True)


class CursorResultInfo(BaseModel):
    """Metadata of a cursor-based list response."""

    count: int = 0
    per_page: int = 0
    cursor: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_more(self) -> bool:
        return bool(self.cursor)
