"""Pagination metadata definitions and policy structures.

This module defines the data structures used to describe how list endpoints
paginate, the request state handed to a page fetcher, and the page it
returns.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ...core.enums import PaginationStyle
from ...models.metrics import R2Result
from ...models.pagination import CursorResultInfo, ResultInfo

T = TypeVar("T")

DEFAULT_PER_PAGE = 100


@dataclass(frozen=True)
class PaginationPolicy:
    """Pagination policy for a list endpoint.

    Attributes:
        style: Page-number or cursor continuation
        per_page: Default page size requested from the server
        max_pages: Maximum number of round trips (None = unlimited)
        trust_total_pages: Whether ``total_pages`` in the response is reliable.
            When False, continuation is inferred from page fullness instead.
        page_param: Query parameter name for the page number
        per_page_param: Query parameter name for the page size
        cursor_param: Query parameter name for the cursor
    """

    style: PaginationStyle = PaginationStyle.PAGE
    per_page: int = DEFAULT_PER_PAGE
    max_pages: int | None = None
    trust_total_pages: bool = True
    page_param: str = "page"
    per_page_param: str = "per_page"
    cursor_param: str = "cursor"

    def __post_init__(self) -> None:
        """Validate pagination policy configuration."""
        if self.per_page <= 0:
            raise ValueError("PaginationPolicy per_page must be positive")
        if self.max_pages is not None and self.max_pages <= 0:
            raise ValueError("PaginationPolicy max_pages must be None or positive")

    def build_query(self, request: PageRequest) -> dict[str, Any]:
        """Query parameters that select the page described by ``request``."""
        query: dict[str, Any] = {self.per_page_param: request.per_page}
        if self.style is PaginationStyle.PAGE:
            query[self.page_param] = request.page
        elif request.cursor:
            query[self.cursor_param] = request.cursor
        return query


@dataclass(frozen=True)
class PageRequest:
    """State handed to a page fetcher for one round trip.

    Attributes:
        per_page: Requested page size
        page: One-based page number (page-based pagination only)
        cursor: Continuation token from the previous page (cursor-based only)
        page_index: Zero-based index of this round trip in the traversal
    """

    per_page: int
    page: int | None = None
    cursor: str | None = None
    page_index: int = 0


@dataclass(frozen=True)
class Page(Generic[T]):
    """A single fetched page.

    Attributes:
        items: Items of this page in server order
        info: Pagination metadata of this page, if the server sent any
        metrics: Billable metrics consumed by the round trip
    """

    items: Sequence[T]
    info: ResultInfo | CursorResultInfo | None = None
    metrics: R2Result = field(default_factory=R2Result)

    @property
    def cursor(self) -> str | None:
        """Continuation cursor carried by either metadata variant."""
        return self.info.cursor if self.info is not None else None


FetchPage = Callable[[PageRequest], Awaitable[Page[T]]]


def extract_result_info(
    raw: dict[str, Any] | None, style: PaginationStyle
) -> ResultInfo | CursorResultInfo | None:
    """Build typed pagination metadata from a raw ``result_info`` block.

    Args:
        raw: The envelope's ``result_info`` value
        style: Pagination style of the endpoint

    Returns:
        ResultInfo for page-based endpoints, CursorResultInfo for cursor-based
        ones, or None when the response carries no metadata
    """
    if raw is None:
        return None
    if style is PaginationStyle.CURSOR:
        return CursorResultInfo.model_validate(raw)
    return ResultInfo.model_validate(raw)
