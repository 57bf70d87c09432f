"""Page traversal logic for paginated list endpoints.

This module provides the PageStream class that repeatedly invokes a page
fetcher and exposes the pages as one lazy sequence of items, plus the two
continuation algorithms (page-number and cursor) it drives.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import replace
from time import perf_counter
from typing import Generic, TypeVar

from ...core.enums import PaginationStyle
from ...core.exceptions import ListError, OperationCancelledError
from ...models.metrics import R2DataResult, R2Result
from ...models.pagination import ResultInfo
from ..cancellation import raise_if_cancelled
from .definitions import DEFAULT_PER_PAGE, FetchPage, Page, PageRequest
from .telemetry import log_page_error, log_page_fetched, log_pagination_complete

T = TypeVar("T")


class PageStream(Generic[T]):
    """Lazy, forward-only, non-restartable sequence of items across pages.

    One round trip is made per page, and only when the consumer asks for the
    first item of that page. Metrics reported by each page are merged into
    ``metrics`` as pages arrive.

    If a page fetch fails, iteration raises ListError carrying every item
    already yielded from earlier pages and the metrics through the last
    successful page. Cancellation is checked before each round trip and
    surfaces as OperationCancelledError.
    """

    def __init__(
        self,
        fetch_page: FetchPage[T],
        *,
        style: PaginationStyle,
        per_page: int = DEFAULT_PER_PAGE,
        trust_total_pages: bool = True,
        max_pages: int | None = None,
        cancel: asyncio.Event | None = None,
        operation: str = "list",
    ) -> None:
        """Initialize page stream.

        Args:
            fetch_page: Async function that takes a PageRequest and returns a Page
            style: Page-number or cursor continuation
            per_page: Page size to request
            trust_total_pages: Whether ``total_pages`` is reliable (page style only)
            max_pages: Optional cap on the number of round trips
            cancel: Optional event checked before each round trip
            operation: Name used in log records and error messages
        """
        if per_page <= 0:
            raise ValueError("per_page must be positive")
        self._fetch_page = fetch_page
        self._style = style
        self._per_page = per_page
        self._trust_total_pages = trust_total_pages
        self._max_pages = max_pages
        self._cancel = cancel
        self._operation = operation

        self._started = False
        self._metrics = R2Result()
        self._pages_fetched = 0
        self._yielded: list[T] = []

    @property
    def metrics(self) -> R2Result:
        """Metrics accumulated from pages fetched so far."""
        return self._metrics

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    @property
    def items_yielded(self) -> int:
        return len(self._yielded)

    def __aiter__(self) -> AsyncIterator[T]:
        if self._started:
            raise RuntimeError("PageStream can only be iterated once")
        self._started = True
        return self._iterate()

    async def collect(self) -> R2DataResult[list[T]]:
        """Drain the stream into a list together with the final metrics."""
        items = [item async for item in self]
        return R2DataResult(data=items, metrics=self._metrics)

    async def _iterate(self) -> AsyncIterator[T]:
        request: PageRequest | None = self._first_request()

        while request is not None:
            raise_if_cancelled(self._cancel, operation=self._operation)

            page = await self._fetch(request)

            for item in page.items:
                self._yielded.append(item)
                yield item

            request = self._next_request(request, page)

        log_pagination_complete(
            operation=self._operation,
            pages_fetched=self._pages_fetched,
            items_yielded=len(self._yielded),
            metrics=self._metrics,
        )

    async def _fetch(self, request: PageRequest) -> Page[T]:
        page_start = perf_counter()
        try:
            page = await self._fetch_page(request)
        except OperationCancelledError:
            raise
        except Exception as e:
            log_page_error(
                operation=self._operation,
                page_index=request.page_index,
                items_yielded=len(self._yielded),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise ListError(
                f"{self._operation} failed on page {request.page_index + 1} "
                f"after {len(self._yielded)} items: {e}",
                partial_data=self._yielded,
                partial_metrics=self._metrics,
            ) from e

        self._pages_fetched += 1
        self._metrics = self._metrics + page.metrics
        log_page_fetched(
            operation=self._operation,
            page_index=request.page_index,
            items=len(page.items),
            metrics=page.metrics,
            latency_ms=(perf_counter() - page_start) * 1000.0,
        )
        return page

    def _first_request(self) -> PageRequest:
        if self._style is PaginationStyle.PAGE:
            return PageRequest(per_page=self._per_page, page=1)
        return PageRequest(per_page=self._per_page)

    def _next_request(self, request: PageRequest, page: Page[T]) -> PageRequest | None:
        if self._max_pages is not None and self._pages_fetched >= self._max_pages:
            return None
        if self._style is PaginationStyle.PAGE:
            return self._next_page_request(request, page)
        return self._next_cursor_request(request, page)

    def _next_page_request(self, request: PageRequest, page: Page[T]) -> PageRequest | None:
        # An empty page always ends the traversal, whatever the metadata says.
        if not page.items:
            return None

        current = request.page or 1
        if self._trust_total_pages:
            info = page.info
            if not isinstance(info, ResultInfo) or current >= info.total_pages:
                return None
        elif len(page.items) < request.per_page:
            # total_pages is unreliable here; a short page is the last one.
            return None

        return replace(request, page=current + 1, page_index=request.page_index + 1)

    def _next_cursor_request(self, request: PageRequest, page: Page[T]) -> PageRequest | None:
        cursor = page.cursor
        if not cursor:
            return None
        return replace(request, cursor=cursor, page_index=request.page_index + 1)


def paginate_pages(
    fetch_page: FetchPage[T],
    *,
    per_page: int = DEFAULT_PER_PAGE,
    trust_total_pages: bool = True,
    max_pages: int | None = None,
    cancel: asyncio.Event | None = None,
    operation: str = "list",
) -> PageStream[T]:
    """Traverse a page-number paginated endpoint.

    Starts at page 1 and continues while ``page < total_pages``. When
    ``trust_total_pages`` is False (the endpoint always reports 0), it
    continues while each page comes back full instead.
    """
    return PageStream(
        fetch_page,
        style=PaginationStyle.PAGE,
        per_page=per_page,
        trust_total_pages=trust_total_pages,
        max_pages=max_pages,
        cancel=cancel,
        operation=operation,
    )


def paginate_cursor(
    fetch_page: FetchPage[T],
    *,
    per_page: int = DEFAULT_PER_PAGE,
    max_pages: int | None = None,
    cancel: asyncio.Event | None = None,
    operation: str = "list",
) -> PageStream[T]:
    """Traverse a cursor paginated endpoint.

    Starts without a cursor and feeds each returned cursor into the next
    fetch until the server stops sending one.
    """
    return PageStream(
        fetch_page,
        style=PaginationStyle.CURSOR,
        per_page=per_page,
        max_pages=max_pages,
        cancel=cancel,
        operation=operation,
    )
