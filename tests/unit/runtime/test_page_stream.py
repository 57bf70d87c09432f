"""Unit tests for the pagination engine."""

from __future__ import annotations

import asyncio

import pytest

from flarekit.api.core import ListError, OperationCancelledError, PaginationStyle
from flarekit.api.models import CursorResultInfo, R2Result, ResultInfo
from flarekit.api.runtime.paging import (
    Page,
    PageRequest,
    PageStream,
    PaginationPolicy,
    paginate_cursor,
    paginate_pages,
)


class FakePages:
    """Page fetcher serving pre-built pages and recording requests."""

    def __init__(self, pages, fail_at: int | None = None):
        self.pages = list(pages)
        self.fail_at = fail_at
        self.requests: list[PageRequest] = []

    async def __call__(self, request: PageRequest) -> Page:
        self.requests.append(request)
        index = len(self.requests) - 1
        if self.fail_at is not None and index == self.fail_at:
            raise RuntimeError("server exploded")
        return self.pages[index]


def numbered(start: int, count: int) -> list[int]:
    return list(range(start, start + count))


class TestPagePagination:
    """Test page-number continuation."""

    @pytest.mark.asyncio
    async def test_follows_total_pages(self):
        """Test pages 1..total_pages are fetched in order."""
        fetch = FakePages(
            [
                Page(items=numbered(0, 2), info=ResultInfo(page=1, per_page=2, total_pages=3)),
                Page(items=numbered(2, 2), info=ResultInfo(page=2, per_page=2, total_pages=3)),
                Page(items=numbered(4, 1), info=ResultInfo(page=3, per_page=2, total_pages=3)),
            ]
        )

        items = [item async for item in paginate_pages(fetch, per_page=2)]

        assert items == [0, 1, 2, 3, 4]
        assert [r.page for r in fetch.requests] == [1, 2, 3]
        assert [r.page_index for r in fetch.requests] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_missing_result_info_stops_after_first_page(self):
        """Test a page without metadata ends a trusted traversal."""
        fetch = FakePages([Page(items=[1, 2])])
        items = [item async for item in paginate_pages(fetch, per_page=2)]
        assert items == [1, 2]
        assert len(fetch.requests) == 1

    @pytest.mark.asyncio
    async def test_empty_page_stops_even_if_total_pages_says_more(self):
        """Test an empty page terminates the traversal."""
        fetch = FakePages([Page(items=[], info=ResultInfo(page=1, total_pages=9))])
        items = [item async for item in paginate_pages(fetch)]
        assert items == []
        assert len(fetch.requests) == 1

    @pytest.mark.asyncio
    async def test_untrusted_totals_continue_while_pages_full(self):
        """Test zero total_pages does not stop an untrusted traversal."""
        zero = ResultInfo(total_count=0, total_pages=0)
        fetch = FakePages(
            [
                Page(items=numbered(0, 3), info=zero),
                Page(items=numbered(3, 3), info=zero),
                Page(items=numbered(6, 1), info=zero),
            ]
        )

        items = [item async for item in paginate_pages(fetch, per_page=3, trust_total_pages=False)]

        assert items == numbered(0, 7)
        assert len(fetch.requests) == 3

    @pytest.mark.asyncio
    async def test_untrusted_totals_exact_multiple_ends_on_empty_page(self):
        """Test a final full page costs one extra empty round trip."""
        zero = ResultInfo()
        fetch = FakePages(
            [
                Page(items=numbered(0, 2), info=zero),
                Page(items=numbered(2, 2), info=zero),
                Page(items=[], info=zero),
            ]
        )

        items = [item async for item in paginate_pages(fetch, per_page=2, trust_total_pages=False)]

        assert items == numbered(0, 4)
        assert len(fetch.requests) == 3

    @pytest.mark.asyncio
    async def test_trusted_zero_total_pages_stops_after_first_page(self):
        """Test trusting a zero total_pages stops early."""
        fetch = FakePages([Page(items=numbered(0, 2), info=ResultInfo(total_pages=0))])
        items = [item async for item in paginate_pages(fetch, per_page=2)]
        assert items == [0, 1]
        assert len(fetch.requests) == 1

    @pytest.mark.asyncio
    async def test_max_pages_caps_round_trips(self):
        """Test max_pages bounds the number of fetches."""
        info = ResultInfo(total_pages=10)
        fetch = FakePages([Page(items=[i], info=info) for i in range(10)])
        items = [item async for item in paginate_pages(fetch, per_page=1, max_pages=2)]
        assert items == [0, 1]


class TestCursorPagination:
    """Test cursor continuation."""

    @pytest.mark.asyncio
    async def test_feeds_cursor_until_absent(self):
        """Test each returned cursor is sent with the next request."""
        fetch = FakePages(
            [
                Page(items=["a"], info=CursorResultInfo(cursor="c1")),
                Page(items=["b"], info=CursorResultInfo(cursor="c2")),
                Page(items=["c"], info=CursorResultInfo(cursor="")),
            ]
        )

        items = [item async for item in paginate_cursor(fetch, per_page=1)]

        assert items == ["a", "b", "c"]
        assert [r.cursor for r in fetch.requests] == [None, "c1", "c2"]

    @pytest.mark.asyncio
    async def test_cursor_in_page_result_info(self):
        """Test a cursor carried by ResultInfo is honored too."""
        fetch = FakePages(
            [
                Page(items=[1], info=ResultInfo(cursor="next")),
                Page(items=[2], info=ResultInfo()),
            ]
        )
        items = [item async for item in paginate_cursor(fetch)]
        assert items == [1, 2]

    @pytest.mark.asyncio
    async def test_empty_page_with_cursor_continues(self):
        """Test an empty page with a cursor still continues."""
        fetch = FakePages(
            [
                Page(items=[], info=CursorResultInfo(cursor="c1")),
                Page(items=[1], info=CursorResultInfo()),
            ]
        )
        items = [item async for item in paginate_cursor(fetch)]
        assert items == [1]


class TestPageStreamBehavior:
    """Test laziness, metrics and failure reporting."""

    @pytest.mark.asyncio
    async def test_lazy_fetching(self):
        """Test no request is made until iteration starts."""
        fetch = FakePages([Page(items=[1], info=CursorResultInfo(cursor="x")), Page(items=[2])])
        stream = paginate_cursor(fetch)
        assert fetch.requests == []

        iterator = stream.__aiter__()
        assert await iterator.__anext__() == 1
        assert len(fetch.requests) == 1

    @pytest.mark.asyncio
    async def test_not_restartable(self):
        """Test a stream can only be iterated once."""
        stream = paginate_cursor(FakePages([Page(items=[])]))
        _ = [item async for item in stream]
        with pytest.raises(RuntimeError):
            stream.__aiter__()

    @pytest.mark.asyncio
    async def test_collect_merges_page_metrics(self):
        """Test collect returns items with the sum of page metrics."""
        a = R2Result(class_a_operations=1)
        fetch = FakePages(
            [
                Page(items=[1, 2], info=CursorResultInfo(cursor="c"), metrics=a),
                Page(items=[3], info=CursorResultInfo(), metrics=a),
            ]
        )

        result = await paginate_cursor(fetch).collect()

        assert result.data == [1, 2, 3]
        assert result.metrics == R2Result(class_a_operations=2)

    @pytest.mark.asyncio
    async def test_failure_raises_list_error_with_partial_data(self):
        """Test a failing page reports earlier items and metrics."""
        a = R2Result(class_a_operations=1)
        fetch = FakePages(
            [
                Page(items=[1, 2], info=CursorResultInfo(cursor="c1"), metrics=a),
                Page(items=[3], info=CursorResultInfo(cursor="c2"), metrics=a),
            ],
            fail_at=2,
        )
        stream = paginate_cursor(fetch, operation="list_objects")

        with pytest.raises(ListError) as exc_info:
            _ = [item async for item in stream]

        error = exc_info.value
        assert error.partial_data == [1, 2, 3]
        assert error.partial_metrics == R2Result(class_a_operations=2)
        assert isinstance(error.cause, RuntimeError)
        assert "list_objects" in str(error)
        assert stream.pages_fetched == 2
        assert stream.items_yielded == 3

    @pytest.mark.asyncio
    async def test_cancel_checked_before_each_round_trip(self):
        """Test setting the cancel event stops before the next fetch."""
        cancel = asyncio.Event()
        fetch = FakePages(
            [
                Page(items=[1], info=CursorResultInfo(cursor="c1")),
                Page(items=[2], info=CursorResultInfo()),
            ]
        )
        seen = []

        with pytest.raises(OperationCancelledError):
            async for item in paginate_cursor(fetch, cancel=cancel):
                seen.append(item)
                cancel.set()

        assert seen == [1]
        assert len(fetch.requests) == 1

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self):
        """Test an already-set event prevents any request."""
        cancel = asyncio.Event()
        cancel.set()
        fetch = FakePages([Page(items=[1])])

        with pytest.raises(OperationCancelledError):
            await paginate_pages(fetch, cancel=cancel).collect()
        assert fetch.requests == []

    def test_invalid_per_page(self):
        """Test per_page must be positive."""
        with pytest.raises(ValueError):
            PageStream(FakePages([]), style=PaginationStyle.PAGE, per_page=0)


class TestPaginationPolicy:
    """Test policy query building and validation."""

    def test_page_query(self):
        """Test page-style query parameters."""
        policy = PaginationPolicy(per_page=50)
        assert policy.build_query(PageRequest(per_page=50, page=3)) == {"per_page": 50, "page": 3}

    def test_cursor_query_omits_missing_cursor(self):
        """Test the first cursor request sends no cursor."""
        policy = PaginationPolicy(style=PaginationStyle.CURSOR)
        assert policy.build_query(PageRequest(per_page=20)) == {"per_page": 20}
        assert policy.build_query(PageRequest(per_page=20, cursor="abc")) == {
            "per_page": 20,
            "cursor": "abc",
        }

    def test_invalid_policy(self):
        """Test non-positive sizes are rejected."""
        with pytest.raises(ValueError):
            PaginationPolicy(per_page=0)
        with pytest.raises(ValueError):
            PaginationPolicy(max_pages=0)
