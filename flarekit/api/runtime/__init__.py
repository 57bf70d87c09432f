"""Runtime orchestration components."""

from .batch import BatchExecutor, BatchItemError, chunked
from .cancellation import raise_if_cancelled
from .paging import (
    Page,
    PageRequest,
    PageStream,
    PaginationPolicy,
    paginate_cursor,
    paginate_pages,
)

__all__ = [
    "BatchExecutor",
    "BatchItemError",
    "chunked",
    "raise_if_cancelled",
    "Page",
    "PageRequest",
    "PageStream",
    "PaginationPolicy",
    "paginate_cursor",
    "paginate_pages",
]
