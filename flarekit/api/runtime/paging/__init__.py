"""Generic pagination layer for list endpoints.

This module provides reusable traversal logic for the two continuation
styles used by the Cloudflare API, with metrics accumulation and
partial-result reporting on failure.

Architecture:
    The paging layer consists of:
    - definitions.py: Pagination metadata structures (PaginationPolicy, PageRequest, Page)
    - executors.py: Traversal logic (PageStream, paginate_pages, paginate_cursor)
    - telemetry.py: Structured logging

Usage:
    Endpoints opt into pagination by declaring a PaginationPolicy in their
    endpoint specification; RestRunner builds the page fetcher and hands it
    to the matching traversal.
"""

from __future__ import annotations

from .definitions import (
    DEFAULT_PER_PAGE,
    FetchPage,
    Page,
    PageRequest,
    PaginationPolicy,
    extract_result_info,
)
from .executors import PageStream, paginate_cursor, paginate_pages

__all__ = [
    "DEFAULT_PER_PAGE",
    "FetchPage",
    "Page",
    "PageRequest",
    "PaginationPolicy",
    "PageStream",
    "extract_result_info",
    "paginate_cursor",
    "paginate_pages",
]
