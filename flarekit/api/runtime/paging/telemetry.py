"""Structured logging for pagination.

This module provides telemetry hooks for paginated traversals, emitting one
structured log record per event.
"""

from __future__ import annotations

import logging

from ...models.metrics import R2Result

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    operation: str,
    page_index: int,
    items: int,
    metrics: R2Result,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page fetch.

    Args:
        operation: Name of the listing operation
        page_index: Zero-based index of the page
        items: Number of items on the page
        metrics: Metrics consumed by this page
        latency_ms: Round-trip latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "operation": operation,
            "page_index": page_index,
            "items": items,
            "class_a_operations": metrics.class_a_operations,
            "class_b_operations": metrics.class_b_operations,
            "latency_ms": latency_ms,
        },
    )


def log_pagination_complete(
    *,
    operation: str,
    pages_fetched: int,
    items_yielded: int,
    metrics: R2Result,
) -> None:
    """Log the end of a traversal that ran to exhaustion."""
    logger.info(
        "pagination_complete",
        extra={
            "operation": operation,
            "pages_fetched": pages_fetched,
            "items_yielded": items_yielded,
            "class_a_operations": metrics.class_a_operations,
            "class_b_operations": metrics.class_b_operations,
        },
    )


def log_page_error(
    *,
    operation: str,
    page_index: int,
    items_yielded: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a page fetch that ended the traversal.

    Args:
        operation: Name of the listing operation
        page_index: Zero-based index of the page that failed
        items_yielded: Items already handed to the caller
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "page_error",
        extra={
            "operation": operation,
            "page_index": page_index,
            "items_yielded": items_yielded,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
