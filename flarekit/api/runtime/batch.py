"""Sequential batch execution with partial-failure accounting.

Architecture:
    BatchExecutor walks a list of items one at a time, awaiting a caller
    supplied ``process`` coroutine for each. Metrics returned by successful
    items are merged into a running total. Failed items are collected in
    input order and reported together once the batch is over.

Design Decisions:
    - Items run strictly in order, one round trip at a time
    - A plain exception from ``process`` means the item consumed nothing
    - BatchItemError lets ``process`` report a billed sub-request that only
      partially failed, e.g. a DeleteObjects call with per-key errors
    - continue_on_error=False stops at the first failure but still reports
      the metrics accrued so far
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator, Sequence
from typing import Any, TypeVar

from ..core.exceptions import BatchError, OperationCancelledError
from ..models.metrics import R2Result
from .cancellation import raise_if_cancelled

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BatchItemError(Exception):
    """Raised by a batch ``process`` function when a billed sub-request failed.

    ``failed_items`` replaces the processed item in the batch's failed list
    and ``metrics`` is merged into the batch total.
    """

    def __init__(
        self,
        message: str,
        failed_items: Sequence[Any],
        metrics: R2Result | None = None,
    ) -> None:
        super().__init__(message)
        self.failed_items = list(failed_items)
        self.metrics = metrics or R2Result()


class BatchExecutor:
    """Runs one operation per item and accounts for partial failure."""

    def __init__(self, operation: str = "batch") -> None:
        """Initialize batch executor.

        Args:
            operation: Name used in log records and error messages
        """
        self._operation = operation

    async def execute(
        self,
        items: Iterable[T],
        process: Callable[[T], Awaitable[R2Result | None]],
        *,
        continue_on_error: bool = True,
        cancel: asyncio.Event | None = None,
    ) -> R2Result:
        """Process every item in order.

        Args:
            items: Items to process
            process: Async function handling one item and returning its metrics
            continue_on_error: Keep going after a failed item (default True)
            cancel: Optional event checked before each item

        Returns:
            Merged metrics of all items when every item succeeded

        Raises:
            BatchError: One or more items failed. ``failed_items`` lists them in
                input order, ``partial_metrics`` covers the successful work and
                ``__cause__`` is an ExceptionGroup of the individual failures.
            OperationCancelledError: ``cancel`` was set between items
        """
        metrics = R2Result()
        failed: list[Any] = []
        causes: list[Exception] = []
        processed = 0

        for index, item in enumerate(items):
            raise_if_cancelled(cancel, operation=self._operation)

            try:
                item_metrics = await process(item)
            except OperationCancelledError:
                raise
            except BatchItemError as e:
                metrics = metrics + e.metrics
                failed.extend(e.failed_items)
                causes.append(e)
                log_batch_item_failed(
                    operation=self._operation,
                    item_index=index,
                    failed_count=len(e.failed_items),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            except Exception as e:
                failed.append(item)
                causes.append(e)
                log_batch_item_failed(
                    operation=self._operation,
                    item_index=index,
                    failed_count=1,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            else:
                processed += 1
                if item_metrics is not None:
                    metrics = metrics + item_metrics
                continue

            if not continue_on_error:
                break

        log_batch_complete(
            operation=self._operation,
            processed=processed,
            failed=len(failed),
            metrics=metrics,
        )

        if failed:
            raise BatchError(
                f"{self._operation} failed for {len(failed)} item(s)",
                failed_items=failed,
                partial_metrics=metrics,
            ) from ExceptionGroup(f"{self._operation} failures", causes)

        return metrics


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Split ``items`` into consecutive lists of at most ``size`` elements."""
    if size <= 0:
        raise ValueError("size must be positive")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def log_batch_item_failed(
    *,
    operation: str,
    item_index: int,
    failed_count: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a batch item that failed and was recorded for retry.

    Args:
        operation: Name of the batch operation
        item_index: Zero-based index of the item in the batch
        failed_count: Number of entries added to the failed list
        error_type: Exception class name
        error_message: Exception message
    """
    logger.warning(
        "batch_item_failed",
        extra={
            "operation": operation,
            "item_index": item_index,
            "failed_count": failed_count,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_batch_complete(
    *,
    operation: str,
    processed: int,
    failed: int,
    metrics: R2Result,
) -> None:
    logger.info(
        "batch_complete",
        extra={
            "operation": operation,
            "processed": processed,
            "failed": failed,
            "class_a_operations": metrics.class_a_operations,
            "class_b_operations": metrics.class_b_operations,
        },
    )
