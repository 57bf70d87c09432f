"""Cooperative cancellation between round trips.

Multi-step operations accept an optional ``asyncio.Event``. It is checked
before each network round trip, never in the middle of one.
"""

from __future__ import annotations

import asyncio
import logging

from ..core.exceptions import OperationCancelledError

logger = logging.getLogger(__name__)


def raise_if_cancelled(cancel: asyncio.Event | None, *, operation: str) -> None:
    """Raise OperationCancelledError if ``cancel`` has been set."""
    if cancel is not None and cancel.is_set():
        logger.info("operation_cancelled", extra={"operation": operation})
        raise OperationCancelledError(f"{operation} was cancelled")
