"""Custom exception hierarchy.

Every error raised by the library derives from CloudflareError and exposes
``partial_metrics``: the billable usage consumed before the failure. Errors
raised from a single call carry zero metrics; errors raised part-way through
a batch or a paginated listing carry whatever had accrued, so callers can
account for cost and retry only the incomplete subset.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ..models.metrics import R2Result

if TYPE_CHECKING:
    from ..models.envelope import ApiMessage


class CloudflareError(Exception):
    """Base exception for all library errors."""

    def __init__(self, message: str, partial_metrics: R2Result | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.partial_metrics = partial_metrics or R2Result()


class ConfigurationError(CloudflareError):
    """Required options are missing or invalid.

    Raised before any request is attempted.
    """

    def __init__(self, message: str, failures: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.failures = list(failures or [])


class ValidationError(CloudflareError):
    """Invalid arguments passed to a client method."""

    pass


class ClientClosedError(CloudflareError):
    """The client or its transport has already been closed."""

    pass


class ProviderError(CloudflareError):
    """Error reported by the Cloudflare API or the transport in front of it.

    Transport failures carry ``status_code``; application failures
    (``success: false`` in a 2xx body) carry the envelope's ``errors``.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: Sequence[ApiMessage] | None = None,
        body: Any = None,
        partial_metrics: R2Result | None = None,
    ) -> None:
        super().__init__(message, partial_metrics)
        self.status_code = status_code
        self.errors = list(errors or [])
        self.body = body

    @property
    def code(self) -> int | None:
        """Code of the first API error, if any."""
        return self.errors[0].code if self.errors else None


class TransportError(ProviderError):
    """Non-2xx HTTP status or connection failure."""

    pass


class RateLimitError(TransportError):
    """Provider rate limit exceeded."""

    def __init__(self, message: str, retry_after: float = 60, body: Any = None) -> None:
        super().__init__(message, status_code=429, body=body)
        self.retry_after = retry_after


class ApiError(ProviderError):
    """2xx response whose envelope reported ``success: false``."""

    @property
    def error_message(self) -> str | None:
        """Message of the first API error, if any."""
        return self.errors[0].message if self.errors else None


class OperationError(CloudflareError):
    """A storage operation failed.

    The underlying cause is available as ``__cause__`` (also ``cause``).
    """

    def __init__(self, message: str, partial_metrics: R2Result | None = None) -> None:
        super().__init__(message, partial_metrics)

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class BatchError(OperationError):
    """Some items of a batch could not be processed.

    ``failed_items`` lists them in input order so a caller can retry exactly
    that subset; ``partial_metrics`` covers the work that did complete.
    """

    def __init__(
        self,
        message: str,
        failed_items: Sequence[Any],
        partial_metrics: R2Result | None = None,
    ) -> None:
        super().__init__(message, partial_metrics)
        self.failed_items = list(failed_items)


class ListError(OperationError):
    """A paginated listing failed mid-stream.

    ``partial_data`` holds the items retrieved before the failing page.
    """

    def __init__(
        self,
        message: str,
        partial_data: Sequence[Any],
        partial_metrics: R2Result | None = None,
    ) -> None:
        super().__init__(message, partial_metrics)
        self.partial_data = list(partial_data)


class OperationCancelledError(CloudflareError):
    """The caller cancelled a multi-step operation between round trips.

    Cancellation is not a partial-failure outcome: no metrics are reported.
    """

    def __init__(self, message: str = "Operation was cancelled") -> None:
        super().__init__(message)
