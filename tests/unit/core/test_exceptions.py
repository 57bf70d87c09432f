"""Precise unit tests for the exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from flarekit.api.core import (
    ApiError,
    BatchError,
    CloudflareError,
    ConfigurationError,
    ListError,
    OperationCancelledError,
    OperationError,
    ProviderError,
    RateLimitError,
    TransportError,
)
from flarekit.api.models import ApiMessage, R2Result


def test_every_error_carries_zero_metrics_by_default():
    """Test single-call errors report no billable usage."""
    error = CloudflareError("boom")
    assert error.partial_metrics == R2Result()
    assert error.partial_metrics.is_zero


def test_rate_limit_error_with_retry_after():
    """Test RateLimitError with retry_after (meaningful behavior)."""
    error = RateLimitError("rate limit", retry_after=120)
    assert error.status_code == 429
    assert error.retry_after == 120
    assert isinstance(error, TransportError)
    assert isinstance(error, ProviderError)
    assert isinstance(error, CloudflareError)


def test_provider_error_code_comes_from_first_api_error():
    """Test ProviderError exposes the first envelope error code."""
    error = ApiError(
        "failed",
        status_code=200,
        errors=[ApiMessage(code=1003, message="Invalid zone"), ApiMessage(code=9, message="x")],
    )
    assert error.code == 1003
    assert error.error_message == "Invalid zone"
    assert str(error) == "failed"


def test_provider_error_without_api_errors():
    """Test code is None when the envelope carried no errors."""
    error = TransportError("HTTP 502", status_code=502)
    assert error.code is None
    assert error.errors == []


def test_configuration_error_lists_failures():
    """Test ConfigurationError keeps each failure separately."""
    error = ConfigurationError("bad", failures=["a", "b"])
    assert error.failures == ["a", "b"]
    assert error.partial_metrics.is_zero


def test_batch_error_keeps_failed_items_and_metrics():
    """Test BatchError exposes failed items in order with partial metrics."""
    metrics = R2Result(class_a_operations=3)
    error = BatchError("partial", failed_items=("k2", "k1"), partial_metrics=metrics)
    assert error.failed_items == ["k2", "k1"]
    assert error.partial_metrics == metrics
    assert isinstance(error, OperationError)


def test_list_error_keeps_partial_data():
    """Test ListError carries the items retrieved before the failure."""
    error = ListError("page 3 failed", partial_data=[1, 2], partial_metrics=R2Result(class_a_operations=2))
    assert error.partial_data == [1, 2]
    assert error.partial_metrics.class_a_operations == 2


def test_operation_error_cause_is_the_chained_exception():
    """Test OperationError.cause returns __cause__."""
    try:
        try:
            raise ValueError("backend")
        except ValueError as e:
            raise OperationError("op failed") from e
    except OperationError as error:
        assert isinstance(error.cause, ValueError)


def test_cancellation_is_not_a_partial_failure():
    """Test OperationCancelledError reports zero metrics."""
    error = OperationCancelledError()
    assert str(error) == "Operation was cancelled"
    assert error.partial_metrics.is_zero
    assert not isinstance(error, OperationError)
