"""Billable usage metrics for R2 operations.

Architecture:
    R2Result is an immutable value type with one field per billable dimension.
    Multi-request operations (batch deletes, paginated listings, multipart
    uploads) fold the metrics of every sub-request into a running total by
    merging, never by mutating an existing instance.

Design Decisions:
    - Frozen model: a metrics value can be handed to an exception or a caller
      without the producer being able to change it afterwards
    - Field-wise sum: merge is associative and commutative, R2Result() is the
      identity, so the order sub-requests complete in does not matter
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class R2Result(BaseModel):
    """Accumulated billable metrics of one or more R2 operations."""

    class_a_operations: int = Field(default=0, ge=0)
    class_b_operations: int = Field(default=0, ge=0)
    ingress_bytes: int = Field(default=0, ge=0)
    egress_bytes: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def zero(cls) -> R2Result:
        """The identity element for merge."""
        return cls()

    @classmethod
    def total(cls, results: Iterable[R2Result]) -> R2Result:
        """Merge any number of metrics into one."""
        acc = cls()
        for result in results:
            acc = acc.merge(result)
        return acc

    @property
    def is_zero(self) -> bool:
        return self == R2Result()

    def merge(self, other: R2Result) -> R2Result:
        """Return a new R2Result holding the field-wise sum of both operands."""
        return R2Result(
            class_a_operations=self.class_a_operations + other.class_a_operations,
            class_b_operations=self.class_b_operations + other.class_b_operations,
            ingress_bytes=self.ingress_bytes + other.ingress_bytes,
            egress_bytes=self.egress_bytes + other.egress_bytes,
        )

    def __add__(self, other: object) -> R2Result:
        if not isinstance(other, R2Result):
            return NotImplemented
        return self.merge(other)


def merge(a: R2Result, b: R2Result) -> R2Result:
    """Combine two metrics values by summing every field."""
    return a.merge(b)


@dataclass(frozen=True)
class R2DataResult(Generic[T]):
    """Result of an operation that returns a payload in addition to metrics.

    Attributes:
        data: Payload returned by the operation
        metrics: Billable metrics consumed to produce it
    """

    data: T
    metrics: R2Result
