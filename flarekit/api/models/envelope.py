"""Cloudflare response envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ApiMessage(BaseModel):
    """A single error or message entry of the envelope."""

    code: int
    message: str

    model_config = ConfigDict(frozen=True)


class Envelope(BaseModel):
    """Standard wrapper around every Cloudflare API response body.

    ``result`` is left undecoded; endpoint adapters turn it into models.
    ``result_info`` holds the raw pagination metadata, whose shape depends on
    whether the endpoint is page- or cursor-based.
    """

    success: bool
    errors: list[ApiMessage] = []
    messages: list[ApiMessage] = []
    result: Any = None
    result_info: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("errors", "messages", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def describe_errors(self) -> str:
        return ", ".join(f"[{e.code}] {e.message}" for e in self.errors)
