"""Helpers shared by endpoint definitions."""

from __future__ import annotations

from enum import Enum
from typing import Any
from urllib.parse import quote

from ...core.enums import ExtensibleEnum


def segment(value: str) -> str:
    """Escape a value for use as a single path segment."""
    return quote(value, safe="")


def query_value(value: Any) -> Any:
    """Convert enum values to the plain strings aiohttp accepts as query values."""
    if isinstance(value, ExtensibleEnum | Enum):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def compact(query: dict[str, Any]) -> dict[str, Any]:
    """Drop unset entries and convert the rest to query values."""
    return {k: query_value(v) for k, v in query.items() if v is not None}
