"""Decoding of the Cloudflare response envelope.

Every REST response body has the shape::

    {"success": bool, "errors": [...], "messages": [...], "result": ...,
     "result_info": {...}}

A body whose ``success`` is false never yields its ``result``; it is turned
into an ApiError carrying the envelope's errors verbatim.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ...core.exceptions import ApiError, ProviderError
from ...models.envelope import Envelope

logger = logging.getLogger(__name__)


def decode_envelope(body: Any, *, status_code: int | None = None) -> Envelope:
    """Validate a response body and fail on ``success: false``.

    Args:
        body: Decoded JSON body of a 2xx response
        status_code: HTTP status, attached to any error raised

    Returns:
        The decoded Envelope of a successful response

    Raises:
        ProviderError: The body is not a Cloudflare envelope
        ApiError: The envelope reported ``success: false``
    """
    try:
        envelope = Envelope.model_validate(body)
    except PydanticValidationError as e:
        raise ProviderError(
            f"Malformed API response: {e.error_count()} validation error(s)",
            status_code=status_code,
            body=body,
        ) from e

    if not envelope.success:
        message = envelope.describe_errors() or "Cloudflare API reported failure without errors"
        logger.debug(
            "api_error",
            extra={"status_code": status_code, "errors": [e.code for e in envelope.errors]},
        )
        raise ApiError(
            f"Cloudflare API call failed: {message}",
            status_code=status_code,
            errors=envelope.errors,
            body=body,
        )

    return envelope


def unwrap(body: Any) -> Any:
    """Return the ``result`` of a successful envelope."""
    return decode_envelope(body).result
