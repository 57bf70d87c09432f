"""Base class for resource APIs.

Architecture:
    Each resource API (zones, DNS, accounts, ...) groups a set of endpoint
    specifications and runs them through a shared RestRunner. Single-resource
    calls go through ``_run``; list calls either fetch one page (``_fetch_page``)
    or hand the endpoint to the pagination engine (``_paginate``).

Design Decisions:
    - Resources hold no transport of their own: ownership stays with the
      top-level client that created them
    - Argument checks happen before any request and raise ValidationError
    - Account-scoped resources resolve the account id lazily so that
      zone-only use does not require one
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from .enums import PaginationStyle
from .exceptions import ConfigurationError, ValidationError

if TYPE_CHECKING:
    from ..config import CloudflareApiOptions
    from ..runtime.paging import Page, PageStream
    from ..runtime.rest import ResponseAdapter, RestEndpointSpec, RestRunner


class ApiResource:
    """Base class for a group of related REST endpoints."""

    def __init__(self, runner: RestRunner, options: CloudflareApiOptions) -> None:
        self._runner = runner
        self._options = options

    @property
    def account_id(self) -> str:
        """Account id from the client options."""
        account_id = self._options.account_id
        if not account_id or not account_id.strip():
            raise ConfigurationError(
                f"{type(self).__name__} requires an account id",
                failures=["Cloudflare:AccountId is required"],
            )
        return account_id

    def _account(self, account_id: str | None) -> str:
        """An explicit account id, falling back to the configured one."""
        if account_id is not None:
            return require_id(account_id, "account_id")
        return self.account_id

    async def _run(
        self, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        return await self._runner.run(spec=spec, adapter=adapter, params=params)

    async def _fetch_page(
        self,
        spec: RestEndpointSpec,
        adapter: ResponseAdapter,
        params: dict[str, Any],
        *,
        page: int | None = None,
        per_page: int | None = None,
        cursor: str | None = None,
    ) -> Page[Any]:
        from ..runtime.paging import PageRequest

        policy = spec.pagination
        if policy is None:
            raise ValidationError(f"Endpoint {spec.id} is not paginated")
        size = check_per_page(per_page) or policy.per_page
        if policy.style is PaginationStyle.PAGE:
            request = PageRequest(per_page=size, page=check_page(page) or 1)
        else:
            request = PageRequest(per_page=size, cursor=cursor)
        return await self._runner.fetch_page(spec=spec, adapter=adapter, params=params, request=request)

    def _paginate(
        self,
        spec: RestEndpointSpec,
        adapter: ResponseAdapter,
        params: dict[str, Any],
        *,
        per_page: int | None = None,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[Any]:
        return self._runner.paginate(
            spec=spec,
            adapter=adapter,
            params=params,
            per_page=check_per_page(per_page),
            cancel=cancel,
        )


def require_id(value: str | None, name: str) -> str:
    """Return ``value`` or raise ValidationError if it is empty."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} must not be empty")
    return value


def check_page(page: int | None) -> int | None:
    if page is not None and page < 1:
        raise ValidationError(f"page must be >= 1, got {page}")
    return page


def check_per_page(per_page: int | None) -> int | None:
    if per_page is not None and per_page < 1:
        raise ValidationError(f"per_page must be >= 1, got {per_page}")
    return per_page
