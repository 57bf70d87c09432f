"""Accounts API, including the account's R2 buckets."""

from __future__ import annotations

import asyncio
from typing import Any

from ..core.base import ApiResource, require_id
from ..core.enums import R2Jurisdiction
from ..models import Account, CreateR2BucketRequest, ListAccountsFilters, R2Bucket
from ..runtime.paging import Page, PageStream
from ..runtime.rest import ResponseAdapter
from .endpoints import accounts as endpoints


class AccountsApi(ApiResource):
    """Accounts visible to the API token and the R2 buckets they own.

    Bucket operations use the configured account id; ``jurisdiction``
    selects a jurisdictional bucket namespace (``eu``, ``fedramp``).
    """

    async def list_accounts(self, filters: ListAccountsFilters | None = None) -> Page[Account]:
        return await self._fetch_page(
            endpoints.LIST_ACCOUNTS,
            endpoints.AccountListAdapter(),
            {"filters": filters},
            page=filters.page if filters else None,
            per_page=filters.per_page if filters else None,
        )

    def list_all_accounts(
        self,
        filters: ListAccountsFilters | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[Account]:
        return self._paginate(
            endpoints.LIST_ACCOUNTS,
            endpoints.AccountListAdapter(),
            {"filters": filters},
            per_page=filters.per_page if filters else None,
            cancel=cancel,
        )

    async def get_account(self, account_id: str | None = None) -> Account:
        params = {"account_id": self._account(account_id)}
        return await self._run(endpoints.GET_ACCOUNT, endpoints.AccountAdapter(), params)

    async def list_r2_buckets(
        self,
        *,
        per_page: int | None = None,
        cursor: str | None = None,
        name_contains: str | None = None,
        jurisdiction: R2Jurisdiction | None = None,
    ) -> Page[R2Bucket]:
        """Fetch one page of buckets; pass the returned ``cursor`` for the next."""
        return await self._fetch_page(
            endpoints.LIST_R2_BUCKETS,
            endpoints.R2BucketListAdapter(),
            self._bucket_params(name_contains=name_contains, jurisdiction=jurisdiction),
            per_page=per_page,
            cursor=cursor,
        )

    def list_all_r2_buckets(
        self,
        *,
        per_page: int | None = None,
        name_contains: str | None = None,
        jurisdiction: R2Jurisdiction | None = None,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[R2Bucket]:
        return self._paginate(
            endpoints.LIST_R2_BUCKETS,
            endpoints.R2BucketListAdapter(),
            self._bucket_params(name_contains=name_contains, jurisdiction=jurisdiction),
            per_page=per_page,
            cancel=cancel,
        )

    async def create_r2_bucket(
        self, request: CreateR2BucketRequest, *, jurisdiction: R2Jurisdiction | None = None
    ) -> R2Bucket:
        params = self._bucket_params(jurisdiction=jurisdiction)
        params["request"] = request
        return await self._run(endpoints.CREATE_R2_BUCKET, endpoints.R2BucketAdapter(), params)

    async def get_r2_bucket(
        self, bucket_name: str, *, jurisdiction: R2Jurisdiction | None = None
    ) -> R2Bucket:
        params = self._bucket_params(bucket_name=bucket_name, jurisdiction=jurisdiction)
        return await self._run(endpoints.GET_R2_BUCKET, endpoints.R2BucketAdapter(), params)

    async def delete_r2_bucket(
        self, bucket_name: str, *, jurisdiction: R2Jurisdiction | None = None
    ) -> None:
        """Delete an empty bucket."""
        params = self._bucket_params(bucket_name=bucket_name, jurisdiction=jurisdiction)
        await self._run(endpoints.DELETE_R2_BUCKET, ResponseAdapter(), params)

    def _bucket_params(
        self,
        *,
        bucket_name: str | None = None,
        name_contains: str | None = None,
        jurisdiction: R2Jurisdiction | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"account_id": self.account_id, "jurisdiction": jurisdiction}
        if bucket_name is not None:
            params["bucket_name"] = require_id(bucket_name, "bucket_name")
        if name_contains is not None:
            params["name_contains"] = name_contains
        return params
