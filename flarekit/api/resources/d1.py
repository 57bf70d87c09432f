"""D1 databases API."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from ..core.base import ApiResource, require_id
from ..core.exceptions import ValidationError
from ..models import CreateD1DatabaseRequest, D1Database, D1QueryResult, ListD1DatabasesFilters
from ..runtime.paging import Page, PageStream
from ..runtime.rest import ResponseAdapter
from .endpoints import d1 as endpoints

READ_REPLICATION_MODES = ("auto", "disabled")


class D1Api(ApiResource):
    """Manage and query the D1 databases of the configured account.

    ``list_all_databases`` cannot rely on ``total_pages`` (the endpoint always
    reports 0) and keeps fetching while pages come back full.
    """

    async def list_databases(
        self, filters: ListD1DatabasesFilters | None = None
    ) -> Page[D1Database]:
        return await self._fetch_page(
            endpoints.LIST_DATABASES,
            endpoints.DatabaseListAdapter(),
            {"account_id": self.account_id, "filters": filters},
            page=filters.page if filters else None,
            per_page=filters.per_page if filters else None,
        )

    def list_all_databases(
        self,
        filters: ListD1DatabasesFilters | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[D1Database]:
        return self._paginate(
            endpoints.LIST_DATABASES,
            endpoints.DatabaseListAdapter(),
            {"account_id": self.account_id, "filters": filters},
            per_page=filters.per_page if filters else None,
            cancel=cancel,
        )

    async def get_database(self, database_id: str) -> D1Database:
        return await self._run(
            endpoints.GET_DATABASE, endpoints.DatabaseAdapter(), self._params(database_id)
        )

    async def create_database(self, request: CreateD1DatabaseRequest) -> D1Database:
        params = {"account_id": self.account_id, "request": request}
        return await self._run(endpoints.CREATE_DATABASE, endpoints.DatabaseAdapter(), params)

    async def update_database(self, database_id: str, *, read_replication_mode: str) -> D1Database:
        """Change the read replication mode (``auto`` or ``disabled``)."""
        if read_replication_mode not in READ_REPLICATION_MODES:
            raise ValidationError(
                f"read_replication_mode must be one of {READ_REPLICATION_MODES}, "
                f"got {read_replication_mode!r}"
            )
        params = self._params(database_id)
        params["read_replication_mode"] = read_replication_mode
        return await self._run(endpoints.UPDATE_DATABASE, endpoints.DatabaseAdapter(), params)

    async def delete_database(self, database_id: str) -> None:
        await self._run(endpoints.DELETE_DATABASE, ResponseAdapter(), self._params(database_id))

    async def query(
        self,
        database_id: str,
        sql: str,
        sql_params: Sequence[Any] | None = None,
    ) -> list[D1QueryResult]:
        """Run one or more SQL statements; one result per statement.

        Args:
            database_id: Database UUID
            sql: SQL text, may contain ``?`` placeholders
            sql_params: Values bound to the placeholders
        """
        params = self._params(database_id)
        params["sql"] = require_id(sql, "sql")
        params["sql_params"] = sql_params
        return await self._run(endpoints.QUERY_DATABASE, endpoints.QueryResultAdapter(), params)

    def _params(self, database_id: str) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "database_id": require_id(database_id, "database_id"),
        }
