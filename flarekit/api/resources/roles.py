"""Account roles API."""

from __future__ import annotations

import asyncio

from ..core.base import ApiResource, require_id
from ..models import AccountRole
from ..runtime.paging import Page, PageStream
from .endpoints import members as endpoints


class RolesApi(ApiResource):
    """Read-only access to the roles that can be granted to members."""

    async def list_roles(
        self,
        *,
        account_id: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> Page[AccountRole]:
        return await self._fetch_page(
            endpoints.LIST_ROLES,
            endpoints.RoleListAdapter(),
            {"account_id": self._account(account_id)},
            page=page,
            per_page=per_page,
        )

    def list_all_roles(
        self,
        *,
        account_id: str | None = None,
        per_page: int | None = None,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[AccountRole]:
        return self._paginate(
            endpoints.LIST_ROLES,
            endpoints.RoleListAdapter(),
            {"account_id": self._account(account_id)},
            per_page=per_page,
            cancel=cancel,
        )

    async def get_role(self, role_id: str, *, account_id: str | None = None) -> AccountRole:
        params = {"account_id": self._account(account_id), "role_id": require_id(role_id, "role_id")}
        return await self._run(endpoints.GET_ROLE, endpoints.RoleAdapter(), params)
