"""Account members API."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from ..core.base import ApiResource, require_id
from ..core.enums import MemberStatus
from ..core.exceptions import ValidationError
from ..models import AccountMember, AddMemberRequest
from ..runtime.paging import Page, PageStream
from ..runtime.rest import ResponseAdapter
from .endpoints import members as endpoints


class MembersApi(ApiResource):
    """Invite, inspect and remove members of an account.

    Every method accepts an explicit ``account_id``; when omitted the
    configured account is used.
    """

    async def list_members(
        self,
        *,
        account_id: str | None = None,
        status: MemberStatus | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> Page[AccountMember]:
        return await self._fetch_page(
            endpoints.LIST_MEMBERS,
            endpoints.MemberListAdapter(),
            {"account_id": self._account(account_id), "status": status},
            page=page,
            per_page=per_page,
        )

    def list_all_members(
        self,
        *,
        account_id: str | None = None,
        status: MemberStatus | None = None,
        per_page: int | None = None,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[AccountMember]:
        return self._paginate(
            endpoints.LIST_MEMBERS,
            endpoints.MemberListAdapter(),
            {"account_id": self._account(account_id), "status": status},
            per_page=per_page,
            cancel=cancel,
        )

    async def get_member(self, member_id: str, *, account_id: str | None = None) -> AccountMember:
        params = {
            "account_id": self._account(account_id),
            "member_id": require_id(member_id, "member_id"),
        }
        return await self._run(endpoints.GET_MEMBER, endpoints.MemberAdapter(), params)

    async def add_member(
        self, request: AddMemberRequest, *, account_id: str | None = None
    ) -> AccountMember:
        """Invite a user by email with the given roles."""
        params = {"account_id": self._account(account_id), "request": request}
        return await self._run(endpoints.ADD_MEMBER, endpoints.MemberAdapter(), params)

    async def update_member_roles(
        self,
        member_id: str,
        role_ids: Sequence[str],
        *,
        account_id: str | None = None,
    ) -> AccountMember:
        """Replace the member's roles with ``role_ids``."""
        if not role_ids:
            raise ValidationError("role_ids must contain at least one role")
        params = {
            "account_id": self._account(account_id),
            "member_id": require_id(member_id, "member_id"),
            "role_ids": [require_id(role_id, "role_id") for role_id in role_ids],
        }
        return await self._run(endpoints.UPDATE_MEMBER_ROLES, endpoints.MemberAdapter(), params)

    async def remove_member(self, member_id: str, *, account_id: str | None = None) -> None:
        params = {
            "account_id": self._account(account_id),
            "member_id": require_id(member_id, "member_id"),
        }
        await self._run(endpoints.REMOVE_MEMBER, ResponseAdapter(), params)
