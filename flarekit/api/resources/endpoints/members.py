"""Account member and role endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from ...models import AccountMember, AccountRole
from ...runtime.paging import PaginationPolicy
from ...runtime.rest import ModelAdapter, RestEndpointSpec
from .common import compact, segment


def members_path(params: dict[str, Any]) -> str:
    return f"accounts/{segment(params['account_id'])}/members"


def member_path(params: dict[str, Any]) -> str:
    return f"{members_path(params)}/{segment(params['member_id'])}"


def roles_path(params: dict[str, Any]) -> str:
    return f"accounts/{segment(params['account_id'])}/roles"


def role_path(params: dict[str, Any]) -> str:
    return f"{roles_path(params)}/{segment(params['role_id'])}"


def build_update_roles_body(params: dict[str, Any]) -> dict[str, Any]:
    return {"roles": [{"id": role_id} for role_id in params["role_ids"]]}


LIST_MEMBERS = RestEndpointSpec(
    id="list_members",
    method="GET",
    build_path=members_path,
    build_query=lambda p: compact({"status": p.get("status")}),
    pagination=PaginationPolicy(per_page=20),
)

GET_MEMBER = RestEndpointSpec(id="get_member", method="GET", build_path=member_path)

ADD_MEMBER = RestEndpointSpec(
    id="add_member",
    method="POST",
    build_path=members_path,
    build_body=lambda p: p["request"].to_body(),
)

UPDATE_MEMBER_ROLES = RestEndpointSpec(
    id="update_member_roles",
    method="PUT",
    build_path=member_path,
    build_body=build_update_roles_body,
)

REMOVE_MEMBER = RestEndpointSpec(id="remove_member", method="DELETE", build_path=member_path)

LIST_ROLES = RestEndpointSpec(
    id="list_roles",
    method="GET",
    build_path=roles_path,
    pagination=PaginationPolicy(per_page=50),
)

GET_ROLE = RestEndpointSpec(id="get_role", method="GET", build_path=role_path)


class MemberAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(AccountMember)


class MemberListAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(AccountMember, many=True)


class RoleAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(AccountRole)


class RoleListAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(AccountRole, many=True)
