"""Account and R2 bucket endpoint definitions and adapters.

The bucket listing is the odd one out: it is cursor-based and nests its
items under ``result.buckets`` while the cursor travels in ``result_info``.
"""

from __future__ import annotations

from typing import Any

from ...core.enums import PaginationStyle
from ...models import Account, R2Bucket
from ...runtime.paging import PaginationPolicy
from ...runtime.rest import ModelAdapter, RestEndpointSpec
from .common import compact, segment


def account_path(params: dict[str, Any]) -> str:
    return f"accounts/{segment(params['account_id'])}"


def buckets_path(params: dict[str, Any]) -> str:
    return f"{account_path(params)}/r2/buckets"


def bucket_path(params: dict[str, Any]) -> str:
    return f"{buckets_path(params)}/{segment(params['bucket_name'])}"


def build_list_accounts_query(params: dict[str, Any]) -> dict[str, Any]:
    filters = params.get("filters")
    if filters is None:
        return {}
    return compact({"name": filters.name, "direction": filters.direction})


def build_list_buckets_query(params: dict[str, Any]) -> dict[str, Any]:
    return compact(
        {
            "name_contains": params.get("name_contains"),
            "start_after": params.get("start_after"),
        }
    )


def build_bucket_headers(params: dict[str, Any]) -> dict[str, str]:
    jurisdiction = params.get("jurisdiction")
    return {"cf-r2-jurisdiction": str(jurisdiction)} if jurisdiction else {}


LIST_ACCOUNTS = RestEndpointSpec(
    id="list_accounts",
    method="GET",
    build_path=lambda p: "accounts",
    build_query=build_list_accounts_query,
    pagination=PaginationPolicy(per_page=20),
)

GET_ACCOUNT = RestEndpointSpec(id="get_account", method="GET", build_path=account_path)

LIST_R2_BUCKETS = RestEndpointSpec(
    id="list_r2_buckets",
    method="GET",
    build_path=buckets_path,
    build_query=build_list_buckets_query,
    build_headers=build_bucket_headers,
    pagination=PaginationPolicy(style=PaginationStyle.CURSOR, per_page=20),
)

CREATE_R2_BUCKET = RestEndpointSpec(
    id="create_r2_bucket",
    method="POST",
    build_path=buckets_path,
    build_body=lambda p: p["request"].to_body(),
    build_headers=build_bucket_headers,
)

GET_R2_BUCKET = RestEndpointSpec(
    id="get_r2_bucket",
    method="GET",
    build_path=bucket_path,
    build_headers=build_bucket_headers,
)

DELETE_R2_BUCKET = RestEndpointSpec(
    id="delete_r2_bucket",
    method="DELETE",
    build_path=bucket_path,
    build_headers=build_bucket_headers,
)


class AccountAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(Account)


class AccountListAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(Account, many=True)


class R2BucketAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(R2Bucket)


class R2BucketListAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(R2Bucket, many=True, items_key="buckets")
