"""D1 database endpoint definitions and adapters.

The database listing always reports ``total_count`` and ``total_pages`` as
0, so its pagination policy infers the last page from a short page instead.
"""

from __future__ import annotations

from typing import Any

from ...models import D1Database, D1QueryResult
from ...runtime.paging import PaginationPolicy
from ...runtime.rest import ModelAdapter, RestEndpointSpec
from .common import compact, segment


def databases_path(params: dict[str, Any]) -> str:
    return f"accounts/{segment(params['account_id'])}/d1/database"


def database_path(params: dict[str, Any]) -> str:
    return f"{databases_path(params)}/{segment(params['database_id'])}"


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    filters = params.get("filters")
    if filters is None:
        return {}
    return compact({"name": filters.name})


def build_query_body(params: dict[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {"sql": params["sql"]}
    if params.get("sql_params") is not None:
        body["params"] = list(params["sql_params"])
    return body


def build_update_body(params: dict[str, Any]) -> dict[str, Any]:
    return {"read_replication": {"mode": params["read_replication_mode"]}}


LIST_DATABASES = RestEndpointSpec(
    id="list_databases",
    method="GET",
    build_path=databases_path,
    build_query=build_list_query,
    pagination=PaginationPolicy(per_page=100, trust_total_pages=False),
)

GET_DATABASE = RestEndpointSpec(id="get_database", method="GET", build_path=database_path)

CREATE_DATABASE = RestEndpointSpec(
    id="create_database",
    method="POST",
    build_path=databases_path,
    build_body=lambda p: p["request"].to_body(),
)

UPDATE_DATABASE = RestEndpointSpec(
    id="update_database",
    method="PATCH",
    build_path=database_path,
    build_body=build_update_body,
)

DELETE_DATABASE = RestEndpointSpec(id="delete_database", method="DELETE", build_path=database_path)

QUERY_DATABASE = RestEndpointSpec(
    id="query_database",
    method="POST",
    build_path=lambda p: f"{database_path(p)}/query",
    build_body=build_query_body,
)


class DatabaseAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(D1Database)


class DatabaseListAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(D1Database, many=True)


class QueryResultAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(D1QueryResult, many=True)
