"""Zone endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from ...models import Zone
from ...runtime.paging import PaginationPolicy
from ...runtime.rest import ModelAdapter, RestEndpointSpec
from .common import compact, segment


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for the zone listing."""
    filters = params.get("filters")
    if filters is None:
        return {}
    return compact(
        {
            "name": filters.name,
            "status": filters.status,
            "account.id": filters.account_id,
            "order": filters.order,
            "direction": filters.direction,
        }
    )


def zone_path(params: dict[str, Any]) -> str:
    return f"zones/{segment(params['zone_id'])}"


LIST_ZONES = RestEndpointSpec(
    id="list_zones",
    method="GET",
    build_path=lambda p: "zones",
    build_query=build_list_query,
    pagination=PaginationPolicy(per_page=50),
)

GET_ZONE = RestEndpointSpec(id="get_zone", method="GET", build_path=zone_path)

CREATE_ZONE = RestEndpointSpec(
    id="create_zone",
    method="POST",
    build_path=lambda p: "zones",
    build_body=lambda p: p["request"].to_body(),
)

DELETE_ZONE = RestEndpointSpec(id="delete_zone", method="DELETE", build_path=zone_path)


class ZoneAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(Zone)


class ZoneListAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(Zone, many=True)
