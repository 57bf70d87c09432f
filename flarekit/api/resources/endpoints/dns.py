"""DNS record endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from ...models import DnsRecord
from ...runtime.paging import PaginationPolicy
from ...runtime.rest import ModelAdapter, RestEndpointSpec
from .common import compact, segment


def records_path(params: dict[str, Any]) -> str:
    return f"zones/{segment(params['zone_id'])}/dns_records"


def record_path(params: dict[str, Any]) -> str:
    return f"{records_path(params)}/{segment(params['record_id'])}"


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for the DNS record listing."""
    filters = params.get("filters")
    if filters is None:
        return {}
    return compact({"type": filters.type, "name": filters.name, "content": filters.content})


LIST_DNS_RECORDS = RestEndpointSpec(
    id="list_dns_records",
    method="GET",
    build_path=records_path,
    build_query=build_list_query,
    pagination=PaginationPolicy(per_page=100),
)

GET_DNS_RECORD = RestEndpointSpec(id="get_dns_record", method="GET", build_path=record_path)

CREATE_DNS_RECORD = RestEndpointSpec(
    id="create_dns_record",
    method="POST",
    build_path=records_path,
    build_body=lambda p: p["request"].to_body(),
)

# PUT overwrites the whole record.
UPDATE_DNS_RECORD = RestEndpointSpec(
    id="update_dns_record",
    method="PUT",
    build_path=record_path,
    build_body=lambda p: p["request"].to_body(),
)

DELETE_DNS_RECORD = RestEndpointSpec(id="delete_dns_record", method="DELETE", build_path=record_path)


class DnsRecordAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(DnsRecord)


class DnsRecordListAdapter(ModelAdapter):
    def __init__(self) -> None:
        super().__init__(DnsRecord, many=True)
