"""Cloudflare REST endpoint registry.

This module collects every endpoint specification of the resource APIs so
they can be looked up by id.
"""

from __future__ import annotations

from ...runtime.rest import RestEndpointSpec
from . import accounts, d1, dns, members, zones

_ENDPOINT_REGISTRY: dict[str, RestEndpointSpec] = {
    spec.id: spec
    for spec in (
        accounts.LIST_ACCOUNTS,
        accounts.GET_ACCOUNT,
        accounts.LIST_R2_BUCKETS,
        accounts.CREATE_R2_BUCKET,
        accounts.GET_R2_BUCKET,
        accounts.DELETE_R2_BUCKET,
        zones.LIST_ZONES,
        zones.GET_ZONE,
        zones.CREATE_ZONE,
        zones.DELETE_ZONE,
        dns.LIST_DNS_RECORDS,
        dns.GET_DNS_RECORD,
        dns.CREATE_DNS_RECORD,
        dns.UPDATE_DNS_RECORD,
        dns.DELETE_DNS_RECORD,
        members.LIST_MEMBERS,
        members.GET_MEMBER,
        members.ADD_MEMBER,
        members.UPDATE_MEMBER_ROLES,
        members.REMOVE_MEMBER,
        members.LIST_ROLES,
        members.GET_ROLE,
        d1.LIST_DATABASES,
        d1.GET_DATABASE,
        d1.CREATE_DATABASE,
        d1.UPDATE_DATABASE,
        d1.DELETE_DATABASE,
        d1.QUERY_DATABASE,
    )
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Get endpoint specification by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "list_zones", "get_dns_record")

    Returns:
        RestEndpointSpec if found, None otherwise
    """
    return _ENDPOINT_REGISTRY.get(endpoint_id)


def list_endpoints() -> list[str]:
    """List all available endpoint IDs."""
    return list(_ENDPOINT_REGISTRY.keys())


def paginated_endpoints() -> list[str]:
    """IDs of the list endpoints that declare a pagination policy."""
    return [spec.id for spec in _ENDPOINT_REGISTRY.values() if spec.pagination is not None]
