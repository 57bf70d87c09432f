"""DNS records API."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from ..core.base import ApiResource, require_id
from ..core.enums import DnsRecordType
from ..models import DnsRecord, DnsRecordRequest, ListDnsRecordsFilters, R2Result
from ..runtime.batch import BatchExecutor
from ..runtime.paging import Page, PageStream
from ..runtime.rest import ResponseAdapter
from .endpoints import dns as endpoints


class DnsApi(ApiResource):
    """Manage the DNS records of a zone."""

    async def list_dns_records(
        self, zone_id: str, filters: ListDnsRecordsFilters | None = None
    ) -> Page[DnsRecord]:
        return await self._fetch_page(
            endpoints.LIST_DNS_RECORDS,
            endpoints.DnsRecordListAdapter(),
            {"zone_id": require_id(zone_id, "zone_id"), "filters": filters},
            page=filters.page if filters else None,
            per_page=filters.per_page if filters else None,
        )

    def list_all_dns_records(
        self,
        zone_id: str,
        filters: ListDnsRecordsFilters | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[DnsRecord]:
        return self._paginate(
            endpoints.LIST_DNS_RECORDS,
            endpoints.DnsRecordListAdapter(),
            {"zone_id": require_id(zone_id, "zone_id"), "filters": filters},
            per_page=filters.per_page if filters else None,
            cancel=cancel,
        )

    async def find_dns_record_by_name(
        self, zone_id: str, name: str, record_type: DnsRecordType | None = None
    ) -> DnsRecord | None:
        """First record with exactly this name (and type), or None."""
        page = await self.list_dns_records(
            zone_id, ListDnsRecordsFilters(name=require_id(name, "name"), type=record_type)
        )
        return page.items[0] if page.items else None

    async def get_dns_record(self, zone_id: str, record_id: str) -> DnsRecord:
        params = {
            "zone_id": require_id(zone_id, "zone_id"),
            "record_id": require_id(record_id, "record_id"),
        }
        return await self._run(endpoints.GET_DNS_RECORD, endpoints.DnsRecordAdapter(), params)

    async def create_dns_record(self, zone_id: str, request: DnsRecordRequest) -> DnsRecord:
        params = {"zone_id": require_id(zone_id, "zone_id"), "request": request}
        return await self._run(endpoints.CREATE_DNS_RECORD, endpoints.DnsRecordAdapter(), params)

    async def update_dns_record(
        self, zone_id: str, record_id: str, request: DnsRecordRequest
    ) -> DnsRecord:
        """Overwrite an existing record."""
        params = {
            "zone_id": require_id(zone_id, "zone_id"),
            "record_id": require_id(record_id, "record_id"),
            "request": request,
        }
        return await self._run(endpoints.UPDATE_DNS_RECORD, endpoints.DnsRecordAdapter(), params)

    async def delete_dns_record(self, zone_id: str, record_id: str) -> None:
        params = {
            "zone_id": require_id(zone_id, "zone_id"),
            "record_id": require_id(record_id, "record_id"),
        }
        await self._run(endpoints.DELETE_DNS_RECORD, ResponseAdapter(), params)

    async def delete_dns_records(
        self,
        zone_id: str,
        record_ids: Sequence[str],
        *,
        continue_on_error: bool = True,
        cancel: asyncio.Event | None = None,
    ) -> None:
        """Delete several records one request at a time.

        Raises:
            BatchError: ``failed_items`` holds the ids of records that could
                not be deleted, in the order they were given
        """
        zone_id = require_id(zone_id, "zone_id")
        for record_id in record_ids:
            require_id(record_id, "record_id")

        async def delete_one(record_id: str) -> R2Result:
            await self.delete_dns_record(zone_id, record_id)
            return R2Result()

        await BatchExecutor("delete_dns_records").execute(
            record_ids, delete_one, continue_on_error=continue_on_error, cancel=cancel
        )
