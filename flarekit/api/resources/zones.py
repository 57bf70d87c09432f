"""Zones API."""

from __future__ import annotations

import asyncio
from typing import Any

from ..core.base import ApiResource, require_id
from ..models import CreateZoneRequest, ListZonesFilters, Zone
from ..runtime.paging import Page, PageStream
from ..runtime.rest import ResponseAdapter
from .endpoints import zones as endpoints


class ZonesApi(ApiResource):
    """Create, inspect and remove zones."""

    async def list_zones(self, filters: ListZonesFilters | None = None) -> Page[Zone]:
        """Fetch a single page of zones.

        ``filters.page`` and ``filters.per_page`` select the page; the other
        filters narrow the listing.
        """
        return await self._fetch_page(
            endpoints.LIST_ZONES,
            endpoints.ZoneListAdapter(),
            {"filters": filters},
            page=filters.page if filters else None,
            per_page=filters.per_page if filters else None,
        )

    def list_all_zones(
        self,
        filters: ListZonesFilters | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[Zone]:
        """Lazily iterate over every zone matching ``filters``."""
        return self._paginate(
            endpoints.LIST_ZONES,
            endpoints.ZoneListAdapter(),
            {"filters": filters},
            per_page=filters.per_page if filters else None,
            cancel=cancel,
        )

    async def get_zone(self, zone_id: str) -> Zone:
        params = {"zone_id": require_id(zone_id, "zone_id")}
        return await self._run(endpoints.GET_ZONE, endpoints.ZoneAdapter(), params)

    async def create_zone(self, request: CreateZoneRequest) -> Zone:
        return await self._run(endpoints.CREATE_ZONE, endpoints.ZoneAdapter(), {"request": request})

    async def delete_zone(self, zone_id: str) -> str:
        """Delete a zone and return the id Cloudflare reports as deleted."""
        params = {"zone_id": require_id(zone_id, "zone_id")}
        result: Any = await self._run(endpoints.DELETE_ZONE, ResponseAdapter(), params)
        return result.get("id", zone_id) if isinstance(result, dict) else zone_id
