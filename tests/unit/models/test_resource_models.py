"""Unit tests for resource models and request bodies."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from flarekit.api.core import D1Jurisdiction, MemberStatus, ZoneType
from flarekit.api.models import (
    AddMemberRequest,
    CreateD1DatabaseRequest,
    CreateZoneRequest,
    CursorResultInfo,
    ResultInfo,
    Zone,
)


class TestZone:
    """Test zone decoding."""

    def test_decodes_api_payload(self):
        """Test a realistic payload with unknown fields."""
        zone = Zone.model_validate(
            {
                "id": "023e105f4ecef8ad9ca31a8372d0c353",
                "name": "example.com",
                "status": "active",
                "type": "full",
                "plan": {"id": "free", "name": "Free Website", "price": 0},
                "name_servers": ["bob.ns.cloudflare.com"],
                "created_on": "2014-01-01T05:20:00.12345Z",
                "meta": {"step": 2},
            }
        )
        assert zone.type == ZoneType.FULL
        assert zone.plan.price == Decimal("0")
        assert zone.created_on.year == 2014

    def test_empty_id_rejected(self):
        """Test identifiers must be non-empty."""
        with pytest.raises(ValidationError):
            Zone.model_validate({"id": "", "name": "x", "status": "active"})


class TestRequestBodies:
    """Test request serialization."""

    def test_create_zone_body(self):
        """Test the zone type is sent as its value."""
        body = CreateZoneRequest(name="example.com", account_id="a", type="partial").to_body()
        assert body == {"name": "example.com", "account": {"id": "a"}, "type": "partial"}

    def test_add_member_body(self):
        """Test member invitation body."""
        body = AddMemberRequest(
            email="x@example.com", role_ids=["r1"], status=MemberStatus.ACCEPTED
        ).to_body()
        assert body == {"email": "x@example.com", "roles": ["r1"], "status": "accepted"}

    def test_add_member_requires_role(self):
        """Test at least one role is required."""
        with pytest.raises(ValidationError):
            AddMemberRequest(email="x@example.com", role_ids=[])

    def test_create_database_body(self):
        """Test unset options are omitted."""
        body = CreateD1DatabaseRequest(name="db", jurisdiction=D1Jurisdiction.EU).to_body()
        assert body == {"name": "db", "jurisdiction": "eu"}


class TestResultInfo:
    """Test pagination metadata."""

    def test_page_info_defaults(self):
        """Test missing totals default to zero."""
        info = ResultInfo.model_validate({"page": 1, "per_page": 100})
        assert info.total_pages == 0
        assert info.cursor is None

    def test_cursor_info_has_more(self):
        """Test has_more follows the cursor."""
        assert CursorResultInfo(cursor="abc").has_more
        assert not CursorResultInfo(cursor="").has_more
