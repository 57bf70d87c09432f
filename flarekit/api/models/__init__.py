"""Data models.

Architecture:
    Pydantic v2 models for the Cloudflare wire format and the library's own
    value types. Resource models are frozen; unknown fields in API responses
    are ignored so new provider fields never break decoding.

Model Categories:
    - Envelope: Envelope, ApiMessage, ResultInfo, CursorResultInfo
    - Metrics: R2Result, R2DataResult
    - Resources: Zone, DnsRecord, Account, R2Bucket, AccountMember,
      AccountRole, D1Database
    - Storage: StoredObject, ListedPart, DeleteObjectError
"""

from .metrics import R2DataResult, R2Result, merge
from .account import (
    Account,
    AccountSettings,
    CreateR2BucketRequest,
    ListAccountsFilters,
    R2Bucket,
)
from .d1 import (
    CreateD1DatabaseRequest,
    D1Database,
    D1QueryMeta,
    D1QueryResult,
    D1ReadReplication,
    ListD1DatabasesFilters,
)
from .dns import DnsRecord, DnsRecordRequest, DnsRecordSettings, ListDnsRecordsFilters
from .envelope import ApiMessage, Envelope
from .member import AccountMember, AddMemberRequest, MemberUser
from .pagination import CursorResultInfo, ResultInfo
from .role import AccountRole, PermissionGrant
from .storage import (
    DeleteObjectError,
    ListedPart,
    ObjectListing,
    PartListing,
    StoredObject,
    UploadedPart,
)
from .zone import CreateZoneRequest, ListZonesFilters, Zone, ZoneAccount, ZonePlan

__all__ = [
    "R2Result",
    "R2DataResult",
    "merge",
    "Envelope",
    "ApiMessage",
    "ResultInfo",
    "CursorResultInfo",
    "Account",
    "AccountSettings",
    "ListAccountsFilters",
    "R2Bucket",
    "CreateR2BucketRequest",
    "Zone",
    "ZoneAccount",
    "ZonePlan",
    "ListZonesFilters",
    "CreateZoneRequest",
    "DnsRecord",
    "DnsRecordRequest",
    "DnsRecordSettings",
    "ListDnsRecordsFilters",
    "AccountMember",
    "MemberUser",
    "AddMemberRequest",
    "AccountRole",
    "PermissionGrant",
    "D1Database",
    "D1ReadReplication",
    "D1QueryMeta",
    "D1QueryResult",
    "ListD1DatabasesFilters",
    "CreateD1DatabaseRequest",
    "StoredObject",
    "ObjectListing",
    "ListedPart",
    "PartListing",
    "DeleteObjectError",
    "UploadedPart",
]
