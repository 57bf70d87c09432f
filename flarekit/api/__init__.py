"""flarekit.api - Typed async client for the Cloudflare administrative API and R2."""

from .client import CloudflareApiClient
from .config import (
    CloudflareApiOptions,
    R2Settings,
    RateLimitingOptions,
    validate_options,
    validate_r2_settings,
)
from .core import (
    ApiError,
    BatchError,
    ClientClosedError,
    CloudflareError,
    ConfigurationError,
    D1Jurisdiction,
    DnsRecordType,
    ListError,
    MemberStatus,
    OperationCancelledError,
    OperationError,
    ProviderError,
    R2Jurisdiction,
    R2LocationHint,
    RateLimitError,
    TransportError,
    ValidationError,
    ZoneStatus,
    ZoneType,
)
from .models import R2DataResult, R2Result, merge
from .r2 import ObjectStorageBackend, R2Client, R2ClientFactory, S3Backend, StorageBackendError
from .runtime import BatchExecutor, Page, PageStream, paginate_cursor, paginate_pages

__version__ = "0.1.0"

__all__ = [
    # Client
    "CloudflareApiClient",
    "R2Client",
    "R2ClientFactory",
    "S3Backend",
    "ObjectStorageBackend",
    "StorageBackendError",
    # Configuration
    "CloudflareApiOptions",
    "RateLimitingOptions",
    "R2Settings",
    "validate_options",
    "validate_r2_settings",
    # Metrics
    "R2Result",
    "R2DataResult",
    "merge",
    # Runtime
    "BatchExecutor",
    "Page",
    "PageStream",
    "paginate_pages",
    "paginate_cursor",
    # Enums
    "ZoneStatus",
    "ZoneType",
    "DnsRecordType",
    "MemberStatus",
    "D1Jurisdiction",
    "R2Jurisdiction",
    "R2LocationHint",
    # Exceptions
    "CloudflareError",
    "ConfigurationError",
    "ValidationError",
    "ClientClosedError",
    "ProviderError",
    "TransportError",
    "RateLimitError",
    "ApiError",
    "OperationError",
    "BatchError",
    "ListError",
    "OperationCancelledError",
]
