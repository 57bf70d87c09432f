"""R2 object storage."""

from .backend import ObjectStorageBackend, PresigningBackend, R2Endpoint, StorageBackendError
from .client import (
    DEFAULT_PART_SIZE,
    MAX_KEYS_PER_DELETE,
    MAX_PART_SIZE,
    MAX_PRESIGN_EXPIRY,
    MIN_PART_SIZE,
    MULTIPART_THRESHOLD,
    R2Client,
)
from .factory import BackendFactory, R2ClientFactory
from .s3 import S3Backend

__all__ = [
    "BackendFactory",
    "DEFAULT_PART_SIZE",
    "MAX_KEYS_PER_DELETE",
    "MAX_PART_SIZE",
    "MAX_PRESIGN_EXPIRY",
    "MIN_PART_SIZE",
    "MULTIPART_THRESHOLD",
    "ObjectStorageBackend",
    "PresigningBackend",
    "R2Client",
    "R2ClientFactory",
    "R2Endpoint",
    "S3Backend",
    "StorageBackendError",
]
