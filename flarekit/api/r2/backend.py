"""Object-storage backend protocol used by the R2 client.

R2 speaks the S3 protocol. The client does not sign or send S3 requests
itself; it drives an ObjectStorageBackend, which is any object exposing the
coroutines below. Backends report failures by raising StorageBackendError.
S3Backend (s3.py) is the implementation that talks to R2.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ..models.storage import DeleteObjectError, ObjectListing, PartListing, UploadedPart


@dataclass(frozen=True)
class R2Endpoint:
    """Resolved connection parameters handed to a backend factory."""

    endpoint_url: str
    region: str
    access_key_id: str
    secret_access_key: str


class StorageBackendError(Exception):
    """A request to the object-storage backend failed.

    Attributes:
        code: S3 error code, if the backend reported one (e.g. ``NoSuchKey``)
        status_code: HTTP status of the failed request, if known
    """

    def __init__(
        self, message: str, code: str | None = None, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


@runtime_checkable
class ObjectStorageBackend(Protocol):
    """S3-compatible operations required by R2Client."""

    async def list_objects(
        self,
        bucket: str,
        *,
        prefix: str | None = None,
        continuation_token: str | None = None,
        max_keys: int | None = None,
    ) -> ObjectListing: ...

    async def list_parts(
        self,
        bucket: str,
        key: str,
        upload_id: str,
        *,
        part_number_marker: int | None = None,
    ) -> PartListing: ...

    async def delete_object(self, bucket: str, key: str) -> None: ...

    async def delete_objects(self, bucket: str, keys: Sequence[str]) -> list[DeleteObjectError]:
        """Delete up to 1000 keys in one request; return the per-key failures."""
        ...

    async def put_object(self, bucket: str, key: str, body: bytes) -> None: ...

    async def get_object(self, bucket: str, key: str) -> bytes: ...

    async def create_multipart_upload(self, bucket: str, key: str) -> str:
        """Start a multipart upload and return its upload id."""
        ...

    async def upload_part(
        self, bucket: str, key: str, upload_id: str, part_number: int, body: bytes
    ) -> str:
        """Upload one part and return its ETag."""
        ...

    async def complete_multipart_upload(
        self, bucket: str, key: str, upload_id: str, parts: Sequence[UploadedPart]
    ) -> None: ...

    async def abort_multipart_upload(self, bucket: str, key: str, upload_id: str) -> None: ...


@runtime_checkable
class PresigningBackend(Protocol):
    """Backends that can sign URLs for direct client access."""

    async def generate_presigned_url(
        self, client_method: str, params: Mapping[str, Any], expires_in: int
    ) -> str: ...
