"""In-memory object-storage backend for R2 client tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from flarekit.api.models import (
    DeleteObjectError,
    ListedPart,
    ObjectListing,
    PartListing,
    StoredObject,
    UploadedPart,
)
from flarekit.api.r2 import StorageBackendError


class FakeBackend:
    """Dict-backed bucket store implementing ObjectStorageBackend.

    Failure knobs:
        fail_keys: keys reported as per-key DeleteObjects errors
        fail_delete_batches: zero-based DeleteObjects call indexes that fail outright
        fail_list_at: zero-based list_objects call index that fails
        fail_part: part number whose upload fails
        fail_abort: whether abort_multipart_upload fails
        fail_put: whether put_object fails
    """

    def __init__(self, page_size: int = 1000) -> None:
        self.page_size = page_size
        self.buckets: dict[str, dict[str, bytes]] = {}
        self.uploads: dict[str, dict[int, bytes]] = {}
        self.aborted: list[str] = []
        self.completed: list[str] = []
        self.delete_batches: list[list[str]] = []
        self.list_calls = 0

        self.fail_keys: set[str] = set()
        self.fail_delete_batches: set[int] = set()
        self.fail_list_at: int | None = None
        self.fail_part: int | None = None
        self.fail_abort = False
        self.fail_put = False

    def fill(self, bucket: str, count: int, prefix: str = "k") -> list[str]:
        keys = [f"{prefix}{i:05d}" for i in range(count)]
        store = self.buckets.setdefault(bucket, {})
        for key in keys:
            store[key] = b"x"
        return keys

    async def list_objects(self, bucket, *, prefix=None, continuation_token=None, max_keys=None):
        call = self.list_calls
        self.list_calls += 1
        if self.fail_list_at is not None and call == self.fail_list_at:
            raise StorageBackendError("list failed", code="InternalError", status_code=500)

        keys = sorted(k for k in self.buckets.get(bucket, {}) if not prefix or k.startswith(prefix))
        if continuation_token is not None:
            keys = [k for k in keys if k > continuation_token]
        size = max_keys or self.page_size
        page, rest = keys[:size], keys[size:]
        return ObjectListing(
            objects=[StoredObject(key=k, size=len(self.buckets[bucket][k])) for k in page],
            is_truncated=bool(rest),
            next_continuation_token=page[-1] if rest else None,
        )

    async def list_parts(self, bucket, key, upload_id, *, part_number_marker=None):
        numbers = sorted(n for n in self.uploads[upload_id] if n > (part_number_marker or 0))
        page, rest = numbers[:2], numbers[2:]
        return PartListing(
            parts=[ListedPart(part_number=n, etag=f"etag-{n}") for n in page],
            is_truncated=bool(rest),
            next_part_number_marker=page[-1] if rest else None,
        )

    async def delete_object(self, bucket, key):
        if key in self.fail_keys:
            raise StorageBackendError("AccessDenied", code="AccessDenied", status_code=403)
        self.buckets.get(bucket, {}).pop(key, None)

    async def delete_objects(self, bucket, keys: Sequence[str]):
        call = len(self.delete_batches)
        self.delete_batches.append(list(keys))
        if call in self.fail_delete_batches:
            raise StorageBackendError("DeleteObjects failed", status_code=503)
        errors = []
        for key in keys:
            if key in self.fail_keys:
                errors.append(DeleteObjectError(key=key, code="AccessDenied", message="denied"))
            else:
                self.buckets.get(bucket, {}).pop(key, None)
        return errors

    async def put_object(self, bucket, key, body):
        if self.fail_put:
            raise StorageBackendError("put failed")
        self.buckets.setdefault(bucket, {})[key] = body

    async def get_object(self, bucket, key):
        try:
            return self.buckets[bucket][key]
        except KeyError:
            raise StorageBackendError("missing", code="NoSuchKey", status_code=404) from None

    async def create_multipart_upload(self, bucket, key):
        upload_id = f"upload-{len(self.uploads) + 1}"
        self.uploads[upload_id] = {}
        return upload_id

    async def upload_part(self, bucket, key, upload_id, part_number, body):
        if part_number == self.fail_part:
            raise StorageBackendError("part failed", status_code=500)
        self.uploads[upload_id][part_number] = body
        return f"etag-{part_number}"

    async def complete_multipart_upload(self, bucket, key, upload_id, parts: Sequence[UploadedPart]):
        data = b"".join(self.uploads[upload_id][p.part_number] for p in parts)
        self.buckets.setdefault(bucket, {})[key] = data
        self.completed.append(upload_id)

    async def abort_multipart_upload(self, bucket, key, upload_id):
        if self.fail_abort:
            raise StorageBackendError("abort failed")
        self.aborted.append(upload_id)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def make_backend():
    """Factory for backends with a custom listing page size."""
    return FakeBackend
