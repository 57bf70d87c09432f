"""R2 object-storage client with billable-usage accounting.

Architecture:
    R2Client turns the primitive calls of an ObjectStorageBackend into the
    operations applications need (listing every object, deleting any number
    of keys, clearing a bucket, uploading large files in parts). Each
    operation returns the R2Result it consumed; when one fails part-way the
    raised error carries the metrics accrued before the failure.

    Listing runs on the cursor pagination engine; bulk deletion runs on the
    batch executor over chunks of at most 1000 keys.

Design Decisions:
    - Listing, deleting and multipart steps are class A operations; reads
      are class B
    - A DeleteObjects request is billed even when it fails, so a failed
      chunk still contributes one class A operation
    - Failed keys are reported once each, in the order they were given
    - A multipart upload that fails is aborted and the abort is billed
    - A cancelled multipart upload is aborted before the cancellation
      propagates
    - Presigned URLs need a backend implementing PresigningBackend; signing
      costs no operations
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from ..core.exceptions import BatchError, ListError, OperationCancelledError, OperationError
from ..models.metrics import R2DataResult, R2Result
from ..models.pagination import CursorResultInfo
from ..models.storage import ListedPart, StoredObject, UploadedPart
from ..runtime.batch import BatchExecutor, BatchItemError, chunked
from ..runtime.cancellation import raise_if_cancelled
from ..runtime.paging import Page, PageRequest, PageStream, paginate_cursor
from .backend import ObjectStorageBackend, PresigningBackend, StorageBackendError

logger = logging.getLogger(__name__)

MiB = 1024 * 1024

MAX_KEYS_PER_DELETE = 1000
MULTIPART_THRESHOLD = 50 * MiB
MIN_PART_SIZE = 5 * MiB
MAX_PART_SIZE = 5 * 1024 * MiB
MAX_PRESIGN_EXPIRY = 7 * 24 * 3600
DEFAULT_PART_SIZE = 50 * MiB

CLASS_A = R2Result(class_a_operations=1)
CLASS_B = R2Result(class_b_operations=1)

Source = bytes | bytearray | memoryview | str | os.PathLike[str]


class R2Client:
    """Object operations on R2 buckets.

    Args:
        backend: S3-compatible backend performing the requests
        multipart_threshold: Payloads of at least this many bytes are uploaded
            in parts
        default_part_size: Part size used when ``upload`` is not given one
        owns_backend: Whether ``close()`` also closes the backend
    """

    def __init__(
        self,
        backend: ObjectStorageBackend,
        *,
        multipart_threshold: int = MULTIPART_THRESHOLD,
        default_part_size: int = DEFAULT_PART_SIZE,
        owns_backend: bool = False,
    ) -> None:
        self._backend = backend
        self._multipart_threshold = multipart_threshold
        self._default_part_size = default_part_size
        self._owns_backend = owns_backend

    @property
    def owns_backend(self) -> bool:
        return self._owns_backend

    async def close(self) -> None:
        """Close the backend if this client owns it and it can be closed."""
        close = getattr(self._backend, "close", None)
        if self._owns_backend and close is not None:
            await close()

    async def __aenter__(self) -> R2Client:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def iter_objects(
        self,
        bucket: str,
        prefix: str | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[StoredObject]:
        """Lazily iterate over the objects of a bucket, one page per request.

        ``metrics`` on the returned stream counts one class A operation per
        page fetched.
        """

        async def fetch(request: PageRequest) -> Page[StoredObject]:
            listing = await self._backend.list_objects(
                bucket, prefix=prefix, continuation_token=request.cursor
            )
            cursor = listing.next_continuation_token if listing.is_truncated else None
            return Page(
                items=listing.objects,
                info=CursorResultInfo(
                    count=len(listing.objects), per_page=request.per_page, cursor=cursor
                ),
                metrics=CLASS_A,
            )

        return paginate_cursor(
            fetch, per_page=MAX_KEYS_PER_DELETE, cancel=cancel, operation="list_objects"
        )

    async def list_objects(
        self,
        bucket: str,
        prefix: str | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> R2DataResult[list[StoredObject]]:
        """List every object of a bucket.

        Raises:
            ListError: A page failed; ``partial_data`` holds the objects listed
                before it
        """
        result = await self.iter_objects(bucket, prefix, cancel=cancel).collect()
        logger.debug(
            "objects_listed",
            extra={"bucket": bucket, "prefix": prefix, "count": len(result.data)},
        )
        return result

    async def list_parts(
        self,
        bucket: str,
        key: str,
        upload_id: str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> R2DataResult[list[ListedPart]]:
        """List the parts uploaded so far for a multipart upload.

        Raises:
            ListError: A page failed; ``partial_data`` holds the parts listed
                before it
        """

        async def fetch(request: PageRequest) -> Page[ListedPart]:
            marker = int(request.cursor) if request.cursor else None
            listing = await self._backend.list_parts(
                bucket, key, upload_id, part_number_marker=marker
            )
            cursor = None
            if listing.is_truncated and listing.next_part_number_marker is not None:
                cursor = str(listing.next_part_number_marker)
            return Page(
                items=listing.parts,
                info=CursorResultInfo(count=len(listing.parts), cursor=cursor),
                metrics=CLASS_A,
            )

        return await paginate_cursor(
            fetch, per_page=MAX_KEYS_PER_DELETE, cancel=cancel, operation="list_parts"
        ).collect()

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    async def delete_object(self, bucket: str, key: str) -> R2Result:
        try:
            await self._backend.delete_object(bucket, key)
        except StorageBackendError as e:
            logger.error(
                "delete_object_failed",
                extra={"bucket": bucket, "key": key, "error_message": str(e)},
            )
            raise OperationError(
                f"Delete failed for s3://{bucket}/{key}", partial_metrics=CLASS_A
            ) from e
        return CLASS_A

    async def delete_objects(
        self,
        bucket: str,
        keys: Iterable[str],
        *,
        continue_on_error: bool = True,
        cancel: asyncio.Event | None = None,
    ) -> R2Result:
        """Delete any number of keys, at most 1000 per request.

        Each request costs one class A operation whether or not it succeeds.

        Raises:
            BatchError: Some keys were not deleted. ``failed_items`` lists them
                without duplicates in input order; ``partial_metrics`` counts
                every request made.
        """
        keys = list(keys)
        if not keys:
            return R2Result()

        async def delete_chunk(chunk: list[str]) -> R2Result:
            try:
                errors = await self._backend.delete_objects(bucket, chunk)
            except StorageBackendError as e:
                raise BatchItemError(
                    f"DeleteObjects request failed for {len(chunk)} keys: {e}",
                    failed_items=chunk,
                    metrics=CLASS_A,
                ) from e
            if errors:
                raise BatchItemError(
                    "; ".join(f"{err.key}: {err.code} {err.message}" for err in errors),
                    failed_items=[err.key for err in errors],
                    metrics=CLASS_A,
                )
            return CLASS_A

        try:
            metrics = await BatchExecutor("delete_objects").execute(
                chunked(keys, MAX_KEYS_PER_DELETE),
                delete_chunk,
                continue_on_error=continue_on_error,
                cancel=cancel,
            )
        except BatchError as e:
            failed = _unique(e.failed_items)
            raise BatchError(
                f"{len(failed)} objects failed to delete from bucket {bucket}",
                failed_items=failed,
                partial_metrics=e.partial_metrics,
            ) from e.__cause__

        logger.info("objects_deleted", extra={"bucket": bucket, "count": len(keys)})
        return metrics

    async def clear_bucket(
        self,
        bucket: str,
        *,
        continue_on_error: bool = True,
        cancel: asyncio.Event | None = None,
    ) -> R2Result:
        """Delete every object in a bucket.

        Lists a page, deletes its keys, and repeats until the listing is
        exhausted. If not a single key of a page could be deleted the
        operation stops, since listing again would return the same keys.

        Raises:
            ListError: Listing failed; ``partial_data`` holds the keys that had
                failed to delete up to that point
            BatchError: Some keys could not be deleted
        """
        metrics = R2Result()
        failed_keys: list[str] = []
        causes: list[Exception] = []
        token: str | None = None

        logger.info("clear_bucket_started", extra={"bucket": bucket})
        while True:
            raise_if_cancelled(cancel, operation="clear_bucket")

            try:
                listing = await self._backend.list_objects(bucket, continuation_token=token)
            except StorageBackendError as e:
                logger.error(
                    "clear_bucket_list_failed", extra={"bucket": bucket, "error_message": str(e)}
                )
                raise ListError(
                    f"Listing objects failed while clearing bucket {bucket}",
                    partial_data=_unique(failed_keys),
                    partial_metrics=metrics,
                ) from (ExceptionGroup("clear_bucket failures", [*causes, e]) if causes else e)

            metrics = metrics + CLASS_A
            more = listing.is_truncated and bool(listing.next_continuation_token)
            # The token marks a position in key order, so deleting the
            # current page does not invalidate it.
            token = listing.next_continuation_token
            keys = [obj.key for obj in listing.objects]

            if keys:
                try:
                    metrics = metrics + await self.delete_objects(
                        bucket, keys, continue_on_error=continue_on_error, cancel=cancel
                    )
                except BatchError as e:
                    metrics = metrics + e.partial_metrics
                    failed_keys.extend(e.failed_items)
                    if isinstance(e.__cause__, Exception):
                        causes.append(e.__cause__)

                    if len(e.failed_items) == len(keys):
                        logger.warning(
                            "clear_bucket_aborted",
                            extra={"bucket": bucket, "failed_in_page": len(keys)},
                        )
                        more = False
                    elif not continue_on_error:
                        raise BatchError(
                            f"Failed to delete {len(e.failed_items)} objects while clearing "
                            f"bucket {bucket}",
                            failed_items=_unique(failed_keys),
                            partial_metrics=metrics,
                        ) from e

            if not more:
                break

        if failed_keys:
            failed = _unique(failed_keys)
            group = ExceptionGroup("clear_bucket failures", causes) if causes else None
            raise BatchError(
                f"Failed to delete {len(failed)} objects while clearing bucket {bucket}",
                failed_items=failed,
                partial_metrics=metrics,
            ) from group

        logger.info(
            "clear_bucket_complete",
            extra={"bucket": bucket, "class_a_operations": metrics.class_a_operations},
        )
        return metrics

    # ------------------------------------------------------------------
    # Upload / download
    # ------------------------------------------------------------------

    async def upload(
        self,
        bucket: str,
        key: str,
        source: Source,
        *,
        part_size: int | None = None,
        cancel: asyncio.Event | None = None,
    ) -> R2Result:
        """Upload bytes or a local file.

        Payloads below the multipart threshold go up in a single PUT; larger
        ones use a multipart upload.
        """
        payload = _Payload.of(source)
        if payload.size < self._multipart_threshold:
            return await self.upload_single_part(bucket, key, await payload.read(0, payload.size))
        return await self._upload_parts(bucket, key, payload, part_size=part_size, cancel=cancel)

    async def upload_single_part(self, bucket: str, key: str, body: bytes) -> R2Result:
        try:
            await self._backend.put_object(bucket, key, body)
        except StorageBackendError as e:
            logger.error(
                "upload_failed", extra={"bucket": bucket, "key": key, "error_message": str(e)}
            )
            raise OperationError(f"Single-part upload failed for s3://{bucket}/{key}") from e
        logger.debug("object_uploaded", extra={"bucket": bucket, "key": key, "bytes": len(body)})
        return R2Result(class_a_operations=1, ingress_bytes=len(body))

    async def upload_multipart(
        self,
        bucket: str,
        key: str,
        source: Source,
        *,
        part_size: int | None = None,
        cancel: asyncio.Event | None = None,
    ) -> R2Result:
        """Upload in parts regardless of size; the upload is aborted on failure."""
        return await self._upload_parts(
            bucket, key, _Payload.of(source), part_size=part_size, cancel=cancel
        )

    async def _upload_parts(
        self,
        bucket: str,
        key: str,
        payload: _Payload,
        *,
        part_size: int | None = None,
        cancel: asyncio.Event | None = None,
    ) -> R2Result:
        init = await self.initiate_multipart_upload(bucket, key)
        upload_id = init.data
        metrics = init.metrics
        chunk_size = min(max(part_size or self._default_part_size, MIN_PART_SIZE), MAX_PART_SIZE)
        parts: list[UploadedPart] = []

        try:
            position = 0
            part_number = 1
            while position < payload.size:
                raise_if_cancelled(cancel, operation="upload_multipart")
                length = min(chunk_size, payload.size - position)
                body = await payload.read(position, length)
                etag = await self._backend.upload_part(bucket, key, upload_id, part_number, body)
                parts.append(UploadedPart(part_number=part_number, etag=etag))
                metrics = metrics + R2Result(class_a_operations=1, ingress_bytes=length)
                position += length
                part_number += 1

            metrics = metrics + await self.complete_multipart_upload(bucket, key, upload_id, parts)
        except asyncio.CancelledError as e:
            logger.warning(
                "multipart_upload_cancelled",
                extra={"bucket": bucket, "key": key, "upload_id": upload_id},
            )
            try:
                await asyncio.shield(self.abort_multipart_upload(bucket, key, upload_id))
            except OperationError as abort_error:
                e.add_note(f"Aborting upload {upload_id} also failed: {abort_error.__cause__}")
            raise
        except Exception as e:
            logger.error(
                "multipart_upload_failed",
                extra={"bucket": bucket, "key": key, "upload_id": upload_id, "error_message": str(e)},
            )
            try:
                metrics = metrics + await self.abort_multipart_upload(bucket, key, upload_id)
            except OperationError as abort_error:
                metrics = metrics + abort_error.partial_metrics
                e.add_note(f"Aborting upload {upload_id} also failed: {abort_error.__cause__}")
            if isinstance(e, OperationCancelledError):
                raise
            raise OperationError(
                f"Multipart upload failed for s3://{bucket}/{key} and was aborted",
                partial_metrics=metrics,
            ) from e

        logger.debug(
            "object_uploaded",
            extra={"bucket": bucket, "key": key, "bytes": payload.size, "parts": len(parts)},
        )
        return metrics

    async def initiate_multipart_upload(self, bucket: str, key: str) -> R2DataResult[str]:
        try:
            upload_id = await self._backend.create_multipart_upload(bucket, key)
        except StorageBackendError as e:
            raise OperationError(
                f"Failed to initiate multipart upload for s3://{bucket}/{key}",
                partial_metrics=CLASS_A,
            ) from e
        return R2DataResult(data=upload_id, metrics=CLASS_A)

    async def complete_multipart_upload(
        self, bucket: str, key: str, upload_id: str, parts: Sequence[UploadedPart]
    ) -> R2Result:
        try:
            await self._backend.complete_multipart_upload(bucket, key, upload_id, parts)
        except StorageBackendError as e:
            raise OperationError(
                f"Failed to complete multipart upload for s3://{bucket}/{key}",
                partial_metrics=CLASS_A,
            ) from e
        return CLASS_A

    async def abort_multipart_upload(self, bucket: str, key: str, upload_id: str) -> R2Result:
        try:
            await self._backend.abort_multipart_upload(bucket, key, upload_id)
        except StorageBackendError as e:
            logger.error("multipart_abort_failed", extra={"upload_id": upload_id})
            raise OperationError(
                f"Failed to abort multipart upload {upload_id}", partial_metrics=CLASS_A
            ) from e
        logger.info("multipart_upload_aborted", extra={"upload_id": upload_id})
        return CLASS_A

    async def read_object(self, bucket: str, key: str) -> R2DataResult[bytes]:
        """Fetch an object's content (one class B operation)."""
        try:
            data = await self._backend.get_object(bucket, key)
        except StorageBackendError as e:
            logger.error(
                "download_failed", extra={"bucket": bucket, "key": key, "error_message": str(e)}
            )
            raise OperationError(
                f"Download failed for s3://{bucket}/{key}", partial_metrics=CLASS_B
            ) from e
        return R2DataResult(data=data, metrics=R2Result(class_b_operations=1, egress_bytes=len(data)))

    async def download(self, bucket: str, key: str, path: str | os.PathLike[str]) -> R2Result:
        """Download an object into a local file."""
        result = await self.read_object(bucket, key)
        await asyncio.to_thread(Path(path).write_bytes, result.data)
        return result.metrics

    # ------------------------------------------------------------------
    # Presigned URLs
    # ------------------------------------------------------------------

    async def create_presigned_get_url(
        self, bucket: str, key: str, *, expires_in: int = 3600
    ) -> str:
        """Sign a URL that downloads one object without credentials."""
        return await self._presign("get_object", {"Bucket": bucket, "Key": key}, expires_in)

    async def create_presigned_put_url(
        self,
        bucket: str,
        key: str,
        *,
        expires_in: int = 3600,
        content_type: str | None = None,
        content_length: int | None = None,
    ) -> str:
        """Sign a URL that uploads one object.

        A ``content_type`` or ``content_length`` given here is part of the
        signature, so the uploader must send the same values.
        """
        params: dict[str, Any] = {"Bucket": bucket, "Key": key}
        if content_type is not None:
            params["ContentType"] = content_type
        if content_length is not None:
            params["ContentLength"] = content_length
        return await self._presign("put_object", params, expires_in)

    async def create_presigned_upload_part_url(
        self, bucket: str, key: str, upload_id: str, part_number: int, *, expires_in: int = 3600
    ) -> str:
        return await self._presign(
            "upload_part",
            {"Bucket": bucket, "Key": key, "UploadId": upload_id, "PartNumber": part_number},
            expires_in,
        )

    async def create_presigned_upload_part_urls(
        self,
        bucket: str,
        key: str,
        upload_id: str,
        part_numbers: Iterable[int],
        *,
        expires_in: int = 3600,
    ) -> dict[int, str]:
        """Sign one upload URL per part number."""
        return {
            number: await self.create_presigned_upload_part_url(
                bucket, key, upload_id, number, expires_in=expires_in
            )
            for number in part_numbers
        }

    async def _presign(self, method: str, params: Mapping[str, Any], expires_in: int) -> str:
        if not 1 <= expires_in <= MAX_PRESIGN_EXPIRY:
            raise ValueError(f"expires_in must be between 1 and {MAX_PRESIGN_EXPIRY} seconds")
        if not isinstance(self._backend, PresigningBackend):
            raise OperationError(f"{type(self._backend).__name__} cannot sign URLs")
        try:
            return await self._backend.generate_presigned_url(method, params, expires_in)
        except StorageBackendError as e:
            raise OperationError(f"Failed to presign {method} for {params.get('Key')}") from e


class _Payload:
    """Random-access view over in-memory bytes or a local file."""

    def __init__(self, size: int, data: bytes | None = None, path: Path | None = None) -> None:
        self.size = size
        self._data = data
        self._path = path

    @classmethod
    def of(cls, source: Source) -> _Payload:
        if isinstance(source, bytes | bytearray | memoryview):
            data = bytes(source)
            return cls(len(data), data=data)
        path = Path(source)
        return cls(path.stat().st_size, path=path)

    async def read(self, offset: int, length: int) -> bytes:
        if self._data is not None:
            return self._data[offset : offset + length]
        if self._path is None:
            raise ValueError("Payload has neither data nor a path")
        return await asyncio.to_thread(_read_range, self._path, offset, length)


def _read_range(path: Path, offset: int, length: int) -> bytes:
    with path.open("rb") as fh:
        fh.seek(offset)
        return fh.read(length)


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))
