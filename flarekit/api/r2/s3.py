"""ObjectStorageBackend over aiobotocore's S3 client.

R2 accepts SigV4-signed S3 requests at its account endpoint; botocore does
the signing. The S3 client is opened on first use and, unless one was
passed in, owned by the backend until ``close()``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import AsyncExitStack, contextmanager
from typing import Any

from aiobotocore.session import AioSession, get_session
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..models.storage import (
    DeleteObjectError,
    ListedPart,
    ObjectListing,
    PartListing,
    StoredObject,
    UploadedPart,
)
from .backend import R2Endpoint, StorageBackendError

logger = logging.getLogger(__name__)

# R2 does not implement every checksum algorithm recent botocore sends by default.
DEFAULT_CONFIG = Config(
    signature_version="s3v4",
    retries={"max_attempts": 3, "mode": "standard"},
    request_checksum_calculation="when_required",
    response_checksum_validation="when_required",
)


class S3Backend:
    """R2 backend built on aiobotocore.

    Args:
        endpoint: Resolved endpoint URL, region and credentials
        session: aiobotocore session used to create the client
        config: botocore client configuration
        client: An open S3 client to use instead of creating one; it is
            borrowed and never closed by the backend
    """

    def __init__(
        self,
        endpoint: R2Endpoint,
        *,
        session: AioSession | None = None,
        config: Config | None = None,
        client: Any = None,
    ) -> None:
        self._endpoint = endpoint
        self._session = session
        self._config = config or DEFAULT_CONFIG
        self._client = client
        self._owns_client = client is None
        self._exit_stack: AsyncExitStack | None = None
        self._lock = asyncio.Lock()

    @property
    def endpoint(self) -> R2Endpoint:
        return self._endpoint

    @property
    def owns_client(self) -> bool:
        return self._owns_client

    async def _s3(self) -> Any:
        if self._client is not None:
            return self._client
        async with self._lock:
            if self._client is None:
                session = self._session or get_session()
                stack = AsyncExitStack()
                self._client = await stack.enter_async_context(
                    session.create_client(
                        "s3",
                        endpoint_url=self._endpoint.endpoint_url,
                        region_name=self._endpoint.region,
                        aws_access_key_id=self._endpoint.access_key_id,
                        aws_secret_access_key=self._endpoint.secret_access_key,
                        config=self._config,
                    )
                )
                self._exit_stack = stack
                logger.debug(
                    "s3_client_opened", extra={"endpoint_url": self._endpoint.endpoint_url}
                )
        return self._client

    async def close(self) -> None:
        """Close the S3 client if this backend opened it."""
        if self._exit_stack is None:
            return
        stack, self._exit_stack = self._exit_stack, None
        self._client = None
        await stack.aclose()
        logger.debug("s3_client_closed", extra={"endpoint_url": self._endpoint.endpoint_url})

    async def __aenter__(self) -> S3Backend:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # ObjectStorageBackend
    # ------------------------------------------------------------------

    async def list_objects(
        self,
        bucket: str,
        *,
        prefix: str | None = None,
        continuation_token: str | None = None,
        max_keys: int | None = None,
    ) -> ObjectListing:
        params = _compact(
            Bucket=bucket, Prefix=prefix, ContinuationToken=continuation_token, MaxKeys=max_keys
        )
        with _translate_errors("ListObjectsV2"):
            response = await (await self._s3()).list_objects_v2(**params)
        return ObjectListing(
            objects=[
                StoredObject(
                    key=item["Key"],
                    size=item.get("Size", 0),
                    etag=item.get("ETag"),
                    last_modified=item.get("LastModified"),
                    storage_class=item.get("StorageClass"),
                )
                for item in response.get("Contents", [])
            ],
            is_truncated=response.get("IsTruncated", False),
            next_continuation_token=response.get("NextContinuationToken"),
        )

    async def list_parts(
        self,
        bucket: str,
        key: str,
        upload_id: str,
        *,
        part_number_marker: int | None = None,
    ) -> PartListing:
        params = _compact(
            Bucket=bucket, Key=key, UploadId=upload_id, PartNumberMarker=part_number_marker
        )
        with _translate_errors("ListParts"):
            response = await (await self._s3()).list_parts(**params)
        marker = response.get("NextPartNumberMarker")
        return PartListing(
            parts=[
                ListedPart(
                    part_number=part["PartNumber"],
                    etag=part["ETag"],
                    size=part.get("Size"),
                    last_modified=part.get("LastModified"),
                )
                for part in response.get("Parts", [])
            ],
            is_truncated=response.get("IsTruncated", False),
            next_part_number_marker=int(marker) if marker is not None else None,
        )

    async def delete_object(self, bucket: str, key: str) -> None:
        with _translate_errors("DeleteObject"):
            await (await self._s3()).delete_object(Bucket=bucket, Key=key)

    async def delete_objects(self, bucket: str, keys: Sequence[str]) -> list[DeleteObjectError]:
        with _translate_errors("DeleteObjects"):
            response = await (await self._s3()).delete_objects(
                Bucket=bucket,
                Delete={"Objects": [{"Key": key} for key in keys], "Quiet": True},
            )
        return [
            DeleteObjectError(key=err["Key"], code=err.get("Code"), message=err.get("Message"))
            for err in response.get("Errors", [])
        ]

    async def put_object(self, bucket: str, key: str, body: bytes) -> None:
        with _translate_errors("PutObject"):
            await (await self._s3()).put_object(Bucket=bucket, Key=key, Body=body)

    async def get_object(self, bucket: str, key: str) -> bytes:
        with _translate_errors("GetObject"):
            response = await (await self._s3()).get_object(Bucket=bucket, Key=key)
            async with response["Body"] as stream:
                return await stream.read()

    async def create_multipart_upload(self, bucket: str, key: str) -> str:
        with _translate_errors("CreateMultipartUpload"):
            response = await (await self._s3()).create_multipart_upload(Bucket=bucket, Key=key)
        return response["UploadId"]

    async def upload_part(
        self, bucket: str, key: str, upload_id: str, part_number: int, body: bytes
    ) -> str:
        with _translate_errors("UploadPart"):
            response = await (await self._s3()).upload_part(
                Bucket=bucket, Key=key, UploadId=upload_id, PartNumber=part_number, Body=body
            )
        return response["ETag"]

    async def complete_multipart_upload(
        self, bucket: str, key: str, upload_id: str, parts: Sequence[UploadedPart]
    ) -> None:
        with _translate_errors("CompleteMultipartUpload"):
            await (await self._s3()).complete_multipart_upload(
                Bucket=bucket,
                Key=key,
                UploadId=upload_id,
                MultipartUpload={
                    "Parts": [{"PartNumber": p.part_number, "ETag": p.etag} for p in parts]
                },
            )

    async def abort_multipart_upload(self, bucket: str, key: str, upload_id: str) -> None:
        with _translate_errors("AbortMultipartUpload"):
            await (await self._s3()).abort_multipart_upload(
                Bucket=bucket, Key=key, UploadId=upload_id
            )

    # ------------------------------------------------------------------
    # PresigningBackend
    # ------------------------------------------------------------------

    async def generate_presigned_url(
        self, client_method: str, params: Mapping[str, Any], expires_in: int
    ) -> str:
        with _translate_errors(f"Presign {client_method}"):
            return await (await self._s3()).generate_presigned_url(
                client_method, Params=dict(params), ExpiresIn=expires_in
            )


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except ClientError as e:
        error = e.response.get("Error", {})
        status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        raise StorageBackendError(
            f"{operation} failed: {error.get('Message') or e}",
            code=error.get("Code"),
            status_code=status,
        ) from e
    except BotoCoreError as e:
        raise StorageBackendError(f"{operation} failed: {e}") from e


def _compact(**params: Any) -> dict[str, Any]:
    return {name: value for name, value in params.items() if value is not None}
