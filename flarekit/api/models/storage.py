"""R2 object-storage models.

These describe what an S3-compatible backend returns to the R2 client.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StoredObject(BaseModel):
    key: str = Field(..., min_length=1)
    size: int = Field(default=0, ge=0)
    etag: str | None = None
    last_modified: datetime | None = None
    storage_class: str | None = None

    model_config = ConfigDict(frozen=True)


class ObjectListing(BaseModel):
    """One page of a ListObjectsV2 call."""

    objects: list[StoredObject] = []
    is_truncated: bool = False
    next_continuation_token: str | None = None

    model_config = ConfigDict(frozen=True)


class ListedPart(BaseModel):
    part_number: int = Field(..., ge=1)
    etag: str
    size: int | None = None
    last_modified: datetime | None = None

    model_config = ConfigDict(frozen=True)


class PartListing(BaseModel):
    """One page of a ListParts call."""

    parts: list[ListedPart] = []
    is_truncated: bool = False
    next_part_number_marker: int | None = None

    model_config = ConfigDict(frozen=True)


class DeleteObjectError(BaseModel):
    """A per-key failure reported inside a successful DeleteObjects response."""

    key: str
    code: str | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class UploadedPart(BaseModel):
    part_number: int = Field(..., ge=1)
    etag: str

    model_config = ConfigDict(frozen=True)
