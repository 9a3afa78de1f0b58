"""
Core types for object store responses.

Store responses arrive as loosely-typed dicts from boto3. These models make
every optional field explicit and raise ``MalformedResponseError`` where the
tool cannot proceed without a value.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .exceptions import MalformedResponseError


class VersioningStatus(str, Enum):
    """Bucket versioning status"""

    ENABLED = "Enabled"
    SUSPENDED = "Suspended"
    UNSET = "Unset"

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> "VersioningStatus":
        status = response.get("Status")
        if status is None:
            return cls.UNSET
        try:
            return cls(status)
        except ValueError:
            return cls.UNSET


class ObjectVersion(BaseModel):
    """One stored revision of a key"""

    version_id: str
    entity_tag: str
    size: int = Field(0, ge=0)
    key: Optional[str] = None
    is_latest: Optional[bool] = None
    last_modified: Optional[datetime] = None

    @classmethod
    def from_response(cls, entry: Dict[str, Any]) -> "ObjectVersion":
        """
        Build a version from a ListObjectVersions ``Versions`` entry.

        Raises:
            MalformedResponseError: If VersionId or ETag is absent
        """
        version_id = entry.get("VersionId")
        if version_id is None:
            raise MalformedResponseError("list_object_versions", "VersionId")
        entity_tag = entry.get("ETag")
        if entity_tag is None:
            raise MalformedResponseError("list_object_versions", "ETag")

        return cls(
            version_id=version_id,
            entity_tag=entity_tag,
            size=entry.get("Size") or 0,
            key=entry.get("Key"),
            is_latest=entry.get("IsLatest"),
            last_modified=entry.get("LastModified"),
        )


class ObjectSummary(BaseModel):
    """One entry of an object listing"""

    key: Optional[str] = None
    size: Optional[int] = None
    entity_tag: Optional[str] = None
    last_modified: Optional[datetime] = None

    @classmethod
    def from_response(cls, entry: Dict[str, Any]) -> "ObjectSummary":
        return cls(
            key=entry.get("Key"),
            size=entry.get("Size"),
            entity_tag=entry.get("ETag"),
            last_modified=entry.get("LastModified"),
        )


class PutResult(BaseModel):
    """Outcome of a put-object call"""

    key: str
    version_id: str
    entity_tag: Optional[str] = None
    checksum_sha256: Optional[str] = None

    @classmethod
    def from_response(cls, key: str, response: Dict[str, Any]) -> "PutResult":
        version_id = response.get("VersionId")
        if version_id is None:
            raise MalformedResponseError("put_object", "VersionId")
        return cls(
            key=key,
            version_id=version_id,
            entity_tag=response.get("ETag"),
            checksum_sha256=response.get("ChecksumSHA256"),
        )


class DeleteResult(BaseModel):
    """Outcome of a delete-object call"""

    key: str
    version_id: Optional[str] = None
    delete_marker: bool = False

    @classmethod
    def from_response(cls, key: str, response: Dict[str, Any]) -> "DeleteResult":
        return cls(
            key=key,
            version_id=response.get("VersionId"),
            delete_marker=bool(response.get("DeleteMarker", False)),
        )


class CopyResult(BaseModel):
    """Outcome of a copy-object call"""

    source_key: str
    dest_key: str
    version_id: Optional[str] = None
    source_version_id: Optional[str] = None
    entity_tag: Optional[str] = None

    @classmethod
    def from_response(cls, source_key: str, dest_key: str, response: Dict[str, Any]) -> "CopyResult":
        copy_result = response.get("CopyObjectResult") or {}
        return cls(
            source_key=source_key,
            dest_key=dest_key,
            version_id=response.get("VersionId"),
            source_version_id=response.get("CopySourceVersionId"),
            entity_tag=copy_result.get("ETag"),
        )
