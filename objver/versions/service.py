"""
Versioned object operations.

VersionService runs the bucket versioning gate once per instance, before the
first store call of any operation, then performs the requested operation.
Failures are raised as ObjverError subclasses; deciding exit codes is left
to the caller.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..config.settings import ObjverSettings
from ..core.exceptions import VersionConflictError, VersioningNotEnabledError
from ..core.types import CopyResult, DeleteResult, ObjectSummary, ObjectVersion, PutResult, VersioningStatus
from ..storage.s3_client import ObjectStoreClient
from .dedup import find_existing_version
from .hashing import compute_digest, read_payload

logger = logging.getLogger(__name__)


class VersionService:
    """
    Operations on the versioned objects of one bucket.

    The bucket comes from settings; the store client is injected so tests can
    substitute a mock.
    """

    def __init__(self, settings: ObjverSettings, store: Optional[ObjectStoreClient] = None):
        self.settings = settings
        self.bucket = settings.bucket_name
        self.store = store or ObjectStoreClient(settings)
        self._versioning_status: Optional[VersioningStatus] = None

    async def ensure_versioning_enabled(self) -> None:
        """
        Refuse to operate unless bucket versioning is enabled.

        The status is queried once and remembered; later calls do not
        re-check it.

        Raises:
            VersioningNotEnabledError: If the status is anything but Enabled
        """
        if self._versioning_status is None:
            self._versioning_status = await self.store.get_bucket_versioning_async(self.bucket)

        if self._versioning_status != VersioningStatus.ENABLED:
            logger.error(f"Versioning not enabled on bucket {self.bucket}: {self._versioning_status.value}")
            raise VersioningNotEnabledError(self.bucket, self._versioning_status.value)

    async def list_files(self, prefix: Optional[str] = None) -> List[ObjectSummary]:
        """List objects in the bucket, optionally restricted to a key prefix."""
        await self.ensure_versioning_enabled()
        return await self.store.list_objects_async(self.bucket, prefix=prefix)

    async def list_versions(self, key: str) -> List[ObjectVersion]:
        """List the stored versions of ``key``."""
        await self.ensure_versioning_enabled()
        return await self.store.list_object_versions_async(self.bucket, prefix=key)

    async def put_version(self, key: str, file_path: Union[str, Path]) -> PutResult:
        """
        Upload a local file as a new version of ``key`` unless identical content exists.

        Args:
            key: Target object key
            file_path: Local file to upload

        Returns:
            PutResult with the new version id

        Raises:
            LocalIOError: If the file cannot be read
            VersionConflictError: If a version with the same content exists
        """
        await self.ensure_versioning_enabled()
        content = read_payload(file_path)
        return await self.put_content(key, content)

    async def put_content(self, key: str, content: bytes) -> PutResult:
        """Upload ``content`` as a new version of ``key`` unless identical content exists."""
        await self.ensure_versioning_enabled()

        digest = compute_digest(content)
        logger.debug(f"Computed digest {digest} for {key} ({len(content)} bytes)")

        existing = await find_existing_version(self.store, self.bucket, key, digest)
        if existing is not None:
            logger.info(f"Skipping upload of {key}: content matches version {existing}")
            raise VersionConflictError(key, existing)

        return await self.store.put_object_async(self.bucket, key, content)

    async def get_version(self, key: str, version_id: str) -> bytes:
        """Download one version of ``key``."""
        await self.ensure_versioning_enabled()
        return await self.store.get_object_async(self.bucket, key, version_id=version_id)

    async def delete_version(self, key: str, version_id: str) -> DeleteResult:
        """Delete one version of ``key``."""
        await self.ensure_versioning_enabled()
        return await self.store.delete_object_async(self.bucket, key, version_id)

    async def copy_object(self, source_key: str, dest_key: str, source_version_id: Optional[str] = None) -> CopyResult:
        """Copy ``source_key`` to ``dest_key`` within the bucket."""
        await self.ensure_versioning_enabled()
        return await self.store.copy_object_async(
            self.bucket, source_key, dest_key, source_version_id=source_version_id
        )
