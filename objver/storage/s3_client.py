"""
S3-compatible object store client.

Wraps a boto3 S3 client with typed responses and uniform error handling.
Every call is a single request; listings are not paginated.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ..config.settings import ObjverSettings
from ..core.exceptions import ObjectStoreError
from ..core.types import CopyResult, DeleteResult, ObjectSummary, ObjectVersion, PutResult, VersioningStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CHECKSUM_ALGORITHM = "SHA256"


def create_boto3_client(settings: ObjverSettings) -> Any:
    """Create a boto3 S3 client for the configured endpoint and credentials."""
    return boto3.client(  # type: ignore
        "s3",
        endpoint_url=settings.endpoint,
        aws_access_key_id=settings.access_key,
        aws_secret_access_key=settings.secret_key,
        region_name=settings.region,
        config=Config(s3={"addressing_style": "path"}),
    )


class ObjectStoreClient:
    """
    Object store collaborator addressed by bucket, key and optional version id.

    Provides an async-friendly interface: blocking boto3 calls run in the
    default executor, one at a time.
    """

    def __init__(self, settings: ObjverSettings, client: Optional[Any] = None):
        self.settings = settings
        self._client: Optional[Any] = client

    def _ensure_client(self) -> Any:
        """Ensure S3 client is initialized"""
        if self._client is None:
            try:
                self._client = create_boto3_client(self.settings)
                logger.debug(f"Created S3 client for endpoint {self.settings.endpoint}")
            except Exception as e:
                logger.error(f"Failed to create S3 client: {e}")
                raise ObjectStoreError(f"S3 client initialization failed: {e}") from e
        return self._client

    async def _run(self, operation: str, call: Callable[[Any], T]) -> T:
        """Run one blocking store call in the executor, mapping botocore errors."""

        def _invoke() -> T:
            return call(self._ensure_client())

        try:
            loop = asyncio.get_event_loop()
            return await loop.run_in_executor(None, _invoke)

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"S3 {operation} failed with error {error_code}: {e}")
            raise ObjectStoreError(f"S3 {operation} failed: {error_code}: {e}", error_code=error_code) from e

        except NoCredentialsError as e:
            logger.error(f"S3 {operation} failed due to missing credentials")
            raise ObjectStoreError("S3 credentials not configured") from e

        except BotoCoreError as e:
            logger.error(f"S3 {operation} failed: {e}")
            raise ObjectStoreError(f"S3 {operation} failed: {e}") from e

    async def get_bucket_versioning_async(self, bucket: str) -> VersioningStatus:
        """
        Get the versioning status of a bucket.

        Args:
            bucket: S3 bucket name

        Returns:
            VersioningStatus (UNSET when the bucket never had versioning configured)

        Raises:
            ObjectStoreError: If the request fails
        """
        response = await self._run("get_bucket_versioning", lambda c: c.get_bucket_versioning(Bucket=bucket))
        status = VersioningStatus.from_response(response)
        logger.debug(f"Bucket {bucket} versioning status: {status.value}")
        return status

    async def list_objects_async(self, bucket: str, prefix: Optional[str] = None) -> List[ObjectSummary]:
        """
        List objects in a bucket (first page only).

        Args:
            bucket: S3 bucket name
            prefix: Optional key prefix filter

        Returns:
            Object summaries in store order
        """
        kwargs: Dict[str, Any] = {"Bucket": bucket}
        if prefix is not None:
            kwargs["Prefix"] = prefix

        response = await self._run("list_objects_v2", lambda c: c.list_objects_v2(**kwargs))
        if response.get("IsTruncated"):
            logger.warning(f"Object listing for s3://{bucket}/{prefix or ''} is truncated to the first page")

        return [ObjectSummary.from_response(entry) for entry in response.get("Contents") or []]

    async def list_object_versions_async(self, bucket: str, prefix: Optional[str] = None) -> List[ObjectVersion]:
        """
        List object versions in a bucket (first page only).

        Args:
            bucket: S3 bucket name
            prefix: Optional key prefix filter

        Returns:
            Object versions in store order

        Raises:
            MalformedResponseError: If an entry lacks a version id or entity tag
            ObjectStoreError: If the request fails
        """
        kwargs: Dict[str, Any] = {"Bucket": bucket}
        if prefix is not None:
            kwargs["Prefix"] = prefix

        response = await self._run("list_object_versions", lambda c: c.list_object_versions(**kwargs))
        if response.get("IsTruncated"):
            logger.warning(f"Version listing for s3://{bucket}/{prefix or ''} is truncated to the first page")

        return [ObjectVersion.from_response(entry) for entry in response.get("Versions") or []]

    async def put_object_async(
        self,
        bucket: str,
        key: str,
        content: bytes,
        checksum_algorithm: Optional[str] = DEFAULT_CHECKSUM_ALGORITHM,
    ) -> PutResult:
        """
        Upload content as a new version of a key.

        Args:
            bucket: S3 bucket name
            key: S3 object key
            content: Content to upload
            checksum_algorithm: Integrity checksum the store computes on write

        Returns:
            PutResult with the assigned version id

        Raises:
            MalformedResponseError: If the store did not return a version id
            ObjectStoreError: If the upload fails
        """
        kwargs: Dict[str, Any] = {"Bucket": bucket, "Key": key, "Body": content}
        if checksum_algorithm:
            kwargs["ChecksumAlgorithm"] = checksum_algorithm

        response = await self._run("put_object", lambda c: c.put_object(**kwargs))
        result = PutResult.from_response(key, response)

        logger.info(
            f"Uploaded s3://{bucket}/{key} ({len(content)} bytes)",
            extra={"bucket": bucket, "key": key, "version_id": result.version_id, "size_bytes": len(content)},
        )
        return result

    async def get_object_async(self, bucket: str, key: str, version_id: Optional[str] = None) -> bytes:
        """
        Download the content of a key, optionally a specific version.

        Args:
            bucket: S3 bucket name
            key: S3 object key
            version_id: Version to fetch (latest when None)

        Returns:
            Object content as bytes
        """
        kwargs: Dict[str, Any] = {"Bucket": bucket, "Key": key}
        if version_id is not None:
            kwargs["VersionId"] = version_id

        def _download(client: Any) -> bytes:
            response = client.get_object(**kwargs)
            return response["Body"].read()

        return await self._run("get_object", _download)

    async def delete_object_async(self, bucket: str, key: str, version_id: str) -> DeleteResult:
        """
        Delete one specific version of a key.

        Args:
            bucket: S3 bucket name
            key: S3 object key
            version_id: Version to delete

        Returns:
            DeleteResult as reported by the store
        """
        response = await self._run(
            "delete_object", lambda c: c.delete_object(Bucket=bucket, Key=key, VersionId=version_id)
        )
        result = DeleteResult.from_response(key, response)

        logger.info(
            f"Deleted version {version_id} of s3://{bucket}/{key}",
            extra={"bucket": bucket, "key": key, "version_id": version_id},
        )
        return result

    async def copy_object_async(
        self, bucket: str, source_key: str, dest_key: str, source_version_id: Optional[str] = None
    ) -> CopyResult:
        """
        Server-side copy within a bucket.

        Args:
            bucket: S3 bucket name
            source_key: Key to copy from
            dest_key: Key to copy to
            source_version_id: Source version to copy (latest when None)

        Returns:
            CopyResult with the destination's new version id
        """
        copy_source: Dict[str, Any] = {"Bucket": bucket, "Key": source_key}
        if source_version_id is not None:
            copy_source["VersionId"] = source_version_id

        response = await self._run(
            "copy_object", lambda c: c.copy_object(Bucket=bucket, Key=dest_key, CopySource=copy_source)
        )
        result = CopyResult.from_response(source_key, dest_key, response)

        logger.info(
            f"Copied s3://{bucket}/{source_key} to s3://{bucket}/{dest_key}",
            extra={"bucket": bucket, "source_key": source_key, "dest_key": dest_key, "version_id": result.version_id},
        )
        return result
