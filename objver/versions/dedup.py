"""
Duplicate detection for uploads.

Finds an existing version of a key whose content matches a candidate
digest. This is a read-then-decide check: another writer may add a version
between the check and the upload that follows it.
"""

import logging
from typing import Iterable, Optional

from ..core.types import ObjectVersion
from ..storage.s3_client import ObjectStoreClient

logger = logging.getLogger(__name__)


def normalize_entity_tag(entity_tag: str) -> str:
    """Strip the store's surrounding quotes and lower-case an entity tag."""
    return entity_tag.strip('"').lower()


def match_version(versions: Iterable[ObjectVersion], key: str, digest: str) -> Optional[str]:
    """
    Return the id of the first version of ``key`` whose entity tag equals ``digest``.

    Entries that carry a different key (siblings returned by a prefix listing)
    are skipped. Order is whatever the store returned.
    """
    digest = digest.lower()
    for version in versions:
        if version.key is not None and version.key != key:
            continue
        if normalize_entity_tag(version.entity_tag) == digest:
            return version.version_id
    return None


async def find_existing_version(store: ObjectStoreClient, bucket: str, key: str, digest: str) -> Optional[str]:
    """
    Check whether any stored version of ``key`` already has content ``digest``.

    Args:
        store: Object store client
        bucket: Bucket holding the key
        key: Target object key
        digest: Lowercase hex content digest of the candidate upload

    Returns:
        The matching version id, or None when the content is new
    """
    versions = await store.list_object_versions_async(bucket, prefix=key)
    version_id = match_version(versions, key, digest)

    if version_id is not None:
        logger.debug(f"Digest {digest} already stored for {key} as version {version_id}")
    return version_id
