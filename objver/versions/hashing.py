"""
Content hashing for version deduplication.

The digest matches the entity tag an S3-compatible store assigns to a
non-multipart upload: the lowercase hex MD5 of the payload.
"""

import hashlib
from pathlib import Path
from typing import Union

from ..core.exceptions import LocalIOError


def compute_digest(content: bytes) -> str:
    """Return the lowercase hex MD5 digest of ``content``."""
    return hashlib.md5(content).hexdigest()


def read_payload(path: Union[str, Path]) -> bytes:
    """
    Read a local file fully into memory.

    Raises:
        LocalIOError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise LocalIOError(str(path), e.strerror or str(e)) from e
