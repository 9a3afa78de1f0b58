"""
Core types and exceptions shared across objver.
"""

from .exceptions import (
    ConfigurationError,
    LocalIOError,
    MalformedResponseError,
    ObjectStoreError,
    ObjverError,
    VersionConflictError,
    VersioningNotEnabledError,
)
from .types import CopyResult, DeleteResult, ObjectSummary, ObjectVersion, PutResult, VersioningStatus

__all__ = [
    "ObjverError",
    "ConfigurationError",
    "VersioningNotEnabledError",
    "VersionConflictError",
    "MalformedResponseError",
    "ObjectStoreError",
    "LocalIOError",
    "ObjectVersion",
    "ObjectSummary",
    "PutResult",
    "DeleteResult",
    "CopyResult",
    "VersioningStatus",
]
