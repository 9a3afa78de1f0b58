"""
Custom exceptions for the object version tool.
"""

from typing import Optional


class ObjverError(Exception):
    """Base exception for all objver errors."""

    exit_code = 1


class ConfigurationError(ObjverError):
    """Configuration-related errors (missing or invalid settings)."""

    pass


class VersioningNotEnabledError(ObjverError):
    """The target bucket does not have versioning enabled."""

    def __init__(self, bucket: str, status: Optional[str] = None):
        super().__init__(f"versioning not enabled on bucket {bucket} (status: {status or 'unset'})")
        self.bucket = bucket
        self.status = status


class VersionConflictError(ObjverError):
    """A version with identical content already exists for the key."""

    def __init__(self, key: str, version_id: str):
        super().__init__(f"version already exists: {version_id}")
        self.key = key
        self.version_id = version_id


class MalformedResponseError(ObjverError):
    """The object store returned a response missing a required field."""

    def __init__(self, operation: str, field: str):
        super().__init__(f"{operation} response is missing {field}")
        self.operation = operation
        self.field = field


class ObjectStoreError(ObjverError):
    """Transport or API errors raised by the object store."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class LocalIOError(ObjverError):
    """Local file I/O errors for uploaded or downloaded payloads."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot access {path}: {reason}")
        self.path = path
        self.reason = reason
