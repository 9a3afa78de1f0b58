"""
objver - manage versioned objects in an S3-compatible object store.

Lists objects and object versions, uploads new versions while skipping
content that is already stored, deletes and copies versions. Every command
requires versioning to be enabled on the target bucket.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
