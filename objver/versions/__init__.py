"""
Version management: hashing, duplicate detection, listing and operations.
"""

from .dedup import find_existing_version, match_version, normalize_entity_tag
from .hashing import compute_digest, read_payload
from .listing import NO_CONTENTS, format_object, format_version, render_objects, render_versions
from .service import VersionService

__all__ = [
    "VersionService",
    "compute_digest",
    "read_payload",
    "find_existing_version",
    "match_version",
    "normalize_entity_tag",
    "NO_CONTENTS",
    "format_object",
    "format_version",
    "render_objects",
    "render_versions",
]
