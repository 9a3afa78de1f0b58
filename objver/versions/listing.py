"""
Rendering of object and version listings.
"""

from typing import List, Sequence

from ..core.types import ObjectSummary, ObjectVersion
from .dedup import normalize_entity_tag

NO_CONTENTS = "no contents"


def format_version(version: ObjectVersion) -> str:
    return f"{version.version_id}: {version.size} ({normalize_entity_tag(version.entity_tag)})"


def format_object(summary: ObjectSummary) -> str:
    return f"Object: {summary.key if summary.key is not None else '<none>'}"


def render_versions(versions: Sequence[ObjectVersion]) -> List[str]:
    """One line per version, or the no-contents line when there are none."""
    if not versions:
        return [NO_CONTENTS]
    return [format_version(version) for version in versions]


def render_objects(objects: Sequence[ObjectSummary]) -> List[str]:
    """One line per object, or the no-contents line when there are none."""
    if not objects:
        return [NO_CONTENTS]
    return [format_object(summary) for summary in objects]
