"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from vidref.core.duration import (
    format_duration_human,
    format_duration_spec,
    parse_duration_to_seconds,
)
from vidref.core.metadata_service import MetadataService
from vidref.core.models import LookupStatus, MetadataLookup, VideoMetadata
from vidref.core.protocols import VideoMetadataProvider
from vidref.core.video_reference import (
    HOST_RULES,
    HostRule,
    is_canonical_id,
    resolve_canonical_id,
    watch_url,
)

__all__: list[str] = [
    "HOST_RULES",
    "HostRule",
    "LookupStatus",
    "MetadataLookup",
    "MetadataService",
    "VideoMetadata",
    "VideoMetadataProvider",
    "format_duration_human",
    "format_duration_spec",
    "is_canonical_id",
    "parse_duration_to_seconds",
    "resolve_canonical_id",
    "watch_url",
]
