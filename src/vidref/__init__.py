"""vidref — canonical YouTube video references and metadata enrichment.

Built on httpx (Data API v3) and yt-dlp (keyless backend) with a strict
layered architecture.
"""

from vidref.config import ResolverConfig
from vidref.core.duration import parse_duration_to_seconds
from vidref.core.models import LookupStatus, MetadataLookup, VideoMetadata
from vidref.core.video_reference import resolve_canonical_id
from vidref.resolver import VideoReferenceResolver
from vidref.version import __version__

__all__: list[str] = [
    "LookupStatus",
    "MetadataLookup",
    "ResolverConfig",
    "VideoMetadata",
    "VideoReferenceResolver",
    "__version__",
    "parse_duration_to_seconds",
    "resolve_canonical_id",
]
