"""Domain models for vidref.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and are constructed fresh for every lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from vidref.core.video_reference import watch_url
from vidref.exceptions import VidrefError


# ---------------------------------------------------------------------------
# Video metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoMetadata:
    """Descriptive metadata for a single video, as returned by enrichment."""

    video_id: str
    """Canonical video ID (e.g. ``dQw4w9WgXcQ``)."""

    title: str
    """Human-readable title; ``"Untitled"`` when the provider has none."""

    description: str | None
    """Video description, or ``None`` when empty."""

    duration_seconds: int | None
    """Duration in seconds, or ``None`` if unavailable or unparseable."""

    thumbnail_url: str | None
    """Best-available thumbnail URL."""

    privacy_status: str | None
    """Provider privacy status (``public``, ``unlisted``, ``private``…)."""

    published_at: str | None
    """Publication timestamp as reported by the provider (RFC 3339)."""

    channel_title: str | None
    """Display name of the owning channel."""

    @property
    def watch_url(self) -> str:
        return watch_url(self.video_id)

    def to_dict(self) -> dict[str, object]:
        """Plain-dict view used for JSON output."""
        return {
            "videoId": self.video_id,
            "title": self.title,
            "description": self.description,
            "durationSeconds": self.duration_seconds,
            "thumbnail": self.thumbnail_url,
            "privacyStatus": self.privacy_status,
            "publishedAt": self.published_at,
            "channelTitle": self.channel_title,
            "url": self.watch_url,
        }


# ---------------------------------------------------------------------------
# Lookup result
# ---------------------------------------------------------------------------

class LookupStatus(Enum):
    """Why a metadata lookup did or did not produce metadata."""

    FOUND = "found"
    NOT_CONFIGURED = "not_configured"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class MetadataLookup:
    """Outcome of one enrichment attempt.

    ``metadata`` is set only for :attr:`LookupStatus.FOUND`; ``error`` only
    for :attr:`LookupStatus.FAILED`.  Best-effort callers read
    ``metadata`` and treat ``None`` as "unavailable".
    """

    status: LookupStatus
    metadata: VideoMetadata | None = None
    error: VidrefError | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @classmethod
    def not_configured(cls) -> MetadataLookup:
        return cls(LookupStatus.NOT_CONFIGURED)

    @classmethod
    def not_found(cls) -> MetadataLookup:
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: VidrefError) -> MetadataLookup:
        return cls(LookupStatus.FAILED, error=error)
