"""Core metadata service — best-effort enrichment of canonical IDs.

This service depends on a
:class:`~vidref.core.protocols.VideoMetadataProvider` injected at
construction time (dependency inversion), keeping the core free of
any external-system imports.  A service built without a provider is
"not configured" and answers every lookup without touching the network.

Guarantees
----------
* :meth:`MetadataService.lookup` never raises; every failure becomes a
  :class:`~vidref.core.models.MetadataLookup` with a status.
* Exactly one provider call per lookup, no retries, no caching.
* Parsing of the provider's resource dict is pure and deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from vidref.core.duration import parse_duration_to_seconds
from vidref.core.models import LookupStatus, MetadataLookup, VideoMetadata
from vidref.core.protocols import VideoMetadataProvider
from vidref.core.video_reference import is_canonical_id
from vidref.exceptions import (
    MetadataLookupError,
    VideoUnavailableError,
    VidrefError,
)

logger = logging.getLogger(__name__)

THUMBNAIL_PREFERENCE: tuple[str, ...] = ("maxres", "standard", "high", "medium", "default")

DEFAULT_TITLE: str = "Untitled"


class MetadataService:
    """Stateless service that turns provider resources into :class:`VideoMetadata`.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`VideoMetadataProvider` protocol,
        or ``None`` when no backend is configured.
    """

    def __init__(self, provider: VideoMetadataProvider | None) -> None:
        self._provider: VideoMetadataProvider | None = provider

    @property
    def configured(self) -> bool:
        return self._provider is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def lookup(self, video_id: str) -> MetadataLookup:
        """Look up metadata for *video_id*, keeping the failure reason."""
        if self._provider is None:
            logger.debug("Metadata lookup skipped for %s: not configured", video_id)
            return MetadataLookup.not_configured()

        if not is_canonical_id(video_id):
            logger.debug("Metadata lookup skipped for malformed id %r", video_id)
            return MetadataLookup.not_found()

        try:
            item = self._provider.fetch_video_item(video_id)
        except VideoUnavailableError as exc:
            logger.debug("Video %s unavailable: %s", video_id, exc)
            return MetadataLookup.not_found()
        except VidrefError as exc:
            logger.warning("Metadata lookup failed for %s: %s", video_id, exc)
            return MetadataLookup.failed(exc)
        except Exception as exc:
            error = MetadataLookupError(f"Unexpected provider error: {exc}")
            error.__cause__ = exc
            logger.warning("Metadata lookup failed for %s: %s", video_id, error)
            return MetadataLookup.failed(error)

        if item is None:
            logger.debug("Provider does not know video %s", video_id)
            return MetadataLookup.not_found()

        try:
            metadata = self.parse_video_item(video_id, item)
        except MetadataLookupError as exc:
            logger.warning("Malformed metadata for %s: %s", video_id, exc)
            return MetadataLookup.failed(exc)

        return MetadataLookup(LookupStatus.FOUND, metadata=metadata)

    def fetch_enriched_metadata(self, video_id: str) -> VideoMetadata | None:
        """Best-effort enrichment: metadata, or ``None`` for any failure."""
        return self.lookup(video_id).metadata

    # ------------------------------------------------------------------
    # Resource dict → domain model (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _section(item: Mapping[str, Any], key: str) -> Mapping[str, Any]:
        section = item.get(key)
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise MetadataLookupError(f"Malformed '{key}' section in video resource.")
        return section

    @staticmethod
    def _text(section: Mapping[str, Any], key: str) -> str | None:
        value = section.get(key)
        if value is None or value == "":
            return None
        return str(value)

    @staticmethod
    def select_thumbnail(thumbnails: object) -> str | None:
        """Pick the best thumbnail URL following :data:`THUMBNAIL_PREFERENCE`."""
        if not isinstance(thumbnails, Mapping):
            return None
        for size in THUMBNAIL_PREFERENCE:
            entry = thumbnails.get(size)
            if isinstance(entry, Mapping) and entry.get("url"):
                return str(entry["url"])
        return None

    @classmethod
    def parse_video_item(cls, video_id: str, item: object) -> VideoMetadata:
        """Convert one ``videos`` resource into a :class:`VideoMetadata`.

        Raises
        ------
        MetadataLookupError
            If *item* or one of its sections is not a mapping.
        """
        if not isinstance(item, Mapping):
            raise MetadataLookupError("Video resource is not an object.")

        snippet = cls._section(item, "snippet")
        content_details = cls._section(item, "contentDetails")
        status = cls._section(item, "status")

        raw_duration = content_details.get("duration")
        duration: int | None = (
            parse_duration_to_seconds(str(raw_duration)) if raw_duration else None
        )

        return VideoMetadata(
            video_id=video_id,
            title=cls._text(snippet, "title") or DEFAULT_TITLE,
            description=cls._text(snippet, "description"),
            duration_seconds=duration,
            thumbnail_url=cls.select_thumbnail(snippet.get("thumbnails")),
            privacy_status=cls._text(status, "privacyStatus"),
            published_at=cls._text(snippet, "publishedAt"),
            channel_title=cls._text(snippet, "channelTitle"),
        )
