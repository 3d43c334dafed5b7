"""Composition root: the :class:`VideoReferenceResolver` façade.

Wires a :class:`~vidref.config.ResolverConfig` to the right metadata
backend and exposes the whole resolve / parse / enrich surface on one
object.  Configuration is always passed in explicitly; nothing here
reads the process environment.
"""

from __future__ import annotations

from vidref.config import ResolverConfig
from vidref.core import duration, video_reference
from vidref.core.metadata_service import MetadataService
from vidref.core.models import MetadataLookup, VideoMetadata
from vidref.core.protocols import VideoMetadataProvider


def build_provider(config: ResolverConfig) -> VideoMetadataProvider | None:
    """Return the backend selected by *config*, or ``None`` if unconfigured.

    The Data API backend counts as unconfigured without an API key; the
    yt-dlp backend needs no credential.
    """
    if config.backend == "ytdlp":
        from vidref.infra.ytdlp_provider import YtDlpVideoProvider

        return YtDlpVideoProvider()

    if not config.api_key:
        return None

    from vidref.infra.youtube_data_api import YouTubeDataApiProvider

    return YouTubeDataApiProvider(
        config.api_key,
        endpoint=config.api_endpoint,
        timeout=config.timeout,
    )


class VideoReferenceResolver:
    """Resolve references, parse durations and enrich IDs with metadata.

    Parameters
    ----------
    config:
        Explicit settings; defaults to an unconfigured (keyless) config.
    provider:
        Optional backend override.  When omitted one is built from
        *config* via :func:`build_provider`.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        provider: VideoMetadataProvider | None = None,
    ) -> None:
        self.config: ResolverConfig = config or ResolverConfig()
        if provider is None:
            provider = build_provider(self.config)
        self._provider: VideoMetadataProvider | None = provider
        self._metadata = MetadataService(provider)

    @property
    def enrichment_configured(self) -> bool:
        return self._metadata.configured

    def close(self) -> None:
        """Release the backend's resources, if it holds any."""
        close = getattr(self._provider, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> VideoReferenceResolver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def resolve_canonical_id(reference: str | None) -> str | None:
        return video_reference.resolve_canonical_id(reference)

    @staticmethod
    def parse_duration_to_seconds(duration_spec: str | None) -> int | None:
        return duration.parse_duration_to_seconds(duration_spec)

    def lookup(self, canonical_id: str) -> MetadataLookup:
        """Enrich *canonical_id*, keeping why metadata may be missing."""
        return self._metadata.lookup(canonical_id)

    def fetch_enriched_metadata(self, canonical_id: str) -> VideoMetadata | None:
        """Enrich *canonical_id*; ``None`` means "metadata unavailable"."""
        return self._metadata.fetch_enriched_metadata(canonical_id)

    def resolve_and_enrich(
        self,
        reference: str | None,
    ) -> tuple[str | None, VideoMetadata | None]:
        """Resolve *reference* and, if it resolves, enrich it.

        No lookup is attempted for unresolvable references.
        """
        video_id = self.resolve_canonical_id(reference)
        if video_id is None:
            return None, None
        return video_id, self.fetch_enriched_metadata(video_id)
