"""yt-dlp backed implementation of :class:`~vidref.core.protocols.VideoMetadataProvider`.

This keyless backend scrapes the watch page through yt-dlp and reshapes
its info dict into the Data API ``videos`` resource layout, so the core
parser handles both backends identically.

This module is the **only** place in the codebase that imports
``yt_dlp``.  All yt-dlp exceptions are caught here and re-raised as
typed :class:`~vidref.exceptions.VidrefError` subclasses — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from vidref.core.duration import format_duration_spec
from vidref.core.video_reference import watch_url
from vidref.exceptions import (
    EnvironmentError,
    MetadataLookupError,
    VideoUnavailableError,
    append_ytdlp_upgrade_suggestion,
)


class YtDlpVideoProvider:
    """Concrete :class:`VideoMetadataProvider` backed by the yt-dlp Python API.

    Usage::

        provider = YtDlpVideoProvider()
        item = provider.fetch_video_item("dQw4w9WgXcQ")

    This class satisfies the :class:`~vidref.core.protocols.VideoMetadataProvider`
    protocol structurally — no explicit inheritance required.
    """

    # Substrings in yt-dlp error messages that indicate the video itself
    # is unavailable (as opposed to a transient or extraction error).
    _UNAVAILABLE_SIGNALS: tuple[str, ...] = (
        "unavailable",
        "private video",
        "removed",
        "not available",
        "account terminated",
        "video has been removed",
        "this video is no longer available",
    )

    @staticmethod
    def _build_opts() -> dict[str, Any]:
        """Return yt-dlp options suitable for metadata-only extraction."""
        return {
            "quiet": True,
            "no_warnings": True,
            "no_color": True,
            "skip_download": True,
            "noplaylist": True,
        }

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch_video_item(self, video_id: str) -> dict[str, Any] | None:
        """Extract metadata for *video_id* without downloading.

        Raises
        ------
        EnvironmentError
            When yt-dlp is not installed.
        VideoUnavailableError
            When yt-dlp reports the video as unavailable / private / removed.
        MetadataLookupError
            For all other extraction failures.
        """
        try:
            import yt_dlp
            import yt_dlp.utils
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "yt-dlp is not installed. Install with: pip install yt-dlp",
            ) from exc

        try:
            with yt_dlp.YoutubeDL(self._build_opts()) as ydl:
                info: Any = ydl.extract_info(watch_url(video_id), download=False)
        except yt_dlp.utils.DownloadError as exc:
            self._raise_mapped(exc)
        except Exception as exc:
            raise MetadataLookupError(
                f"Unexpected yt-dlp error: {exc}",
            ) from exc

        if info is None:
            return None

        if not isinstance(info, dict):
            raise MetadataLookupError(
                "yt-dlp returned an unexpected data structure.",
            )

        return self.to_video_item(info)

    # ------------------------------------------------------------------
    # Info dict → videos resource (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _published_at(info: dict[str, Any]) -> str | None:
        """RFC 3339 timestamp from ``timestamp`` or ``upload_date``."""
        timestamp = info.get("timestamp")
        if isinstance(timestamp, (int, float)):
            moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
            return moment.strftime("%Y-%m-%dT%H:%M:%SZ")

        upload_date = info.get("upload_date")
        if isinstance(upload_date, str) and len(upload_date) == 8 and upload_date.isdigit():
            return f"{upload_date[:4]}-{upload_date[4:6]}-{upload_date[6:]}T00:00:00Z"
        return None

    @classmethod
    def to_video_item(cls, info: dict[str, Any]) -> dict[str, Any]:
        """Reshape a yt-dlp info dict into the Data API resource layout."""
        snippet: dict[str, Any] = {
            "title": info.get("title"),
            "description": info.get("description"),
            "channelTitle": info.get("channel") or info.get("uploader"),
            "publishedAt": cls._published_at(info),
            "thumbnails": {},
        }
        thumbnail = info.get("thumbnail")
        if thumbnail:
            snippet["thumbnails"]["high"] = {"url": str(thumbnail)}

        content_details: dict[str, Any] = {}
        raw_duration = info.get("duration")
        if isinstance(raw_duration, (int, float)) and raw_duration >= 0:
            content_details["duration"] = format_duration_spec(round(raw_duration))

        status: dict[str, Any] = {}
        availability = info.get("availability")
        if availability:
            status["privacyStatus"] = str(availability)

        return {
            "id": info.get("id"),
            "snippet": snippet,
            "contentDetails": content_details,
            "status": status,
        }

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @classmethod
    def _raise_mapped(cls, exc: Exception) -> None:
        """Translate a yt-dlp ``DownloadError`` into a domain exception.

        Always raises — the ``Never`` return type is implicit via
        ``raise`` at every exit path.
        """
        msg_lower = str(exc).lower()
        if any(signal in msg_lower for signal in cls._UNAVAILABLE_SIGNALS):
            raise VideoUnavailableError(
                str(exc),
                hint="The video may be private, removed, or geo-restricted.",
            ) from exc
        raise MetadataLookupError(
            str(exc),
            hint=append_ytdlp_upgrade_suggestion("Extraction failed."),
        ) from exc
