"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Any, Protocol


class VideoMetadataProvider(Protocol):
    """Contract for metadata backends.

    Any object that implements :meth:`fetch_video_item` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def fetch_video_item(self, video_id: str) -> dict[str, Any] | None:
        """Fetch one ``videos`` resource for *video_id*.

        The returned dict follows the Data API v3 resource shape; only
        these keys are read:

        * ``snippet`` — ``title``, ``description``, ``thumbnails``,
          ``publishedAt``, ``channelTitle``
        * ``contentDetails`` — ``duration`` (``PT#H#M#S``)
        * ``status`` — ``privacyStatus``

        Returns ``None`` when the provider does not know the video.

        Implementations must map all backend-specific exceptions to
        :class:`~vidref.exceptions.VidrefError` subclasses.

        Raises
        ------
        MetadataLookupError
            When the backend fails (transport, HTTP or decoding error).
        VideoUnavailableError
            When the video is confirmed private, removed or restricted.
        """
        ...  # pragma: no cover
