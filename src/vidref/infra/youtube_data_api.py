"""httpx-backed implementation of :class:`~vidref.core.protocols.VideoMetadataProvider`.

This module is the **only** place in the codebase that imports
``httpx``.  All httpx exceptions are caught here and re-raised as typed
:class:`~vidref.exceptions.VidrefError` subclasses — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from vidref.config import DEFAULT_API_ENDPOINT
from vidref.exceptions import ConfigurationError, MetadataLookupError

API_PARTS: str = "snippet,contentDetails,status"


class YouTubeDataApiProvider:
    """Concrete :class:`VideoMetadataProvider` backed by the Data API v3.

    Usage::

        with YouTubeDataApiProvider(api_key) as provider:
            item = provider.fetch_video_item("dQw4w9WgXcQ")

    Each :meth:`fetch_video_item` call issues exactly one GET; there is
    no retry and no cache.  Pass *client* to supply a preconfigured
    :class:`httpx.Client` (e.g. one using :class:`httpx.MockTransport`).
    """

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = DEFAULT_API_ENDPOINT,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError(
                "An API key is required for the Data API backend.",
                hint="Set YOUTUBE_API_KEY or use the ytdlp backend.",
            )
        self._api_key: str = api_key
        self._endpoint: str = endpoint
        self._owns_client: bool = client is None
        if client is None:
            client = httpx.Client(timeout=timeout) if timeout is not None else httpx.Client()
        self._client: httpx.Client = client

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying client if this provider created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> YouTubeDataApiProvider:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def build_params(self, video_id: str) -> dict[str, str]:
        """Return the query parameters for a single-video lookup."""
        return {"id": video_id, "key": self._api_key, "part": API_PARTS}

    def fetch_video_item(self, video_id: str) -> dict[str, Any] | None:
        """Fetch the ``videos`` resource for *video_id*.

        Returns
        -------
        dict[str, Any] | None
            The first item of the list response, or ``None`` when the API
            returns no items or HTTP 404.

        Raises
        ------
        MetadataLookupError
            For transport errors, non-2xx responses and undecodable bodies.
        """
        try:
            response = self._client.get(self._endpoint, params=self.build_params(video_id))
        except httpx.HTTPError as exc:
            raise MetadataLookupError(
                f"Request to the Data API failed: {exc}",
                hint="Check network connectivity.",
            ) from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            return None

        if response.is_error:
            raise MetadataLookupError(
                f"Data API returned HTTP {response.status_code}: "
                f"{self._error_message(response)}",
                hint="Check that the API key is valid and has quota left.",
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise MetadataLookupError(
                "Data API returned a non-JSON body.",
            ) from exc

        return self._first_item(payload)

    # ------------------------------------------------------------------
    # Response helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _first_item(payload: Any) -> dict[str, Any] | None:
        if not isinstance(payload, Mapping):
            raise MetadataLookupError("Data API returned an unexpected data structure.")

        items = payload.get("items")
        if not items:
            return None
        if not isinstance(items, list) or not isinstance(items[0], Mapping):
            raise MetadataLookupError("Data API returned malformed items.")

        return dict(items[0])

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best-effort extraction of ``error.message`` from an error body."""
        try:
            body: Any = response.json()
        except ValueError:
            return response.reason_phrase or "unknown error"
        error = body.get("error") if isinstance(body, Mapping) else None
        if isinstance(error, Mapping) and error.get("message"):
            return str(error["message"])
        return response.reason_phrase or "unknown error"
