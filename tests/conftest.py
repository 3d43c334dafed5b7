"""Shared pytest fixtures and configuration for the vidref test suite.

Guidelines
----------
* No internet access in any test.
* httpx is exercised only through :class:`httpx.MockTransport`.
* yt-dlp must be mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state or the developer's ``.env``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from vidref.logging_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_vidref_logger() -> Iterator[None]:
    """Undo handler/propagation changes made by ``setup_logging``."""
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    saved_propagate = logger.propagate
    yield
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)
    logger.propagate = saved_propagate


@pytest.fixture
def video_item() -> dict[str, Any]:
    """A realistic Data API v3 ``videos`` resource."""
    return {
        "kind": "youtube#video",
        "id": "dQw4w9WgXcQ",
        "snippet": {
            "publishedAt": "2009-10-25T06:57:33Z",
            "channelTitle": "Rick Astley",
            "title": "Never Gonna Give You Up",
            "description": "The official video.",
            "thumbnails": {
                "default": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg"},
                "medium": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/mqdefault.jpg"},
                "high": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg"},
                "standard": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/sddefault.jpg"},
                "maxres": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"},
            },
        },
        "contentDetails": {"duration": "PT3M33S"},
        "status": {"privacyStatus": "unlisted"},
    }


@pytest.fixture
def no_network_client() -> Iterator[httpx.Client]:
    """An httpx client whose transport fails the test on any request."""

    def _forbid(request: httpx.Request) -> httpx.Response:
        pytest.fail(f"Unexpected network call: {request.method} {request.url}")

    client = httpx.Client(transport=httpx.MockTransport(_forbid))
    yield client
    client.close()
