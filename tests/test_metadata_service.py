"""Tests for MetadataService (core/metadata_service.py).

The :class:`VideoMetadataProvider` dependency is **mocked** — no internet
access, no httpx, no yt-dlp.  These tests verify:

* The not-configured short-circuit (no provider call at all)
* Resource-dict → domain-model parsing and defaults
* Thumbnail preference order
* Exception mapping (provider errors → lookup statuses)
"""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from vidref.core.metadata_service import MetadataService
from vidref.core.models import LookupStatus, VideoMetadata
from vidref.exceptions import (
    EnvironmentError,
    MetadataLookupError,
    VideoUnavailableError,
)

VIDEO_ID = "dQw4w9WgXcQ"


def _fake_provider(item: dict[str, Any] | None | Exception) -> MagicMock:
    """Return a mock provider.

    If *item* is an exception, ``fetch_video_item`` raises it;
    otherwise it returns *item*.
    """
    provider = MagicMock()
    if isinstance(item, Exception):
        provider.fetch_video_item.side_effect = item
    else:
        provider.fetch_video_item.return_value = item
    return provider


# ---------------------------------------------------------------------------
# Configuration / short-circuits
# ---------------------------------------------------------------------------

class TestNotConfigured:
    def test_lookup_reports_not_configured(self) -> None:
        svc = MetadataService(None)
        lookup = svc.lookup(VIDEO_ID)
        assert lookup.status is LookupStatus.NOT_CONFIGURED
        assert lookup.metadata is None

    def test_fetch_returns_none(self) -> None:
        assert MetadataService(None).fetch_enriched_metadata(VIDEO_ID) is None

    def test_configured_flag(self) -> None:
        assert not MetadataService(None).configured
        assert MetadataService(_fake_provider(None)).configured


class TestMalformedId:
    def test_provider_not_called(self) -> None:
        provider = _fake_provider(None)
        lookup = MetadataService(provider).lookup("not-an-id")
        assert lookup.status is LookupStatus.NOT_FOUND
        provider.fetch_video_item.assert_not_called()

    @pytest.mark.parametrize("video_id", ["dQw4w9WgXcQ\n", " dQw4w9WgXcQ", "dQw4w9WgXc\u0661"])
    def test_near_canonical_id_not_sent(self, video_id: str) -> None:
        provider = _fake_provider(None)
        lookup = MetadataService(provider).lookup(video_id)
        assert lookup.status is LookupStatus.NOT_FOUND
        provider.fetch_video_item.assert_not_called()


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

class TestLookupFound:
    def test_parses_all_fields(self, video_item: dict[str, Any]) -> None:
        provider = _fake_provider(video_item)
        meta = MetadataService(provider).fetch_enriched_metadata(VIDEO_ID)

        assert isinstance(meta, VideoMetadata)
        assert meta.video_id == VIDEO_ID
        assert meta.title == "Never Gonna Give You Up"
        assert meta.description == "The official video."
        assert meta.duration_seconds == 213
        assert meta.thumbnail_url == "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"
        assert meta.privacy_status == "unlisted"
        assert meta.published_at == "2009-10-25T06:57:33Z"
        assert meta.channel_title == "Rick Astley"
        provider.fetch_video_item.assert_called_once_with(VIDEO_ID)

    def test_lookup_status_found(self, video_item: dict[str, Any]) -> None:
        lookup = MetadataService(_fake_provider(video_item)).lookup(VIDEO_ID)
        assert lookup.found
        assert lookup.error is None


# ---------------------------------------------------------------------------
# Parsing defaults
# ---------------------------------------------------------------------------

class TestParseVideoItem:
    def test_missing_title_yields_untitled(self, video_item: dict[str, Any]) -> None:
        del video_item["snippet"]["title"]
        meta = MetadataService.parse_video_item(VIDEO_ID, video_item)
        assert meta.title == "Untitled"

    def test_empty_title_yields_untitled(self, video_item: dict[str, Any]) -> None:
        video_item["snippet"]["title"] = ""
        assert MetadataService.parse_video_item(VIDEO_ID, video_item).title == "Untitled"

    def test_empty_description_yields_none(self, video_item: dict[str, Any]) -> None:
        video_item["snippet"]["description"] = ""
        assert MetadataService.parse_video_item(VIDEO_ID, video_item).description is None

    def test_missing_duration_yields_none(self, video_item: dict[str, Any]) -> None:
        video_item["contentDetails"] = {}
        assert MetadataService.parse_video_item(VIDEO_ID, video_item).duration_seconds is None

    def test_unparseable_duration_yields_none(self, video_item: dict[str, Any]) -> None:
        video_item["contentDetails"]["duration"] = "P1W"
        assert MetadataService.parse_video_item(VIDEO_ID, video_item).duration_seconds is None

    def test_processing_sentinel_yields_zero(self, video_item: dict[str, Any]) -> None:
        video_item["contentDetails"]["duration"] = "P0D"
        assert MetadataService.parse_video_item(VIDEO_ID, video_item).duration_seconds == 0

    def test_missing_sections(self) -> None:
        meta = MetadataService.parse_video_item(VIDEO_ID, {"id": VIDEO_ID})
        assert meta.title == "Untitled"
        assert meta.description is None
        assert meta.duration_seconds is None
        assert meta.thumbnail_url is None
        assert meta.privacy_status is None
        assert meta.published_at is None
        assert meta.channel_title is None

    def test_non_mapping_item_raises(self) -> None:
        with pytest.raises(MetadataLookupError, match="not an object"):
            MetadataService.parse_video_item(VIDEO_ID, ["nope"])

    def test_non_mapping_section_raises(self, video_item: dict[str, Any]) -> None:
        video_item["snippet"] = "oops"
        with pytest.raises(MetadataLookupError, match="snippet"):
            MetadataService.parse_video_item(VIDEO_ID, video_item)


class TestSelectThumbnail:
    @pytest.mark.parametrize(
        ("sizes", "expected"),
        [
            (["default", "medium", "high", "standard", "maxres"], "maxres"),
            (["default", "medium", "high", "standard"], "standard"),
            (["default", "medium", "high"], "high"),
            (["default", "medium"], "medium"),
            (["default"], "default"),
        ],
    )
    def test_preference_order(self, sizes: list[str], expected: str) -> None:
        thumbnails = {size: {"url": f"https://img/{size}.jpg"} for size in sizes}
        assert MetadataService.select_thumbnail(thumbnails) == f"https://img/{expected}.jpg"

    def test_entry_without_url_is_skipped(self) -> None:
        thumbnails = {"maxres": {"width": 1280}, "high": {"url": "https://img/high.jpg"}}
        assert MetadataService.select_thumbnail(thumbnails) == "https://img/high.jpg"

    @pytest.mark.parametrize("thumbnails", [None, {}, "x", {"unknown": {"url": "u"}}])
    def test_none_when_absent(self, thumbnails: object) -> None:
        assert MetadataService.select_thumbnail(thumbnails) is None


# ---------------------------------------------------------------------------
# Failure mapping
# ---------------------------------------------------------------------------

class TestLookupFailures:
    def test_unknown_video_is_not_found(self) -> None:
        svc = MetadataService(_fake_provider(None))
        assert svc.lookup(VIDEO_ID).status is LookupStatus.NOT_FOUND
        assert svc.fetch_enriched_metadata(VIDEO_ID) is None

    def test_unavailable_video_is_not_found(self) -> None:
        svc = MetadataService(_fake_provider(VideoUnavailableError("private")))
        assert svc.lookup(VIDEO_ID).status is LookupStatus.NOT_FOUND

    def test_provider_error_is_failed(self) -> None:
        error = MetadataLookupError("HTTP 500")
        lookup = MetadataService(_fake_provider(error)).lookup(VIDEO_ID)
        assert lookup.status is LookupStatus.FAILED
        assert lookup.error is error

    def test_environment_error_is_failed(self) -> None:
        lookup = MetadataService(_fake_provider(EnvironmentError("missing"))).lookup(VIDEO_ID)
        assert lookup.status is LookupStatus.FAILED

    def test_unexpected_error_wrapped(self) -> None:
        cause = RuntimeError("boom")
        lookup = MetadataService(_fake_provider(cause)).lookup(VIDEO_ID)
        assert lookup.status is LookupStatus.FAILED
        assert isinstance(lookup.error, MetadataLookupError)
        assert "Unexpected" in str(lookup.error)
        assert lookup.error.__cause__ is cause

    def test_malformed_item_is_failed(self) -> None:
        lookup = MetadataService(_fake_provider({"snippet": 42})).lookup(VIDEO_ID)
        assert lookup.status is LookupStatus.FAILED

    def test_failures_collapse_to_none(self) -> None:
        svc = MetadataService(_fake_provider(RuntimeError("boom")))
        assert svc.fetch_enriched_metadata(VIDEO_ID) is None

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        svc = MetadataService(_fake_provider(MetadataLookupError("HTTP 500")))
        with caplog.at_level(logging.WARNING, logger="vidref"):
            svc.lookup(VIDEO_ID)
        assert "HTTP 500" in caplog.text
