"""Metadata rendering for the ``vidref info`` command.

All display-related logic lives here — no business logic, no network
access, no parsing.  Rich is imported lazily; without it a plain
``key: value`` listing goes to stderr.
"""

from __future__ import annotations

import sys
from typing import Any

from vidref.cli.console import console, escape_markup
from vidref.core.duration import format_duration_human
from vidref.core.models import LookupStatus, MetadataLookup, VideoMetadata

_UNAVAILABLE_REASONS: dict[LookupStatus, str] = {
    LookupStatus.NOT_CONFIGURED: "no API key configured",
    LookupStatus.NOT_FOUND: "video not found",
    LookupStatus.FAILED: "lookup failed",
}


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

def _format_duration(duration_seconds: int | None) -> str:
    """Render seconds as ``"4m 13s"`` or ``"Unknown"``."""
    if duration_seconds is None:
        return "Unknown"
    return format_duration_human(duration_seconds)


def _or_dash(value: str | None) -> str:
    return value if value else "—"


def metadata_rows(metadata: VideoMetadata) -> list[tuple[str, str]]:
    """Return the ``(field, value)`` pairs shown for one video."""
    return [
        ("ID", metadata.video_id),
        ("Title", metadata.title),
        ("Channel", _or_dash(metadata.channel_title)),
        ("Duration", _format_duration(metadata.duration_seconds)),
        ("Privacy", _or_dash(metadata.privacy_status)),
        ("Published", _or_dash(metadata.published_at)),
        ("Thumbnail", _or_dash(metadata.thumbnail_url)),
        ("URL", metadata.watch_url),
    ]


def unavailable_reason(lookup: MetadataLookup) -> str:
    """Human-readable reason for a lookup that produced no metadata."""
    reason = _UNAVAILABLE_REASONS.get(lookup.status, lookup.status.value)
    if lookup.error is not None:
        reason = f"{reason}: {lookup.error}"
    return reason


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _import_rich_table() -> type[Any] | None:
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return None
    return Table


def display_metadata(metadata: VideoMetadata) -> None:
    """Print a table describing *metadata*."""
    rows = metadata_rows(metadata)
    table_class = _import_rich_table()

    if table_class is None:
        print(file=sys.stderr)
        for label, value in rows:
            print(f"{label:<10} {value}", file=sys.stderr)
        print(file=sys.stderr)
        return

    table = table_class(
        title=escape_markup(metadata.title),
        show_header=False,
        border_style="dim",
    )
    table.add_column("Field", style="bold cyan", min_width=10)
    table.add_column("Value")
    for label, value in rows:
        table.add_row(label, escape_markup(value))

    console.print()
    console.print(table)
    console.print()


def display_unavailable(video_id: str, lookup: MetadataLookup) -> None:
    """Report that no metadata could be obtained for *video_id*."""
    console.print(
        f"[yellow]Metadata unavailable[/yellow] for {video_id} "
        f"({escape_markup(unavailable_reason(lookup))})"
    )
