"""ISO-8601 duration subset used by the metadata provider.

Only the ``PT#H#M#S`` form is understood.  ``PT`` on its own and the
``P0D`` sentinel (reported while a video is still processing) are valid
zero-length durations; anything else that does not match is rejected
with ``None`` so callers can tell "zero" apart from "unparseable".
"""

from __future__ import annotations

import re

from vidref.exceptions import InvalidDurationError

_DURATION_PATTERN: re.Pattern[str] = re.compile(
    r"PT(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?",
    re.ASCII,
)

ZERO_DURATION_SENTINELS: frozenset[str] = frozenset({"P0D"})


def parse_duration_to_seconds(duration_spec: str | None) -> int | None:
    """Convert ``PT1H2M3S``-style strings into total seconds.

    >>> parse_duration_to_seconds("PT1H2M3S")
    3723
    >>> parse_duration_to_seconds("PT0S")
    0
    >>> parse_duration_to_seconds("garbage") is None
    True
    """
    if not duration_spec or not isinstance(duration_spec, str):
        return None

    spec = duration_spec.strip()
    if spec in ZERO_DURATION_SENTINELS:
        return 0

    match = _DURATION_PATTERN.fullmatch(spec)
    if match is None:
        return None

    hours = int(match.group("hours") or 0)
    minutes = int(match.group("minutes") or 0)
    seconds = int(match.group("seconds") or 0)
    return hours * 3600 + minutes * 60 + seconds


def require_duration_seconds(duration_spec: str | None) -> int:
    """Strict variant of :func:`parse_duration_to_seconds`.

    Raises
    ------
    InvalidDurationError
        If *duration_spec* does not match the grammar.
    """
    seconds = parse_duration_to_seconds(duration_spec)
    if seconds is None:
        raise InvalidDurationError(
            f"Not a PT#H#M#S duration: {duration_spec!r}",
            hint="Examples: PT30S, PT4M13S, PT1H2M3S",
        )
    return seconds


def _split(seconds: int) -> tuple[int, int, int]:
    if seconds < 0:
        raise ValueError(f"Duration must be non-negative, got {seconds}")
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return hours, minutes, secs


def format_duration_spec(seconds: int) -> str:
    """Render *seconds* as ``PT#H#M#S``, omitting zero components.

    ``0`` renders as ``PT0S``.
    """
    hours, minutes, secs = _split(seconds)
    parts = ["PT"]
    if hours:
        parts.append(f"{hours}H")
    if minutes:
        parts.append(f"{minutes}M")
    if secs or (not hours and not minutes):
        parts.append(f"{secs}S")
    return "".join(parts)


def format_duration_human(seconds: int) -> str:
    """Render *seconds* for display, e.g. ``"1h 1m 1s"`` or ``"4m 13s"``."""
    hours, minutes, secs = _split(seconds)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"
