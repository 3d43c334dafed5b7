"""Pure video-reference resolution.

Turns whatever a user pasted into a "video link" field into the
platform's canonical 11-character video ID.

Resolution order (enforced by :func:`resolve_canonical_id`):

1. **Fast path** — the trimmed input already is a canonical ID.
2. **Structured** — parse as a URL and evaluate :data:`HOST_RULES` in
   order.  The first rule whose host *and* path predicates match
   decides the outcome, valid or not.
3. **Fallback** — scrape a ``?v=<id>`` / ``&v=<id>`` fragment out of the
   raw string.  This also applies to URLs on unrelated hosts.

Every function here is deterministic and free of I/O.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import SplitResult, parse_qs, urlsplit

from vidref.exceptions import InvalidReferenceError

CANONICAL_ID_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z0-9_-]{11}")

_QUERY_FALLBACK_PATTERN: re.Pattern[str] = re.compile(r"[?&]v=([A-Za-z0-9_-]{11})")

SHORT_LINK_HOST: str = "youtu.be"
MAIN_HOST: str = "youtube.com"

WATCH_URL_TEMPLATE: str = "https://www.youtube.com/watch?v={video_id}"

SUPPORTED_SHAPES_HINT: str = (
    "Supported: bare 11-character IDs, youtube.com/watch?v=…, "
    "youtu.be/…, youtube.com/shorts/…, youtube.com/embed/…"
)


def is_canonical_id(value: object) -> bool:
    """Return ``True`` when *value* is a string in canonical-ID form."""
    return isinstance(value, str) and CANONICAL_ID_PATTERN.fullmatch(value) is not None


def _validated(candidate: str | None) -> str | None:
    return candidate if is_canonical_id(candidate) else None


def watch_url(video_id: str) -> str:
    """Return the canonical watch-page URL for *video_id*."""
    return WATCH_URL_TEMPLATE.format(video_id=video_id)


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------

def _path_segments(url: SplitResult) -> list[str]:
    return [segment for segment in url.path.split("/") if segment]


def normalize_host(hostname: str) -> str:
    """Lower-case *hostname* and strip a leading ``www.`` then ``m.`` label."""
    host = hostname.lower()
    if host.startswith("www."):
        host = host[len("www."):]
    if host.startswith("m."):
        host = host[len("m."):]
    return host


def _parse_url(reference: str) -> SplitResult | None:
    """Parse *reference* as a URL, assuming ``https://`` when scheme-less."""
    candidate = reference
    if not candidate.startswith(("http://", "https://")):
        candidate = f"https://{candidate}"
    try:
        parsed = urlsplit(candidate)
    except ValueError:
        return None
    if not parsed.hostname:
        return None
    return parsed


# ---------------------------------------------------------------------------
# Host rule table
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HostRule:
    """One ``(host predicate, path predicate, extractor)`` entry.

    The extractor returns the raw candidate; validation against
    :data:`CANONICAL_ID_PATTERN` happens centrally.
    """

    name: str
    host: Callable[[str], bool]
    path: Callable[[SplitResult], bool]
    extract: Callable[[SplitResult], str | None]


def _first_segment(url: SplitResult) -> str | None:
    segments = _path_segments(url)
    return segments[0] if segments else None


def _second_segment(url: SplitResult) -> str | None:
    segments = _path_segments(url)
    return segments[1] if len(segments) > 1 else None


def _v_query_param(url: SplitResult) -> str | None:
    values = parse_qs(url.query, keep_blank_values=True).get("v")
    return values[0] if values else None


def _is_shorts_or_embed(url: SplitResult) -> bool:
    segments = _path_segments(url)
    return len(segments) > 1 and segments[0] in ("shorts", "embed")


HOST_RULES: tuple[HostRule, ...] = (
    HostRule(
        name="short-link",
        host=lambda host: host == SHORT_LINK_HOST,
        path=lambda url: True,
        extract=_first_segment,
    ),
    HostRule(
        name="watch",
        host=lambda host: host.endswith(MAIN_HOST),
        path=lambda url: url.path == "/watch",
        extract=_v_query_param,
    ),
    HostRule(
        name="shorts-or-embed",
        host=lambda host: host.endswith(MAIN_HOST),
        path=_is_shorts_or_embed,
        extract=_second_segment,
    ),
)


def match_host_rule(
    url: SplitResult,
    rules: tuple[HostRule, ...] = HOST_RULES,
) -> HostRule | None:
    """Return the first rule claiming *url*, or ``None``."""
    host = normalize_host(url.hostname or "")
    for rule in rules:
        if rule.host(host) and rule.path(url):
            return rule
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve_canonical_id(
    reference: str | None,
    rules: tuple[HostRule, ...] = HOST_RULES,
) -> str | None:
    """Resolve *reference* to a canonical video ID, or ``None``.

    Never raises for bad input.  The returned value, when not ``None``,
    always matches :data:`CANONICAL_ID_PATTERN`.
    """
    if not reference:
        return None

    trimmed = str(reference).strip()
    if not trimmed:
        return None

    if is_canonical_id(trimmed):
        return trimmed

    url = _parse_url(trimmed)
    if url is not None:
        rule = match_host_rule(url, rules)
        if rule is not None:
            return _validated(rule.extract(url))

    match = _QUERY_FALLBACK_PATTERN.search(trimmed)
    return match.group(1) if match else None


def require_canonical_id(reference: str | None) -> str:
    """Strict variant of :func:`resolve_canonical_id`.

    Raises
    ------
    InvalidReferenceError
        If *reference* cannot be resolved.
    """
    video_id = resolve_canonical_id(reference)
    if video_id is None:
        shown = (reference or "").strip() or "<empty>"
        raise InvalidReferenceError(
            f"Not a recognisable video reference: {shown}",
            hint=SUPPORTED_SHAPES_HINT,
        )
    return video_id
