"""Custom exception hierarchy for vidref.

All exceptions that cross layer boundaries must inherit from
:class:`VidrefError`.  Raw third-party exceptions (e.g. from httpx or
yt-dlp) must NEVER propagate beyond the infrastructure layer — they
must be caught and re-raised as a typed subclass defined here.

Note that the *public* resolution helpers in :mod:`vidref.core` never
raise for bad input; they return ``None``.  These exceptions are used
at the provider boundary and by the strict ``require_*`` variants
consumed by the CLI.

Hierarchy
---------
VidrefError
├── InvalidReferenceError
├── InvalidDurationError
├── ConfigurationError
├── MetadataLookupError
│   └── VideoUnavailableError
└── EnvironmentError
"""

from __future__ import annotations


class VidrefError(Exception):
    """Base exception for all vidref errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input validation ------------------------------------------------------

class InvalidReferenceError(VidrefError):
    """Raised when a video reference cannot be resolved to a canonical ID."""


class InvalidDurationError(VidrefError):
    """Raised when a duration string does not match the ``PT#H#M#S`` grammar."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(VidrefError):
    """Raised when configuration values are present but unusable."""


# --- Metadata lookup -------------------------------------------------------

class MetadataLookupError(VidrefError):
    """Raised when a metadata backend fails to return a usable answer."""


class VideoUnavailableError(MetadataLookupError):
    """Raised when the target video is unavailable (private, removed, etc.)."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(VidrefError):
    """Raised when a required runtime dependency is not available."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
