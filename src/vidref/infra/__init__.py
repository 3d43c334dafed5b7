"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Data API (via httpx) and
yt-dlp.  Every raw third-party exception must be caught here and
re-raised as a :class:`~vidref.exceptions.VidrefError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from vidref.infra.youtube_data_api import YouTubeDataApiProvider
from vidref.infra.ytdlp_provider import YtDlpVideoProvider

__all__: list[str] = [
    "YouTubeDataApiProvider",
    "YtDlpVideoProvider",
]
