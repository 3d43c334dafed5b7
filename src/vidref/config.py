"""Explicit configuration for the resolver and its metadata backends.

Library code never reads the process environment on its own; callers
build a :class:`ResolverConfig` and pass it in.  :meth:`ResolverConfig.from_env`
exists for the CLI, which is the only place that touches ``os.environ``.

Environment variables (read by :meth:`ResolverConfig.from_env`)
----------------------------------------------------------------
``YOUTUBE_API_KEY``
    Data API v3 key.  Absent or blank means "not configured", which is
    a valid state: lookups degrade to ``None``.
``VIDREF_API_ENDPOINT``
    Override for the ``videos`` endpoint (tests, proxies).
``VIDREF_TIMEOUT``
    Request timeout in seconds.  Unset keeps the HTTP client default.
``VIDREF_BACKEND``
    ``api`` (default) or ``ytdlp``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from vidref.exceptions import ConfigurationError

DEFAULT_API_ENDPOINT: str = "https://www.googleapis.com/youtube/v3/videos"

BACKENDS: tuple[str, ...] = ("api", "ytdlp")


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Immutable settings consumed by :class:`~vidref.resolver.VideoReferenceResolver`."""

    api_key: str | None = None
    """Data API credential, or ``None`` when enrichment is not configured."""

    api_endpoint: str = DEFAULT_API_ENDPOINT
    """URL of the Data API ``videos`` list endpoint."""

    timeout: float | None = None
    """Per-request timeout in seconds; ``None`` keeps the client default."""

    backend: str = "api"
    """Metadata backend: ``"api"`` (Data API) or ``"ytdlp"`` (keyless)."""

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown metadata backend: {self.backend!r}",
                hint=f"Choose one of: {', '.join(BACKENDS)}",
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(
                f"Timeout must be positive, got {self.timeout}",
            )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def with_backend(self, backend: str) -> ResolverConfig:
        """Return a copy using *backend* (validated like the constructor)."""
        return replace(self, backend=backend)

    # ------------------------------------------------------------------
    # Environment loading (CLI only)
    # ------------------------------------------------------------------

    @classmethod
    def from_env(
        cls,
        env_file: str | Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> ResolverConfig:
        """Build a config from environment variables.

        A ``.env`` file is loaded first via python-dotenv (existing
        variables win).  Passing *environ* skips both the ``.env`` file
        and ``os.environ`` so tests can supply a plain dict.

        Raises
        ------
        ConfigurationError
            If ``VIDREF_TIMEOUT`` is not a positive number or
            ``VIDREF_BACKEND`` names an unknown backend.
        """
        if environ is None:
            from dotenv import load_dotenv

            load_dotenv(dotenv_path=env_file, override=False)
            environ = os.environ

        api_key = (environ.get("YOUTUBE_API_KEY") or "").strip() or None
        endpoint = (environ.get("VIDREF_API_ENDPOINT") or "").strip() or DEFAULT_API_ENDPOINT
        backend = (environ.get("VIDREF_BACKEND") or "api").strip().lower()

        raw_timeout = (environ.get("VIDREF_TIMEOUT") or "").strip()
        timeout: float | None = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(
                    f"VIDREF_TIMEOUT must be a number, got {raw_timeout!r}",
                ) from exc

        return cls(
            api_key=api_key,
            api_endpoint=endpoint,
            timeout=timeout,
            backend=backend,
        )
