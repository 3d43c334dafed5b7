"""CLI application entry point and command routing for vidref.

This module is the **sole error boundary** for the entire application.
It catches :class:`~vidref.exceptions.VidrefError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  layer and the :class:`~vidref.resolver.VideoReferenceResolver` façade.
* Results meant for piping go to stdout via :func:`emit`; everything
  else is rendered on stderr.
* This module is the only place that reads configuration from the
  environment and the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from vidref.cli import exit_codes
from vidref.cli.console import console, emit, escape_markup
from vidref.config import BACKENDS, ResolverConfig
from vidref.exceptions import VidrefError
from vidref.logging_config import setup_logging
from vidref.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``vidref resolve REF...``   — print canonical video IDs
    * ``vidref duration SPEC...`` — convert ``PT#H#M#S`` to seconds
    * ``vidref info REF...``      — resolve and enrich with metadata
    * ``vidref doctor``           — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="vidref",
        description="Resolve YouTube video references and look up their metadata.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    resolve = commands.add_parser("resolve", help="Print the canonical ID of each reference.")
    resolve.add_argument("references", nargs="+", metavar="REF")

    duration = commands.add_parser("duration", help="Convert PT#H#M#S durations to seconds.")
    duration.add_argument("specs", nargs="+", metavar="SPEC")

    info = commands.add_parser("info", help="Resolve references and show video metadata.")
    info.add_argument("references", nargs="+", metavar="REF")
    info.add_argument(
        "--backend",
        choices=BACKENDS,
        default=None,
        help="Metadata backend (default: VIDREF_BACKEND or 'api').",
    )
    info.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print results as JSON on stdout.",
    )

    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_config() -> ResolverConfig:
    """Read configuration from ``.env`` and the process environment."""
    return ResolverConfig.from_env()


def _render_error(exc: VidrefError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_resolve(references: Sequence[str]) -> int:
    """Emit one canonical ID per resolvable reference."""
    from vidref.core.video_reference import require_canonical_id

    code = exit_codes.SUCCESS
    for reference in references:
        try:
            emit(require_canonical_id(reference))
        except VidrefError as exc:
            _render_error(exc)
            code = exit_codes.GENERAL_ERROR
    return code


def _handle_duration(specs: Sequence[str]) -> int:
    """Emit ``seconds<TAB>human`` for each well-formed duration."""
    from vidref.core.duration import format_duration_human, require_duration_seconds

    code = exit_codes.SUCCESS
    for spec in specs:
        try:
            seconds = require_duration_seconds(spec)
        except VidrefError as exc:
            _render_error(exc)
            code = exit_codes.GENERAL_ERROR
            continue
        emit(f"{seconds}\t{format_duration_human(seconds)}")
    return code


def _handle_info(references: Sequence[str], backend: str | None, as_json: bool) -> int:
    """Resolve and enrich each reference.

    Missing metadata is reported but is not an error; only
    unresolvable references change the exit code.
    """
    from vidref.cli.render import display_metadata, display_unavailable
    from vidref.core.models import LookupStatus
    from vidref.core.video_reference import require_canonical_id
    from vidref.resolver import VideoReferenceResolver

    config = _load_config()
    if backend is not None:
        config = config.with_backend(backend)

    code = exit_codes.SUCCESS
    results: list[dict[str, object]] = []
    hint_shown = False

    with VideoReferenceResolver(config) as resolver:
        for reference in references:
            try:
                video_id = require_canonical_id(reference)
            except VidrefError as exc:
                _render_error(exc)
                code = exit_codes.GENERAL_ERROR
                continue

            lookup = resolver.lookup(video_id)
            logger.debug("Lookup for %s finished with %s", video_id, lookup.status.value)

            if as_json:
                results.append(
                    {
                        "reference": reference,
                        "videoId": video_id,
                        "status": lookup.status.value,
                        "metadata": lookup.metadata.to_dict() if lookup.metadata else None,
                    }
                )
            elif lookup.metadata is not None:
                display_metadata(lookup.metadata)
            else:
                display_unavailable(video_id, lookup)

            if lookup.status is LookupStatus.NOT_CONFIGURED and not hint_shown:
                console.print(
                    "[yellow]Hint:[/yellow] set YOUTUBE_API_KEY or pass --backend ytdlp"
                )
                hint_shown = True

    if as_json:
        emit(json.dumps(results, indent=2, ensure_ascii=False))
    return code


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from vidref.cli.doctor import run_doctor

    return run_doctor(_load_config())


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the vidref CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    setup_logging("DEBUG" if args.verbose else "WARNING")

    if args.command == "resolve":
        return _handle_resolve(args.references)
    if args.command == "duration":
        return _handle_duration(args.specs)
    if args.command == "info":
        return _handle_info(args.references, args.backend, args.as_json)
    return _handle_doctor()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except VidrefError as exc:
        _render_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
