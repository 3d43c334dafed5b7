"""``vidref doctor`` — environment diagnostics command.

Gathers runtime information and renders a Rich table summarising
whether the environment can resolve references and enrich them.

This module lives in the CLI layer — it may import from ``core`` and
the shared modules, and it renders via Rich.  No business logic
resides here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from vidref.cli import exit_codes
from vidref.cli.console import console
from vidref.config import ResolverConfig
from vidref.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _httpx_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the httpx row (required)."""
    try:
        import httpx
    except ImportError:
        return "httpx", "NOT INSTALLED", "[red]FAIL[/red]"
    return "httpx", str(getattr(httpx, "__version__", "unknown")), "[green]OK[/green]"


def _ytdlp_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp row (keyless backend)."""
    try:
        from yt_dlp.version import __version__ as ydl_ver

        return "yt-dlp", ydl_ver, "[green]OK[/green]"
    except ImportError:
        pass

    # Fallback: yt-dlp installed but version submodule unavailable.
    try:
        import yt_dlp  # noqa: F401

        return "yt-dlp", "unknown", "[green]OK[/green]"
    except ImportError:
        return "yt-dlp", "NOT INSTALLED", "[yellow]WARN[/yellow]"


def _rich_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the rich row (optional UI)."""
    try:
        from importlib.metadata import version

        import rich  # noqa: F401
    except ImportError:
        return "rich", "NOT INSTALLED", "[yellow]WARN[/yellow]"
    return "rich", version("rich"), "[green]OK[/green]"


def _api_key_check(config: ResolverConfig) -> tuple[str, str, str]:
    """Return (label, value, status) for the Data API credential row."""
    if config.has_api_key:
        return "API key", "configured", "[green]OK[/green]"
    return "API key", "not set (enrichment disabled)", "[yellow]WARN[/yellow]"


def _backend_check(config: ResolverConfig) -> tuple[str, str, str]:
    """Return (label, value, status) for the selected backend row."""
    return "Backend", config.backend, "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _vidref_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the vidref version row."""
    return "vidref", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def collect_checks(config: ResolverConfig) -> list[tuple[str, str, str]]:
    """Run every diagnostic and return the rows in display order."""
    return [
        _vidref_version_check(),
        _python_version_check(),
        _httpx_version_check(),
        _ytdlp_version_check(),
        _rich_version_check(),
        _backend_check(config),
        _api_key_check(config),
        _os_check(),
    ]


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nvidref doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config: ResolverConfig | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = collect_checks(config or ResolverConfig())
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print(
            "Some checks failed." if has_failure else "All checks passed.",
            file=sys.stderr,
        )
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="vidref doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
