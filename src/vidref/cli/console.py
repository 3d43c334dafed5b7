"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two proxies are exported: :data:`console` renders diagnostics on
stderr, :func:`emit` writes machine-readable results to stdout.
"""

from __future__ import annotations

import sys
from typing import Any

from vidref.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def emit(line: str) -> None:
	"""Write one result line to stdout, unstyled, for piping."""
	print(line, file=sys.stdout)


def escape_markup(text: str) -> str:
	"""Escape Rich markup in user- or provider-supplied text."""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return text
	return escape(text)
