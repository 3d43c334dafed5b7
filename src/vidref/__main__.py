"""Allow ``python -m vidref`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m vidref`` behaves identically to the ``vidref``
console script.
"""

from __future__ import annotations

from vidref.cli.app import cli

if __name__ == "__main__":
    cli()
