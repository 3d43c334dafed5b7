"""Logging setup for the vidref CLI.

Library modules only ever do ``logging.getLogger(__name__)``; handlers
are attached here, once, by the CLI.  Rich is used for rendering when
installed, otherwise records go to stderr through a plain
:class:`logging.StreamHandler`.
"""

from __future__ import annotations

import logging

LOGGER_NAME = "vidref"


def _build_handler() -> logging.Handler:
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s [%(name)s] %(message)s"),
        )
        return handler
    return RichHandler(show_time=False, show_path=False, markup=False)


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the ``vidref`` logger and return it.

    Calling this more than once only adjusts the level; handlers are
    never duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if not logger.handlers:
        logger.addHandler(_build_handler())
        logger.propagate = False

    return logger
