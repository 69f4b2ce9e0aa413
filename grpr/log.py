"""Logging setup — diagnostics go to stderr through rich."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


def setup_logging(debug: bool = False) -> None:
    """Route the root logger through a RichHandler on stderr.

    Debug mode lowers the level to DEBUG and adds source paths to records.
    """
    level = logging.DEBUG if debug else logging.WARNING
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = RichHandler(
        console=console,
        show_path=debug,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    root_logger.addHandler(handler)

    logging.getLogger(__name__).debug("Logging initialized (debug=%s)", debug)
