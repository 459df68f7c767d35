from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from textual.logging import TextualHandler


def configure_logging(*, verbose: bool = False, inside_tui: bool = False) -> None:
    """Route log records to stderr, or to textual's devtools log for the TUI.

    The TUI owns the terminal, so stderr output would draw over it.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler: logging.Handler
    if inside_tui:
        handler = TextualHandler()
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
