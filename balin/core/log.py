"""
Logging setup for command-line use.

Library modules only create `logging.getLogger(__name__)` loggers; this
installs a Rich handler on the root logger at the configured level.
"""
# @file purpose: Configure logging with Rich.

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", *, console: Console | None = None) -> None:
    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # selenium and urllib3 are chatty below WARNING
    for noisy in ("selenium", "urllib3", "WDM"):
        logging.getLogger(noisy).setLevel(max(logging.WARNING, logging.getLogger().level))
