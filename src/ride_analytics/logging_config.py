"""Logging setup for the command-line entry point."""

import logging
from typing import Optional

from rich.logging import RichHandler

from .config import get_settings


def configure_logging(level: Optional[str] = None) -> None:
    """Route the package's loggers through rich."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
    # APScheduler logs every job run at INFO
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
