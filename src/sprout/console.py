"""Shared rich console and logging setup."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

console = Console()

LOG_LEVEL_ENV = "SPROUT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def default_log_level() -> str:
    """Return the log level from SPROUT_LOG_LEVEL, or INFO."""
    level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    if level not in logging.getLevelNamesMapping():
        return DEFAULT_LOG_LEVEL
    return level


def configure_logging(level: str | None = None) -> None:
    """Route sprout log records through a RichHandler on the shared console."""
    handler = RichHandler(console=console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    sprout_logger = logging.getLogger("sprout")
    sprout_logger.handlers.clear()
    sprout_logger.addHandler(handler)
    sprout_logger.setLevel(level or default_log_level())
