"""Logging utilities for llmsteg."""

from __future__ import annotations

import logging
import os
from typing import Optional

from rich.logging import RichHandler

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_ENV = "LLMSTEG_LOG_LEVEL"


def configure_logging(level: Optional[str] = None, *, force: bool = False) -> None:
    """Configure the root logger for the application."""
    log_level = (level or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=force,
    )
