"""Core logging setup module.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
``setup_logging("swingscreener", ...)`` once so every ``swingscreener.*``
logger shares the same handlers.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import TextIO

from swingscreener.core.config import SystemConfig


_LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging(
    name: str,
    level: str = "INFO",
    log_dir: str | None = None,
    stream: TextIO | None = None,
    backup_days: int = 14,
) -> logging.Logger:
    """Attach console and optional daily-rotating file handlers to ``name``.

    Handlers are only added the first time; later calls just adjust the level.
    The console defaults to stderr since screen results are printed on stdout.
    Unknown level names fall back to INFO.
    """
    logger = logging.getLogger(name)
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    if not logger.handlers:
        console = logging.StreamHandler(stream or sys.stderr)
        console.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(console)

        if log_dir:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            file_handler = TimedRotatingFileHandler(
                filename=log_path / f"{name}.log",
                when="midnight",
                backupCount=backup_days,
                encoding="utf-8",
            )
            file_handler.suffix = "%Y-%m-%d"
            file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
            logger.addHandler(file_handler)

    return logger


def logging_from(system: SystemConfig, name: str = "swingscreener") -> logging.Logger:
    return setup_logging(name, level=system.log_level, log_dir=system.log_dir)
