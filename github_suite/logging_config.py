"""Logging setup for test runs: console output plus a persistent log file."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_file: Path | None = None, level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger once for the whole run.

    Args:
        log_file: Optional file that also receives every record.
        level: Level name for the root logger.

    Returns:
        The ``github_suite`` package logger.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    return logging.getLogger("github_suite")
