# model_inspect/logging.py
"""
Logging setup using Loguru, friendly for concurrent directory scans.

- Debug / quiet toggles
- Human-readable console formatting on stderr, so stdout stays clean for
  tables and tool payloads
"""
from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger


def _level(debug: bool, quiet: bool) -> str:
    if debug:
        return "DEBUG"
    return "WARNING" if quiet else "INFO"


def configure_logging(*, debug: bool = False, quiet: bool = False, sink: TextIO | None = None) -> None:
    """Configure loguru logging sinks.

    Args:
        debug: Enable verbose debug logging (parse timings, partial KV reads).
            Wins over ``quiet``.
        quiet: Only report warnings and errors (corrupt files in a listing).
        sink: Stream to log to; defaults to stderr.
    """
    logger.remove()
    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
        "| <level>{level: <8}</level> "
        "| pid={process} tid={thread} "
        "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> "
        "- <level>{message}</level>"
    )
    logger.add(
        sink or sys.stderr,
        level=_level(debug, quiet),
        format=fmt,
        enqueue=True,
        backtrace=debug,
        diagnose=debug,
    )
