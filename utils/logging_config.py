"""Loguru sinks for the command line run: terse console output plus a debug log file."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"
LOG_FILE_PATTERN = "staples_checklist_{time:YYYY-MM-DD}.log"


def configure_logging(logs_dir: Path, level: str = "INFO") -> Path | None:
    """
    Route loguru to stderr at ``level`` and to a rotating debug file under ``logs_dir``.

    Returns the file pattern in use when file logging is available, otherwise None.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, backtrace=True, diagnose=False)

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning(f"File logging disabled; unable to create {logs_dir}: {exc}")
        return None

    log_file = logs_dir / LOG_FILE_PATTERN
    logger.add(
        log_file,
        level="DEBUG",
        format=FILE_FORMAT,
        rotation="5 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
    )
    logger.debug(f"Logging to {log_file} (console level {level})")
    return log_file
