"""
Logging utilities shared by every module of the task manager service.

Key Features:
    - One log file per process run, grouped in date directories
    - Size-based rotation that survives file permission errors
    - Console output with a shorter format
    - Automatic cleanup of log directories older than a week
"""

import datetime
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE_BASENAME = "task_manager"

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
)
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MAX_LOG_SIZE_BYTES = 5 * 1024 * 1024
MAX_BACKUP_COUNT = 10

_RUN_STARTED_AT = datetime.datetime.now()
_GLOBAL_LOG_FILE = (
    LOG_DIR
    / _RUN_STARTED_AT.strftime("%Y-%m-%d")
    / f"{LOG_FILE_BASENAME}_{_RUN_STARTED_AT.strftime('%Y-%m-%d_%H-%M-%S')}.log"
)

# Shared across loggers so every module writes to the same file
_file_handler: logging.Handler | None = None


class SafeRotatingFileHandler(RotatingFileHandler):
    """Size-based rotation handler that keeps writing when rollover fails."""

    def doRollover(self):
        try:
            super().doRollover()
        except (OSError, PermissionError) as e:
            sys.stderr.write(
                f"Log rotation failed: {e}. Continuing with current log file.\n"
            )
            sys.stderr.flush()


def _get_log_level(level_str: str) -> int:
    level = logging.getLevelName(level_str.upper())
    return level if isinstance(level, int) else logging.INFO


def _get_file_handler() -> logging.Handler:
    global _file_handler
    if _file_handler is None:
        _GLOBAL_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        _file_handler = SafeRotatingFileHandler(
            _GLOBAL_LOG_FILE,
            maxBytes=MAX_LOG_SIZE_BYTES,
            backupCount=MAX_BACKUP_COUNT,
            encoding="utf-8",
        )
        _file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        cleanup_old_logs(keep_days=7)
    return _file_handler


def setup_logger(name: str, level: str | None = None) -> logging.Logger:
    """Set up a named logger with console and file handlers."""
    logger = logging.getLogger(name)
    log_level = _get_log_level(level or DEFAULT_LOG_LEVEL)
    logger.setLevel(log_level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)
    logger.addHandler(_get_file_handler())

    return logger


def cleanup_old_logs(keep_days: int = 7) -> int:
    """Delete date directories older than ``keep_days``. Returns files removed."""
    cutoff = datetime.datetime.now() - datetime.timedelta(days=keep_days)
    deleted_count = 0

    if not LOG_DIR.exists():
        return deleted_count

    for date_dir in LOG_DIR.iterdir():
        if not date_dir.is_dir():
            continue
        try:
            dir_date = datetime.datetime.strptime(date_dir.name, "%Y-%m-%d")
        except ValueError:
            # Not one of ours
            continue
        if dir_date >= cutoff:
            continue

        for log_file in date_dir.glob(f"{LOG_FILE_BASENAME}_*.log*"):
            try:
                log_file.unlink()
                deleted_count += 1
            except (PermissionError, FileNotFoundError):
                continue
        try:
            date_dir.rmdir()
        except OSError:
            pass  # still holds files we could not delete

    return deleted_count
