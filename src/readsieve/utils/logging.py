"""Centralized logging utilities for readsieve.

Provides a single place to configure logging and fetch namespaced loggers.
All log output goes to stderr; stdout carries the filtered FASTQ stream.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


APP_LOGGER_NAME = "readsieve"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

# Log rotation settings
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """Configure logging for the 'readsieve' namespace.

    Args:
        level: Logging level for the application logger
        log_file: Optional path for log file output
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)

    Notes:
        - Root logger kept at WARNING to suppress third-party noise
        - Console handler writes to stderr, never stdout
        - File handler (if any) is detailed at DEBUG and rotates
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(level)
    # Avoid duplicate logs if called multiple times
    for h in list(app_logger.handlers):
        app_logger.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    app_logger.addHandler(console)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            app_logger.addHandler(file_handler)
            # File handler wants DEBUG even when the console is quieter
            app_logger.setLevel(logging.DEBUG)
        except OSError as e:
            import warnings
            warnings.warn(f"Failed to create log file {log_file}: {e}")

    app_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger under 'readsieve' root."""
    base = logging.getLogger(APP_LOGGER_NAME)
    return base.getChild(name)


def level_from_verbosity(verbose: int) -> int:
    """Map a -v count to a logging level (0: WARNING, 1: INFO, 2+: DEBUG)."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


class LogTemplates:
    """Standard log message templates for consistent logging across modules."""

    # Run lifecycle
    RUN_START = "Filtering reads ({mode} mode, {threads} thread(s))"
    RUN_COMPLETE = "Filtering complete in {duration:.1f}s"

    # Contamination index
    INDEX_START = "Building contamination index from {path}"
    INDEX_SUCCESS = "Contamination index ready: {count:,} reference sequence(s)"

    # Processing statistics
    FILTERING_STATS = "Filtered: {kept:,} kept, {removed:,} removed ({percent:.1f}% pass rate)"
    DROP_REASON = "  {reason}: {count:,}"
