"""Centralized logging configuration for issuegroup.

Provides rotating file logs with consistent formatting across all components.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Default configuration
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "issuegroup.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ROOT_LOGGER = "issuegroup"

_SENSITIVE_PATTERNS = [
    (r"ghp_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub PAT
    (r"gho_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub OAuth
    (r"github_pat_[a-zA-Z0-9_]{82}", "[GITHUB_TOKEN]"),  # Fine-grained PAT
    (r"Bearer [a-zA-Z0-9._-]+", "Bearer [REDACTED]"),
    (r"token=[a-zA-Z0-9._-]+", "token=[REDACTED]"),
]


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Set up logging with rotating file handler.

    Args:
        log_dir: Directory for log files. Defaults to 'logs' in current directory.
                 Can be overridden with ISSUEGROUP_LOG_DIR environment variable.
        log_file: Log file name. Defaults to 'issuegroup.log'.
        max_bytes: Maximum size per log file before rotation. Defaults to 10MB.
        backup_count: Number of backup files to keep. Defaults to 5.
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
               Can be overridden with ISSUEGROUP_LOG_LEVEL environment variable.
        console: Whether to also log to console. Defaults to True.

    Returns:
        The root issuegroup logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("ISSUEGROUP_LOG_DIR", DEFAULT_LOG_DIR)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if level is None:
        level = os.environ.get("ISSUEGROUP_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(log_level)

    # Re-running setup must not stack handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = log_dir / log_file
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.info("issuegroup logging initialized (level=%s, file=%s)", level, log_path)

    return logger


def sanitize_for_log(text: str) -> str:
    """Remove credentials from text before it is logged or raised.

    Args:
        text: Text that may contain sensitive data.

    Returns:
        Sanitized text safe for logging.
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = re.sub(pattern, replacement, result)
    return result
