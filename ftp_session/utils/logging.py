"""Logging configuration for the FTP session manager.

All loggers live under the ``ftp_session`` hierarchy. Records pass
through a formatter that redacts passwords so credentials never reach
the console or a log file.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = "ftp_session"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Secrets to redact from log output
REDACTION_PATTERNS = [
    (re.compile(r'(password["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'(passwd["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    # Raw FTP PASS command
    (re.compile(r'\bPASS \S+'), 'PASS [REDACTED]'),
    # FTP URLs with credentials
    (re.compile(r'ftp://[^:/\s]+:[^@\s]+@'), 'ftp://[REDACTED]@'),
]


def redact(message: str) -> str:
    """Replace every credential found in ``message``."""
    for pattern, replacement in REDACTION_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class RedactingFormatter(logging.Formatter):
    """Formatter that strips credentials from formatted records."""

    def format(self, record: logging.LogRecord) -> str:
        return redact(super().format(record))


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """
    Configure the ``ftp_session`` logger.

    Args:
        level: Logging level (default INFO)
        log_file: Optional file path for log output
        console: Whether to log to stderr (default True)

    Returns:
        Configured root logger of the package
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = RedactingFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name, usually the calling module's ``__name__``

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
