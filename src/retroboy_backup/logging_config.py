"""Logging configuration for RetroBoy Backup Manager.

Provides centralized logging setup with file and console handlers.
Log files are stored in the application's config directory.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config.paths import AppPaths

LOGGER_NAME = "retroboy_backup"
LOG_FILENAME = "retroboy_backup.log"


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure application-wide logging.

    Sets up logging to both file and console (if debug mode).
    Log file is stored in the config directory as retroboy_backup.log

    Args:
        debug: If True, also log to console at DEBUG level
        log_dir: Directory for the log file, uses the config directory if None

    Returns:
        The root logger for the application
    """
    # Ensure log directory exists
    log_dir = log_dir or AppPaths.CONFIG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Close handlers from a previous setup before dropping them
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    # File handler - always logs DEBUG and above
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

    # Console handler - only in debug mode
    if debug:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_formatter = logging.Formatter(
            "%(levelname)s - %(name)s - %(message)s"
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        name: Module name (e.g., 'reconciliation', 'backup_service')

    Returns:
        A logger instance for the module
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
