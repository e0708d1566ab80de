"""
Centralized logging configuration.
Every module gets its logger through get_logger(__name__).

Handlers live only on the application logger ('leadgen'); module loggers
are its children and propagate to it, so each record is written once.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .constants import (
    APP_LOGGER_NAME, LOG_LEVEL, LOG_FORMAT, LOG_FILE_NAME,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)
from .settings import get_settings


def setup_logger(log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure the application logger once and return it.

    Console handler at INFO, rotating file handler at DEBUG under
    `log_dir` (default: Settings.logs_dir).
    """
    logger = logging.getLogger(APP_LOGGER_NAME)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL))

    # Console handler - INFO level
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console)

    # File handler with rotation - DEBUG level
    log_dir = Path(log_dir or get_settings().logs_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Module logger under the application logger.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)

    `leadgen.pipeline.states` stays as is; `api.main` becomes
    `leadgen.api.main`.
    """
    setup_logger()
    if not name or name == APP_LOGGER_NAME:
        return logging.getLogger(APP_LOGGER_NAME)
    if not name.startswith(APP_LOGGER_NAME + "."):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


# Singleton logger for quick imports
# Usage: from config.logging_config import logger
logger = setup_logger()
