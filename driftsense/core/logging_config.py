"""
Logging configuration for driftsense.

Sets up the package logger with console and rotating file output. Level, file
name and rotation limits come from settings unless given explicitly, so an
application embedding several engines can route each to its own file.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_file(logger_name: str, log_file: Union[str, Path, None] = None) -> Path:
    """
    Path of the rotating log file for `logger_name`.

    An explicit `log_file` wins; otherwise settings.log_file_name (or
    "<logger_name>.log") inside settings.logs_dir.
    """
    if log_file is not None:
        return Path(log_file)
    return settings.logs_dir / (settings.log_file_name or f"{logger_name}.log")


def setup_logging(
    logger_name: str = "driftsense",
    level: Optional[str] = None,
    log_file: Union[str, Path, None] = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Child loggers created with ``logging.getLogger(__name__)`` inside the
    package propagate to this one.

    Args:
        logger_name: Name of the logger (typically the package name)
        level: Log level; defaults to settings.log_level
        log_file: Log file path; defaults to resolve_log_file()

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Already configured: keep the existing handlers
    if logger.handlers:
        return logger

    level = (level or settings.log_level).upper()
    logger.setLevel(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    path = resolve_log_file(logger_name, log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger


# Package root logger
logger = setup_logging()
