"""
Logging configuration for docx-flow.

Modules log through ``logging.getLogger(__name__)``; this module wires the
package logger to a rich console handler or a plain stream/file handler.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER_NAME = "docx_flow"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _validate_level(level: str) -> int:
    if not isinstance(level, str) or level.upper() not in VALID_LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    return getattr(logging, level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def create_rich_handler(console: Optional[Console] = None, show_path: bool = False) -> RichHandler:
    """Build a rich handler with the message-only formatter used for console output."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=show_path,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def configure_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    use_rich: bool = True,
    max_file_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for non-rich handlers
        log_file: Optional log file path (rotated)
        use_rich: Use a rich console handler instead of a plain stream handler
        max_file_size: Maximum log file size in bytes
        backup_count: Number of backup files to keep

    Returns:
        The configured package logger
    """
    numeric_level = _validate_level(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()

    if use_rich:
        console_handler: logging.Handler = create_rich_handler()
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
    console_handler.setLevel(numeric_level)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_file_size, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        package_logger.addHandler(file_handler)

    return package_logger


def set_log_level(level: str) -> None:
    """Change the level of the package logger and its handlers."""
    numeric_level = _validate_level(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(numeric_level)
    for handler in package_logger.handlers:
        handler.setLevel(numeric_level)
