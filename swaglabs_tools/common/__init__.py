"""
================================================================================
Swag Labs Tools Common Utilities
================================================================================

Shared logging setup and filesystem helpers for the suites and tools.

Exports:
    - init_logger: Configure the global Loguru logger once per process
    - ensure_directory: Create a directory (and parents) if missing
    - sanitize_filename: Make an arbitrary test name safe for file names

Usage:
    from swaglabs_tools.common import init_logger, ensure_directory

    init_logger(level="INFO", log_file="reports/logs/run.log")
    screenshots = ensure_directory("reports/screenshots")

================================================================================
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
)

_logger_initialized: bool = False


def init_logger(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_str: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    force: bool = False,
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call repeatedly; only the first call (or a call with
    ``force=True``) replaces the sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for a rotating file sink
        format_str: Custom log format string
        rotation: Rotation policy for the file sink
        retention: Retention policy for the file sink
        force: Reconfigure even if already initialized
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    log_format = format_str or DEFAULT_LOG_FORMAT

    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        ensure_directory(Path(log_file).parent)
        logger.add(
            str(log_file),
            level=level.upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=rotation,
            retention=retention,
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Create ``path`` (with parents) if it does not exist and return it.
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def sanitize_filename(name: Optional[str]) -> str:
    """
    Replace characters that are unsafe in file names with underscores.

    Examples:
        >>> sanitize_filename("test_login[standard_user-secret]")
        'test_login_standard_user-secret_'
    """
    if not name:
        return "unknown_test"
    return re.sub(r"[^A-Za-z0-9._-]", "_", name)


__all__ = [
    "init_logger",
    "ensure_directory",
    "sanitize_filename",
    "DEFAULT_LOG_FORMAT",
]
