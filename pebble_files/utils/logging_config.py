"""Logging configuration for pebble-files.

Library modules only create named loggers through :func:`get_logger`.
Applications that want the package's messages without configuring logging
themselves call :func:`setup_logging`, which touches only the ``pebble_files``
logger and leaves the root logger to the host application.
"""

import logging
import sys
from pathlib import Path

PACKAGE_LOGGER = "pebble_files"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: Path | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Attach handlers to the package logger.

    Calling it again replaces the handlers from the previous call. Records
    stop propagating to the root logger so they are not emitted twice.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional file to append records to; its directory is created
        format_string: Optional format, ``DEFAULT_FORMAT`` when omitted

    Returns:
        The ``pebble_files`` package logger
    """
    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT, datefmt="%d-%b-%y %H:%M:%S"
    )
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old_handler in list(package_logger.handlers):
        package_logger.removeHandler(old_handler)
        old_handler.close()

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger nested under the package logger, e.g. ``pebble_files.file_handle``."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
