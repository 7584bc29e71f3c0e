"""pebble-files: a convenience wrapper around a file path and its stream."""

from .file_handle import FileHandle
from .utils.config import ConfigManager, FileSettings
from .utils.exceptions import ConfigurationError, FileSystemError, PebbleFilesError
from .utils.logging_config import get_logger, setup_logging

__all__ = [
    "FileHandle",
    "FileSettings",
    "ConfigManager",
    "PebbleFilesError",
    "ConfigurationError",
    "FileSystemError",
    "get_logger",
    "setup_logging",
]
