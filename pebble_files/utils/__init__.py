"""Utility modules for pebble-files."""

from .config import ConfigManager, FileSettings
from .exceptions import ConfigurationError, FileSystemError, PebbleFilesError
from .file_ops import FileOperations

__all__ = [
    "ConfigManager",
    "FileSettings",
    "FileOperations",
    "PebbleFilesError",
    "ConfigurationError",
    "FileSystemError",
    "csv_dialect",
    "logging_config",
]
