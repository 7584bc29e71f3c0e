"""Configuration management utilities."""

import codecs
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class FileSettings:
    """Defaults applied by ``FileHandle`` when a call leaves them unspecified."""

    encoding: str = "utf-8"
    default_mode: str = "r+"
    csv_delimiter: str = ","
    csv_enclosure: str = '"'
    csv_escape: str = "\\"
    atomic_writes: bool = False

    def validate(self) -> "FileSettings":
        """
        Check that every setting is usable.

        Returns:
            The settings themselves, so construction and validation chain

        Raises:
            ConfigurationError: If any value is out of range
        """
        text_fields = (
            "encoding",
            "default_mode",
            "csv_delimiter",
            "csv_enclosure",
            "csv_escape",
        )
        for name in text_fields:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigurationError(
                    f"{name} must be a string", details=f"got {type(value).__name__}"
                )
        if not isinstance(self.atomic_writes, bool):
            raise ConfigurationError("atomic_writes must be a boolean")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(
                "Unknown encoding", details=self.encoding, original_exception=e
            ) from e
        if not self.default_mode:
            raise ConfigurationError("default_mode must not be empty")
        if len(self.csv_delimiter) != 1:
            raise ConfigurationError(
                "csv_delimiter must be a single character",
                details=repr(self.csv_delimiter),
            )
        if len(self.csv_enclosure) != 1:
            raise ConfigurationError(
                "csv_enclosure must be a single character",
                details=repr(self.csv_enclosure),
            )
        if len(self.csv_escape) > 1:
            raise ConfigurationError(
                "csv_escape must be empty or a single character",
                details=repr(self.csv_escape),
            )
        return self


class ConfigManager:
    """Loads ``FileSettings`` from a YAML file."""

    def __init__(self, config_path: Path) -> None:
        """
        Initialize ConfigManager with config file path.

        Args:
            config_path: Path to the configuration file

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        self._config_path = config_path
        self._config: dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file.

        Settings may sit at the top level of the document or under a
        ``files:`` section. An empty document yields default settings.
        """
        try:
            with open(self._config_path, encoding="utf-8") as yml_file:
                data = yaml.safe_load(yml_file.read())
        except OSError as e:
            raise ConfigurationError(
                "Cannot read configuration file",
                details=str(self._config_path),
                original_exception=e,
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Invalid YAML in configuration file",
                details=str(e),
                original_exception=e,
            ) from e

        if data is None:
            data = {}
        if isinstance(data, dict) and "files" in data:
            data = data["files"] or {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration must be a mapping",
                details=f"got {type(data).__name__}",
            )
        self._config = data

    def get_config(self) -> dict[str, Any]:
        """
        Get the loaded configuration.

        Returns:
            Raw settings mapping as read from the file
        """
        return self._config

    def get_settings(self) -> FileSettings:
        """
        Build validated settings from the loaded configuration.

        Returns:
            FileSettings with file values overriding the defaults

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(FileSettings)}
        unknown = sorted(set(self._config) - known)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration keys", details=", ".join(unknown)
            )
        return FileSettings(**self._config).validate()
