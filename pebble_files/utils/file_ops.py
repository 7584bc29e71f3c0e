"""File operation utilities.

Provides the path-level primitives ``FileHandle`` builds on: directory
creation, atomic writes and YAML serialization.
"""

from pathlib import Path
from typing import Any

import yaml

from .exceptions import FileSystemError


class FileOperations:
    """Handles file and directory operations."""

    @staticmethod
    def create_dir(dir_path: Path) -> None:
        """
        Create directory if it doesn't exist.

        Args:
            dir_path: Path to the directory to create
        """
        if not dir_path.exists():
            dir_path.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def atomic_write_bytes(target_path: Path, data: bytes) -> int:
        """Write bytes to a temp file and atomically rename into place.

        Args:
            target_path: Final destination path
            data: Bytes content to write

        Returns:
            Number of bytes written

        Raises:
            FileSystemError: If the temp file cannot be written or renamed
        """
        tmp_path = target_path.with_suffix(target_path.suffix + ".tmp")
        try:
            FileOperations.create_dir(target_path.parent)
            with open(tmp_path, "wb") as f:
                f.write(data)
                f.flush()
            tmp_path.replace(target_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise FileSystemError(
                "Atomic write failed",
                details=str(e),
                original_exception=e,
                file_path=str(target_path),
                operation="atomic_write",
            ) from e
        return len(data)

    @staticmethod
    def dump_yaml(payload: Any) -> str:
        """Serialize an object as YAML text.

        Args:
            payload: Serializable object
        """
        return yaml.dump(payload, allow_unicode=True, indent=2)
