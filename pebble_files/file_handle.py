"""Convenience wrapper around a single file path and its open stream.

``FileHandle`` pairs a path with an optional, lazily opened stream. Metadata
and whole-file operations work on the path directly. Line, CSV and raw
reads and writes go through the stream opened with :meth:`FileHandle.open`.

Expected failures (missing file, closed stream, OS or decode errors,
malformed JSON/YAML/CSV) are reported by returning ``None`` and logged;
nothing is retried. Misuse such as an invalid mode string raises the
underlying ``ValueError``.
"""

from __future__ import annotations

import csv
import io
import json
import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType
from typing import IO, Any

import yaml

from .utils.config import FileSettings
from .utils.csv_dialect import format_record, parse_record
from .utils.exceptions import FileSystemError
from .utils.file_ops import FileOperations
from .utils.logging_config import get_logger

logger = get_logger("file_handle")


class FileHandle:
    """
    A filesystem path with an optional open stream.

    The stream is released on :meth:`close`, on leaving a ``with`` block and
    when the handle is garbage collected.

    Attributes:
        path: The file path this handle was created with
        settings: Defaults for encoding, open mode, CSV dialect and atomic writes
    """

    def __init__(
        self, path: str | os.PathLike[str], settings: FileSettings | None = None
    ) -> None:
        """
        Initialize FileHandle without touching the filesystem.

        Args:
            path: Target file path; the file does not need to exist
            settings: Optional defaults, ``FileSettings()`` when omitted
        """
        self._filename = os.fspath(path)
        self._path = Path(self._filename)
        self._settings = settings or FileSettings()
        self._stream: IO[Any] | None = None
        self._open_error: OSError | None = None

    def __del__(self) -> None:
        if getattr(self, "_stream", None) is not None:
            self.close()

    def __enter__(self) -> FileHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open() else "closed"
        return f"FileHandle({self._filename!r}, {state})"

    # ------------------------------------------------------------------

    @staticmethod
    def remove_if_exists(path: str | os.PathLike[str]) -> bool:
        """
        Delete ``path`` if it is a regular file.

        Args:
            path: File to remove

        Returns:
            True if a file was removed, False if there was nothing to remove
            or the removal failed
        """
        target = Path(path)
        if not target.is_file():
            return False
        try:
            target.unlink()
        except OSError as e:
            logger.warning(f"Could not remove {target}: {e}")
            return False
        return True

    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._filename

    @property
    def settings(self) -> FileSettings:
        return self._settings

    def exists(self) -> bool:
        """Return True if the path currently names a regular file."""
        return self._path.is_file()

    def _stat_time(self, field: str) -> int:
        if not self.exists():
            return 0
        try:
            return int(getattr(self._path.stat(), field))
        except OSError as e:
            logger.warning(f"Could not stat {self._filename}: {e}")
            return 0

    def access_time(self) -> int:
        """Last access time in epoch seconds, or 0 if the file does not exist."""
        return self._stat_time("st_atime")

    def change_time(self) -> int:
        """Inode change time in epoch seconds, or 0 if the file does not exist."""
        return self._stat_time("st_ctime")

    def modify_time(self) -> int:
        """Last modification time in epoch seconds, or 0 if the file does not exist."""
        return self._stat_time("st_mtime")

    def stream_stats(self) -> os.stat_result | None:
        """Return ``os.fstat`` of the open stream, or None when closed."""
        if not self.is_open():
            return None
        try:
            return os.fstat(self._stream.fileno())
        except OSError as e:
            logger.warning(f"Could not fstat {self._filename}: {e}")
            return None

    # ------------------------------------------------------------------
    # Whole-file content
    # ------------------------------------------------------------------

    def get_bytes(self) -> bytes | None:
        """
        Read the entire file without decoding.

        Any open stream is closed first. Whatever :meth:`put_content` wrote,
        text or bytes, comes back byte for byte.

        Returns:
            File contents, or None if the file does not exist or cannot be read
        """
        if not self.exists():
            logger.debug(f"No file to read at {self._filename}")
            return None

        self.close()
        try:
            return self._path.read_bytes()
        except OSError as e:
            logger.warning(f"Could not read {self._filename}: {e}")
            return None

    def get_content(self) -> str | None:
        """
        Read the entire file as text.

        Any open stream is closed first. Line endings are returned unchanged.

        Returns:
            File contents decoded with ``settings.encoding``, or None if the
            file does not exist or cannot be read or decoded
        """
        data = self.get_bytes()
        if data is None:
            return None

        try:
            return data.decode(self._settings.encoding)
        except UnicodeDecodeError as e:
            logger.warning(f"Could not decode {self._filename}: {e}")
            return None

    def get_json_content(self) -> list[Any] | dict[str, Any] | None:
        """
        Read the entire file and parse it as JSON.

        Returns:
            The parsed array or object, or None for missing or empty content,
            malformed JSON and scalar documents
        """
        content = self.get_content()
        if not content:
            return None

        try:
            data = json.loads(content)
        except ValueError as e:
            logger.debug(f"Invalid JSON in {self._filename}: {e}")
            return None
        return data if isinstance(data, (list, dict)) else None

    def get_yaml_content(self) -> list[Any] | dict[str, Any] | None:
        """Read the entire file as YAML; same contract as :meth:`get_json_content`."""
        content = self.get_content()
        if not content:
            return None

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            logger.debug(f"Invalid YAML in {self._filename}: {e}")
            return None
        return data if isinstance(data, (list, dict)) else None

    def put_content(self, data: str | bytes, atomic: bool | None = None) -> int | None:
        """
        Replace the file's content with ``data``.

        Any open stream is closed first; the file is created or truncated.

        Args:
            data: New content; text is encoded with ``settings.encoding``
            atomic: Write through a temp file and rename. Defaults to
                ``settings.atomic_writes``

        Returns:
            Number of bytes written, or None on failure
        """
        self.close()
        if atomic is None:
            atomic = self._settings.atomic_writes

        try:
            if isinstance(data, str):
                data = data.encode(self._settings.encoding)
            if atomic:
                return FileOperations.atomic_write_bytes(self._path, data)
            return self._path.write_bytes(data)
        except (OSError, UnicodeEncodeError, FileSystemError) as e:
            logger.warning(f"Could not write {self._filename}: {e}")
            return None

    def put_json_content(self, payload: Any, indent: int | None = 2) -> int | None:
        """Serialize ``payload`` as JSON and write it with :meth:`put_content`."""
        try:
            text = json.dumps(payload, ensure_ascii=False, indent=indent)
        except (TypeError, ValueError) as e:
            logger.warning(f"Cannot serialize JSON for {self._filename}: {e}")
            return None
        return self.put_content(text)

    def put_yaml_content(self, payload: Any) -> int | None:
        """Serialize ``payload`` as YAML and write it with :meth:`put_content`."""
        try:
            text = FileOperations.dump_yaml(payload)
        except yaml.YAMLError as e:
            logger.warning(f"Cannot serialize YAML for {self._filename}: {e}")
            return None
        return self.put_content(text)

    def delete(self) -> FileHandle:
        """
        Close the stream and remove the file if it exists.

        Returns:
            This handle, whether or not a file was removed
        """
        self.close()
        FileHandle.remove_if_exists(self._path)
        return self

    # ------------------------------------------------------------------
    # Open & close
    # ------------------------------------------------------------------

    def is_open(self) -> bool:
        return self._stream is not None and not self._stream.closed

    def open(self, mode: str | None = None) -> bool:
        """
        Open the file, closing any stream this handle already holds.

        Text modes use ``settings.encoding`` and ``newline=""`` so line
        endings pass through untranslated.

        Args:
            mode: Standard ``open()`` mode, ``settings.default_mode`` if omitted

        Returns:
            True if the file is now open

        Raises:
            ValueError: If ``mode`` is not a valid open mode
        """
        if mode is None:
            mode = self._settings.default_mode
        self.close()
        self._open_error = None

        try:
            if "b" in mode:
                self._stream = open(self._path, mode)
            else:
                self._stream = open(
                    self._path, mode, encoding=self._settings.encoding, newline=""
                )
        except OSError as e:
            logger.debug(f"Could not open {self._filename} with mode {mode!r}: {e}")
            self._stream = None
            self._open_error = e
        return self.is_open()

    def close(self) -> bool:
        """
        Close the stream if one is open.

        Returns:
            True if the handle is closed afterwards
        """
        if self._stream is None:
            return True

        try:
            self._stream.close()
        except OSError as e:
            logger.warning(f"Error closing {self._filename}: {e}")
        if self._stream.closed:
            self._stream = None
        return not self.is_open()

    @contextmanager
    def opened(self, mode: str | None = None) -> Iterator[FileHandle]:
        """
        Open the file for the duration of a ``with`` block.

        Args:
            mode: Standard ``open()`` mode, ``settings.default_mode`` if omitted

        Yields:
            This handle, open

        Raises:
            FileSystemError: If the file cannot be opened
        """
        if not self.open(mode):
            error = self._open_error
            raise FileSystemError(
                "Cannot open file",
                details=str(error) if error else None,
                original_exception=error,
                file_path=self._filename,
                operation="open",
            )
        try:
            yield self
        finally:
            self.close()

    @property
    def raw_stream(self) -> IO[Any] | None:
        """The underlying file object, or None when closed."""
        return self._stream if self.is_open() else None

    # ------------------------------------------------------------------
    # Reader
    # ------------------------------------------------------------------

    def end_of_file(self) -> bool:
        """Return True if closed or if the stream is positioned at end of file."""
        if not self.is_open():
            return True

        stream = self._stream
        try:
            if stream.readable():
                position = stream.tell()
                at_end = not stream.read(1)
                stream.seek(position)
                return at_end
            stream.flush()
            return stream.tell() >= os.fstat(stream.fileno()).st_size
        except (OSError, ValueError) as e:
            logger.debug(f"Could not probe end of file on {self._filename}: {e}")
            return True

    def _next_line(self) -> str:
        line = self._stream.readline()
        if isinstance(line, bytes):
            return line.decode(self._settings.encoding)
        return line

    def read_line(self) -> str | None:
        """
        Read the next line, terminator included.

        Returns:
            The line, or None when closed, at end of file or on a read error
        """
        if not self.is_open():
            return None

        try:
            line = self._next_line()
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read line from {self._filename}: {e}")
            return None
        return line or None

    def read_csv_line(
        self,
        delimiter: str | None = None,
        enclosure: str | None = None,
        escape: str | None = None,
    ) -> list[str] | None:
        """
        Read one CSV record from the stream.

        A quoted field may span several physical lines. Omitted dialect
        arguments fall back to ``settings``.

        Returns:
            The record's fields (``[]`` for a blank line), or None when closed,
            at end of file or for a malformed record
        """
        if not self.is_open():
            return None

        try:
            return parse_record(
                iter(self._next_line, ""),
                self._settings.csv_delimiter if delimiter is None else delimiter,
                self._settings.csv_enclosure if enclosure is None else enclosure,
                self._settings.csv_escape if escape is None else escape,
            )
        except (csv.Error, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read CSV record from {self._filename}: {e}")
            return None

    # ------------------------------------------------------------------
    # Writer
    # ------------------------------------------------------------------

    def write(self, text: str) -> int | None:
        """
        Write ``text`` at the current stream position.

        Returns:
            Number of bytes written, or None when closed or on a write error
        """
        if not self.is_open():
            return None

        stream = self._stream
        try:
            if isinstance(stream, io.TextIOBase):
                stream.write(text)
                return len(text.encode(stream.encoding))
            return stream.write(text.encode(self._settings.encoding))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not write to {self._filename}: {e}")
            return None

    def write_line(self, text: str) -> int | None:
        return self.write(text + "\n")

    def write_csv_line(
        self,
        fields: Iterable[Any],
        delimiter: str | None = None,
        enclosure: str | None = None,
        escape: str | None = None,
    ) -> int | None:
        """
        Format ``fields`` as one CSV record and write it.

        Returns:
            Number of bytes written, or None when closed or on failure
        """
        if not self.is_open():
            return None

        try:
            record = format_record(
                fields,
                self._settings.csv_delimiter if delimiter is None else delimiter,
                self._settings.csv_enclosure if enclosure is None else enclosure,
                self._settings.csv_escape if escape is None else escape,
            )
        except csv.Error as e:
            logger.warning(f"Could not format CSV record for {self._filename}: {e}")
            return None
        return self.write(record)
