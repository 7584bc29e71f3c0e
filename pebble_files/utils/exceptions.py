"""Exception hierarchy for pebble-files.

Most ``FileHandle`` operations report expected failures by returning ``None``.
The exceptions below are raised where a caller explicitly asks for a
guarantee, such as loading configuration or entering an ``opened()`` block.
"""


class PebbleFilesError(Exception):
    """Base exception class for all pebble-files errors.

    ``FileHandle`` itself reports ordinary misses by returning ``None``. This
    hierarchy covers the paths that must fail loudly: loading settings and
    entering an ``opened()`` block. Catching ``PebbleFilesError`` handles both.

    Attributes:
        message: Human-readable error message
        details: Optional additional details about the error
        original_exception: Optional original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        details: str | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        """
        Initialize PebbleFilesError.

        Args:
            message: Human-readable error message
            details: Optional additional details about the error
            original_exception: Optional original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.original_exception = original_exception

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(PebbleFilesError):
    """Raised when a settings file cannot be loaded or holds invalid values."""


class FileSystemError(PebbleFilesError):
    """Raised when a file system operation fails.

    This exception is raised when a file cannot be opened for a scoped block
    or an atomic write cannot be completed.
    """

    def __init__(
        self,
        message: str,
        details: str | None = None,
        original_exception: Exception | None = None,
        file_path: str | None = None,
        operation: str | None = None,
    ) -> None:
        """
        Initialize FileSystemError.

        Args:
            message: Human-readable error message
            details: Optional additional details about the error
            original_exception: Optional original exception that caused this error
            file_path: Optional file path involved in the operation
            operation: Optional file system operation that failed
        """
        super().__init__(message, details, original_exception)
        self.file_path = file_path
        self.operation = operation
