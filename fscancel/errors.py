"""Error types raised by cancellation tokens and their callers."""

from __future__ import annotations


class OperationCancelledError(Exception):
    """Raised at a checkpoint once cancellation has been requested.

    Units of work are expected to catch this and abort quietly; it is a
    control-flow signal, not a failure.
    """

    def __init__(self, file_path: str | None = None) -> None:
        self.file_path = file_path
        message = "Operation cancelled"
        if file_path:
            message = f"Operation cancelled (signal file: {file_path})"
        super().__init__(message)


class InvalidDescriptorError(ValueError):
    """Raised when a token descriptor cannot be parsed."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Invalid token descriptor: {details}")


class InvalidIdentityError(ValueError):
    """Raised when a token identity would not map to a file in the temp directory."""

    def __init__(self, identity: str) -> None:
        super().__init__(
            f"Invalid token identity {identity!r}. Use a non-empty name without "
            "path separators."
        )
